from searcher.models import ContextRange


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))

# Merge the context windows of every match into sorted, non-touching inclusive ranges.
def build_ranges(match_indexes: list[int], *, line_count: int,
                 before: int = 0, after: int = 0) -> list[ContextRange]:
    if before < 0 or after < 0:
        raise ValueError("before/after must be >= 0")

    if line_count <= 0:
        return []

    last_line = line_count - 1
    # Without context every match stays a one-line range, even next to another match
    reach = 1 if before > 0 or after > 0 else 0
    merged: list[list[int]] = []

    for match in match_indexes:
        start = _clamp(match - before, 0, last_line)
        end = _clamp(match + after, 0, last_line)

        if merged and start <= merged[-1][1] + reach:
            # Overlapping or touching the previous window
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])

    return [ContextRange(start, end) for start, end in merged]

def range_indexes(ranges: list[ContextRange]) -> list[int]:
    indexes: list[int] = []
    for start, end in ranges:
        indexes.extend(range(start, end + 1))

    return indexes
