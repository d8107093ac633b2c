import re
import string

MIN_HINT_LENGTH = 3

WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")

OCTAL_DIGITS = "01234567"
HEX_ESCAPE_DIGITS = {"x": 2, "u": 4, "U": 8}

# Inline flags that change case handling or whitespace for the whole pattern: (?i) (?x) (?ai:...)
_CASE_OR_VERBOSE_FLAGS = re.compile(r"\(\?[aiLmsux-]*[ix]")


# Skip a [...] character class starting at position i, return index after the closing bracket
def _skip_char_class(pattern: str, i: int) -> int:
    j = i + 1
    if j < len(pattern) and pattern[j] == "^":
        j += 1
    if j < len(pattern) and pattern[j] == "]":
        j += 1

    while j < len(pattern) and pattern[j] != "]":
        if pattern[j] == "\\":
            j += 1
        j += 1

    return j + 1

# Length of the escape sequence starting at the backslash at position i, arguments included
def _escape_length(pattern: str, i: int) -> int:
    if i + 1 >= len(pattern):
        return 1

    escaped = pattern[i + 1]
    rest = pattern[i + 2:]

    if escaped in HEX_ESCAPE_DIGITS:
        return 2 + HEX_ESCAPE_DIGITS[escaped]

    if escaped == "0":
        # \0, \01, \012
        octal = len(rest[:2]) - len(rest[:2].lstrip(OCTAL_DIGITS))
        return 2 + octal

    if escaped in OCTAL_DIGITS and len(rest) >= 2 and rest[0] in OCTAL_DIGITS and rest[1] in OCTAL_DIGITS:
        # \101
        return 4

    if escaped.isdigit():
        # Backreference \1 .. \99
        return 3 if rest[:1].isdigit() else 2

    return 2

# Collect the literal word-character runs every match of the pattern must contain.
# Returns None when the pattern has a top-level alternation (nothing is required).
def required_runs(pattern: str) -> list[str] | None:
    runs: list[str] = []
    current: list[str] = []
    depth = 0
    i = 0

    def flush() -> None:
        if current:
            runs.append("".join(current))
            current.clear()

    while i < len(pattern):
        ch = pattern[i]

        if ch == "\\":
            # \w, \b, \x41, \101, \1 ... never part of a literal run
            flush()
            i += _escape_length(pattern, i)
            continue

        if ch == "[":
            flush()
            i = _skip_char_class(pattern, i)
            continue

        if ch == "(":
            flush()
            depth += 1
        elif ch == ")":
            flush()
            depth = max(0, depth - 1)
        elif ch in "?*":
            # Previous character becomes optional
            if depth == 0 and current:
                current.pop()
            flush()
        elif ch == "+":
            flush()
        elif ch == "{":
            if depth == 0 and current:
                current.pop()
            flush()
            closing = pattern.find("}", i)
            if closing != -1:
                i = closing
        elif ch == "|":
            if depth == 0:
                return None
        elif depth == 0 and ch in WORD_CHARS:
            current.append(ch)
        else:
            flush()

        i += 1

    flush()
    return runs

# Longest required literal (ties -> first occurrence) or None
def extract_hint(pattern: str) -> str | None:
    if _CASE_OR_VERBOSE_FLAGS.search(pattern):
        return None

    runs = required_runs(pattern)
    if not runs:
        return None

    candidates = [run for run in runs if len(run) >= MIN_HINT_LENGTH]
    if not candidates:
        return None

    return max(candidates, key=len)

# Cheap check run before the regex; False means the line cannot match
def line_may_match(line: str, hint: str | None, *, ignore_case: bool = False) -> bool:
    if hint is None:
        return True

    if not ignore_case:
        return hint in line

    # Case-insensitive regexes fold some non-ASCII letters onto ASCII (KELVIN SIGN -> k)
    if not line.isascii():
        return True

    return hint.lower() in line.lower()
