import logging
from typing import Iterable, TextIO

from searcher import context, matcher
from searcher.models import FileResult, SearchOptions, SearchOutcome
from searcher.pattern import Pattern, compile_pattern
from searcher.prefilter import extract_hint
from searcher.render import ResultRenderer
from searcher.walker import iter_files


def search_file(path: str, pattern: Pattern, hint: str | None,
                options: SearchOptions) -> FileResult | None:
    records = matcher.scan_file(path, pattern, hint)
    if records is None:
        return None

    match_indexes = matcher.match_indexes(records)
    if not match_indexes:
        return None

    ranges = context.build_ranges(match_indexes, line_count=len(records),
                                  before=options.before, after=options.after)

    emitted = [records[i] for i in context.range_indexes(ranges)]

    return FileResult(path=path, lines=emitted, ranges=ranges, match_indexes=match_indexes)

def search_paths(paths: Iterable[str], pattern: Pattern, options: SearchOptions, *,
                 hint: str | None = None,
                 renderer: ResultRenderer | None = None) -> SearchOutcome:
    """
    Search files one at a time, in the order given.

    Each file is rendered as soon as it has been scanned, so output order is
    always the traversal order. Without a renderer results are only collected.
    Stops early once the renderer's output has been closed.
    """
    outcome = SearchOutcome()

    for path in paths:
        result = search_file(path, pattern, hint, options)
        if result is None:
            continue

        outcome.results.append(result)

        if renderer is not None and not renderer.render(result):
            logging.debug("Output closed, stopping search")
            break

    return outcome

def run_search(pattern_text: str, paths: Iterable[str], options: SearchOptions, *,
               sink: TextIO | None = None, render: bool = True) -> SearchOutcome:
    # Compile first: a bad pattern must fail before any file is touched
    pattern = compile_pattern(pattern_text, ignore_case=options.ignore_case)
    hint = extract_hint(pattern_text)
    logging.debug(f"Searching for {pattern!r}, literal hint: {hint!r}")

    renderer = ResultRenderer.from_options(pattern, options, sink=sink) if render else None

    files = iter_files(paths, show_hidden=options.show_hidden)
    outcome = search_paths(files, pattern, options, hint=hint, renderer=renderer)

    if renderer is not None:
        renderer.flush()

    return outcome
