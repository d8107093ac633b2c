import pytest

from searcher.matcher import match_line
from searcher.pattern import compile_pattern
from searcher.prefilter import extract_hint, line_may_match, required_runs


@pytest.mark.parametrize("pattern, hint", [
    ("foo", "foo"),
    ("abc.*defgh", "defgh"),
    ("abc def", "abc"),
    (r"\bword\b", "word"),
    (r"\w+ing", "ing"),
    ("ab{2}cdef", "cdef"),
    ("[]abc]xyz", "xyz"),
    ("colou?r", "colo"),
    ("fo+bar", "bar"),
    ("(foo|bar)bazz", "bazz"),
    ("(?P<name>foo)bar", "bar"),
    (r"\x41bcd", "bcd"),
    (r"\101bcd", "bcd"),
    (r"\U00000041bcd", "bcd"),
    (r"\012abc", "abc"),
    (r"(a)\12xyz", "xyz"),
    ("snake_case_99", "snake_case_99"),
])
def test_extract_hint(pattern, hint):
    assert extract_hint(pattern) == hint


@pytest.mark.parametrize("pattern", [
    "fo",
    "a.b.c",
    "foo|barbaz",
    "(?i)hello",
    "(?x)hello world",
    "(hello)",
    "[hello]",
    r"\d+",
    r"\u0041bc",
    "",
])
def test_no_hint(pattern):
    assert extract_hint(pattern) is None


def test_top_level_alternation_has_no_required_runs():
    assert required_runs("alpha|beta") is None
    assert required_runs(r"alpha\|beta") == ["alpha", "beta"]


def test_line_may_match_case_sensitive():
    assert line_may_match("a foo b", "foo")
    assert not line_may_match("a FOO b", "foo")
    assert line_may_match("anything", None)


def test_line_may_match_ignore_case():
    assert line_may_match("a FOO b", "foo", ignore_case=True)
    assert not line_may_match("a bar b", "foo", ignore_case=True)


def test_non_ascii_lines_always_reach_the_regex_when_ignoring_case():
    # KELVIN SIGN matches "k" case-insensitively in the regex engine
    line = "\u212aay"
    pattern = compile_pattern("kay", ignore_case=True)

    assert pattern.matches(line)
    assert line_may_match(line, "kay", ignore_case=True)
    assert match_line(line, pattern, extract_hint("kay"))


LINES = [
    "foo", "fooobar", "fobar", "colour", "color", "colr", "alpha", "beta",
    "hello world", "HELLO", "snake_case_99", "xyzzy", "the word is here", "singing",
    "bazz", "foobazz", "", "Kelvin", "\u212aelvin", "Abcd", "xAbc", "A01bcd", "aa_aa",
]

PATTERNS = [
    "fo+bar", "colou?r", "alpha|beta", "(foo|bar)bazz", r"\bword\b", r"\w+ing",
    "hello", "(?i)hello", "snake_case_\\d+", "x[yz]+y", "kelvin",
    r"\x41bcd", r"\101bcd", r"\u0041bc", r"x\0101bc", r"(a)\1_aa",
]


@pytest.mark.parametrize("pattern_text", PATTERNS)
@pytest.mark.parametrize("ignore_case", [False, True])
def test_hint_never_hides_a_match(pattern_text, ignore_case):
    pattern = compile_pattern(pattern_text, ignore_case=ignore_case)
    hint = extract_hint(pattern_text)

    with_hint = [match_line(line, pattern, hint) for line in LINES]
    without_hint = [pattern.matches(line) for line in LINES]

    assert with_hint == without_hint
