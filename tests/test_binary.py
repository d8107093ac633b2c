from searcher.binary import BINARY_SNIFF_BYTES, is_binary, is_binary_bytes


def test_text_file_is_not_binary(make_file):
    assert not is_binary(make_file("a.txt", "hello\nworld\n"))


def test_empty_file_is_not_binary(make_file):
    assert not is_binary(make_file("empty.txt", b""))


def test_nul_byte_marks_binary(make_file):
    assert is_binary(make_file("a.bin", b"abc\x00def"))


def test_nul_at_end_of_sniff_window(make_file):
    data = b"a" * (BINARY_SNIFF_BYTES - 1) + b"\x00"
    assert is_binary(make_file("edge.bin", data))


def test_nul_after_sniff_window_is_not_seen(make_file):
    data = b"a" * BINARY_SNIFF_BYTES + b"\x00"
    assert not is_binary(make_file("late.txt", data))


def test_unreadable_path_counts_as_binary(tmp_path):
    assert is_binary(str(tmp_path / "missing.txt"))
    assert is_binary(str(tmp_path))


def test_is_binary_bytes():
    assert is_binary_bytes(b"\x00")
    assert not is_binary_bytes(b"plain")
