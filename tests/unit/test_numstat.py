"""Unit tests for numstat parsing."""

from commitsift.extraction import parse_numstat


def test_single_line():
    """A text file adds its line counts."""
    totals = parse_numstat("10\t5\tfoo.go")

    assert totals.insertions == 10
    assert totals.deletions == 5
    assert totals.files_changed == 1
    assert totals.files == ["foo.go"]


def test_binary_file():
    """Binary entries count as a file with no lines."""
    totals = parse_numstat("-\t-\tbinary.png")

    assert totals.files_changed == 1
    assert totals.insertions == 0
    assert totals.deletions == 0
    assert totals.files == ["binary.png"]


def test_multiple_lines_accumulate():
    """Counts are summed across lines."""
    totals = parse_numstat("10\t5\ta.py\n3\t0\tb.py\n-\t-\tlogo.png\n")

    assert totals.files_changed == 3
    assert totals.insertions == 13
    assert totals.deletions == 5


def test_malformed_lines_skipped():
    """Lines not in the three-field form are ignored."""
    totals = parse_numstat("garbage\n10 5 spaces.py\n\n7\t2\tok.py\nx\t1\tbad.py")

    assert totals.files_changed == 1
    assert totals.insertions == 7
    assert totals.deletions == 2
    assert totals.files == ["ok.py"]


def test_files_not_included():
    """Stats are computed even when paths are not kept."""
    totals = parse_numstat("10\t5\tfoo.go\n1\t1\tbar.go", include_files=False)

    assert totals.files is None
    assert totals.files_changed == 2
    assert totals.insertions == 11
    assert totals.deletions == 6


def test_path_with_spaces_and_rename():
    """The path field keeps everything after the second tab."""
    totals = parse_numstat("1\t1\tdocs/{old name.md => new name.md}")

    assert totals.files == ["docs/{old name.md => new name.md}"]


def test_empty_input():
    """Empty input yields zero totals."""
    totals = parse_numstat("")

    assert totals.files_changed == 0
    assert totals.files == []


def test_only_newline_separates_lines():
    """Paths may contain other Unicode line separators."""
    totals = parse_numstat("1\t1\ta\x1cb.txt\n2\t0\tc d.txt")

    assert totals.files == ["a\x1cb.txt", "c d.txt"]
    assert totals.insertions == 3


def test_crlf_line_endings():
    """A trailing carriage return is not part of the path."""
    totals = parse_numstat("1\t1\ta.txt\r\n2\t2\tb.txt\r\n")

    assert totals.files == ["a.txt", "b.txt"]


def test_non_ascii_digits_rejected():
    """Counts must be ASCII digits."""
    totals = parse_numstat("١\t1\ta.txt")

    assert totals.files_changed == 0
