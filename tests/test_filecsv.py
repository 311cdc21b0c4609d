import csv

import pytest

from tulusapi.filecsv import ValidateCsv, ValidateFile, open_file


@pytest.fixture
def empty_path(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("")
    return path


def test_open_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        open_file(tmp_path / "absent.csv")


def test_open_file_does_not_truncate(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("A1,x\n")
    with open_file(path) as handle:
        assert handle.read() == "A1,x\n"


def test_csv_round_trip(empty_path):
    with ValidateCsv(open_file(empty_path)) as validator:
        validator.append_all_data([["A1", "x"], ["B2", "y"]])
        validator.append_data(["C3", "z"])
        validator.file.seek(0)
        assert validator.read_data() == ["A1", "B2", "C3"]


def test_csv_writes_newline_terminated_rows(empty_path):
    with ValidateCsv(open_file(empty_path)) as validator:
        validator.append_data(["A1", "x"])
    assert empty_path.read_text() == "A1,x\n"


def test_csv_quoted_field_round_trip(empty_path):
    with ValidateCsv(open_file(empty_path)) as validator:
        validator.append_all_data([["a,b", "1"], ['say "hi"', "2"]])
        validator.file.seek(0)
        assert validator.read_data() == ["a,b", 'say "hi"']


def test_csv_skips_blank_lines(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("A1\n\nB2\n")
    with ValidateCsv(open_file(path)) as validator:
        assert validator.read_data() == ["A1", "B2"]


def test_csv_empty_file_gives_empty_list(empty_path):
    with ValidateCsv(open_file(empty_path)) as validator:
        assert validator.read_data() == []


def test_csv_wrong_field_count_raises(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("A1,x\nB2\n")
    with ValidateCsv(open_file(path)) as validator:
        with pytest.raises(csv.Error, match="wrong number of fields"):
            validator.read_data()


def test_close_closes_file(empty_path):
    validator = ValidateCsv(open_file(empty_path))
    validator.close()
    assert validator.file.closed


def test_plain_file_round_trip(empty_path):
    refs = ["REF000001", "REF000002", "REF000003"]
    with ValidateFile(open_file(empty_path)) as validator:
        validator.append_all_data([[ref, "ignored"] for ref in refs])
        validator.file.seek(0)
        chunks = validator.read_data()
    assert [chunk.rstrip("\n") for chunk in chunks] == refs


def test_plain_file_chunks_cover_content(empty_path):
    with ValidateFile(open_file(empty_path)) as validator:
        validator.append_data(["abcdefghijklmnop"])
        validator.file.seek(0)
        chunks = validator.read_data()
    assert "".join(chunks) == "abcdefghijklmnop\n"
    assert all(len(chunk) <= 10 for chunk in chunks)
    assert len(chunks[0]) == 10


def test_plain_file_append_writes_first_value(empty_path):
    with ValidateFile(open_file(empty_path)) as validator:
        validator.append_data(["first", "second"])
    assert empty_path.read_text() == "first\n"
    assert validator.file.closed