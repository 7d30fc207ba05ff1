import pytest

from auplot.cache_format import (
    read_doubles,
    read_flags,
    read_matrix,
    write_doubles,
    write_flags,
    write_matrix,
)


def test_doubles_round_trip(tmp_path):
    path = tmp_path / "v.dvmttemp"
    data = [0.5, -1.25, 3.0, 1e-9]
    write_doubles(path, data)
    assert read_doubles(path) == data


def test_doubles_wire_bytes(tmp_path):
    path = tmp_path / "v.dvmttemp"
    write_doubles(path, [1.0])
    assert path.read_bytes() == b"\x01\x00\x00\x00" + b"\x00" * 6 + b"\xf0\x3f"


def test_empty_doubles(tmp_path):
    path = tmp_path / "e.dvmttemp"
    write_doubles(path, [])
    assert path.read_bytes() == b"\x00\x00\x00\x00"
    assert read_doubles(path) == []


def test_write_replaces_existing_file(tmp_path):
    path = tmp_path / "v.dvmttemp"
    write_doubles(path, [1.0, 2.0, 3.0])
    write_doubles(path, [4.0])
    assert read_doubles(path) == [4.0]


def test_truncated_doubles_raise(tmp_path):
    path = tmp_path / "t.dvmttemp"
    write_doubles(path, [1.0, 2.0])
    path.write_bytes(path.read_bytes()[:-3])
    with pytest.raises(ValueError):
        read_doubles(path)


def test_missing_count_raises(tmp_path):
    path = tmp_path / "short.dvmttemp"
    path.write_bytes(b"\x01")
    with pytest.raises(ValueError):
        read_doubles(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_doubles(tmp_path / "absent.dvmttemp")


def test_matrix_round_trip(tmp_path):
    path = tmp_path / "m.dvmttemp"
    rows = [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]
    write_matrix(path, rows, 3)
    assert read_matrix(path, 3) == rows


def test_matrix_keeps_only_width_values(tmp_path):
    path = tmp_path / "m.dvmttemp"
    rows = [[1.0, 2.0, 9.0, 9.0], [3.0, 4.0, 9.0, 9.0]]
    write_matrix(path, rows, 2)
    assert read_matrix(path, 2) == [row[:2] for row in rows]
    assert len(path.read_bytes()) == 4 + 2 * 2 * 8


def test_matrix_short_row_raises(tmp_path):
    with pytest.raises(ValueError):
        write_matrix(tmp_path / "m.dvmttemp", [[1.0]], 2)


def test_matrix_read_with_wrong_width_raises(tmp_path):
    path = tmp_path / "m.dvmttemp"
    write_matrix(path, [[1.0, 2.0]], 2)
    with pytest.raises(ValueError):
        read_matrix(path, 4)


def test_empty_matrix(tmp_path):
    path = tmp_path / "m.dvmttemp"
    write_matrix(path, [], 5)
    assert read_matrix(path, 5) == []


def test_flags_round_trip(tmp_path):
    path = tmp_path / "f.dvmttemp"
    flags = [True, False, False, True, True]
    write_flags(path, flags)
    assert read_flags(path) == flags


def test_flags_wire_bytes(tmp_path):
    path = tmp_path / "f.dvmttemp"
    write_flags(path, [True, False])
    assert path.read_bytes() == b"\x02\x00\x00\x00\x01\x00"


def test_flags_nonzero_byte_is_true(tmp_path):
    path = tmp_path / "f.dvmttemp"
    path.write_bytes(b"\x02\x00\x00\x00\x07\x00")
    assert read_flags(path) == [True, False]


def test_truncated_flags_raise(tmp_path):
    path = tmp_path / "f.dvmttemp"
    path.write_bytes(b"\x03\x00\x00\x00\x01")
    with pytest.raises(ValueError):
        read_flags(path)