import random

import pytest

from reference_string import (
    create_reference_string,
    format_reference_string,
    read_reference_string,
    write_reference_string,
)


def test_reference_string_shape():
    references = create_reference_string(500, 1024, rng=random.Random(4))

    assert len(references) == 500
    assert references[0] == 0
    assert all(0 <= page_num < 1024 for page_num in references)


def test_reference_string_has_locality():
    references = create_reference_string(500, 1024, rng=random.Random(4))

    repeats = sum(1 for a, b in zip(references, references[1:]) if a == b)
    assert repeats > 100


def test_reference_string_seeded():
    assert (create_reference_string(100, 64, rng=random.Random(8))
            == create_reference_string(100, 64, rng=random.Random(8)))


def test_short_reference_strings():
    assert create_reference_string(0) == []
    assert create_reference_string(1) == [0]

    with pytest.raises(ValueError):
        create_reference_string(-1)


def test_write_and_read(tmp_path):
    filename = str(tmp_path / 'reference_string.txt')
    write_reference_string([0, 7, 7, 1023], filename)

    assert read_reference_string(filename) == [0, 7, 7, 1023]


def test_read_skips_blank_lines(tmp_path):
    trace_file = tmp_path / 'trace.txt'
    trace_file.write_text("3\n\n  4  \n\n")

    assert read_reference_string(str(trace_file)) == [3, 4]


def test_read_reports_bad_line(tmp_path):
    trace_file = tmp_path / 'trace.txt'
    trace_file.write_text("3\nfour\n")

    with pytest.raises(ValueError, match=':2:'):
        read_reference_string(str(trace_file))


def test_format_reference_string():
    assert format_reference_string([1, 22, 3]) == '1\t22\t3'
    assert format_reference_string([]) == ''
