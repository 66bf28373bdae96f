"""
Tests for CLI formatting helpers.
"""

import pytest

from vidforge.utils.formatting import format_duration, format_file_size


@pytest.mark.parametrize("num_bytes, expected", [
    (0, "0 Bytes"),
    (512, "512 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (5 * 1024 * 1024, "5 MB"),
    (int(2.25 * 1024 ** 3), "2.25 GB"),
    (3 * 1024 ** 4, "3072 GB"),
])
def test_format_file_size(num_bytes, expected):
    assert format_file_size(num_bytes) == expected


@pytest.mark.parametrize("seconds, expected", [
    (0, "0:00"),
    (9.7, "0:09"),
    (65, "1:05"),
    (600, "10:00"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected
