"""
🧪 test_formatting.py: тести дрібних форматерів.
"""

import pytest

from songbot.shared.utils.formatting import bytes_to_mb, format_duration, sanitize_filename, to_gb_or_tb


@pytest.mark.parametrize(
    "milliseconds,expected",
    [
        (None, "00:00"),
        (0, "00:00"),
        (59_999, "00:59"),
        (215_000, "03:35"),
        (3_725_000, "62:05"),
    ],
)
def test_format_duration(milliseconds, expected):
    assert format_duration(milliseconds) == expected


def test_bytes_to_mb_two_decimals():
    assert bytes_to_mb(10 * 1024 * 1024) == "10.00"
    assert bytes_to_mb(None) == "0.00"


def test_cloud_sizes_switch_to_tb_after_1024_gb():
    assert to_gb_or_tb(5 * 1024 ** 3) == "5.00 GB"
    assert to_gb_or_tb(2 * 1024 ** 4) == "2.00 TB"


def test_sanitize_filename_strips_path_separators():
    assert sanitize_filename("AC/DC-Back:In*Black") == "ACDC-BackInBlack"
    assert sanitize_filename("  ../  ") == "track"
    assert sanitize_filename("", fallback="anonymous") == "anonymous"
