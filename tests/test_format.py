import pytest

from shaken.format import relative_time, shrink_string


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, ""),
        (1, "1 second"),
        (61, "1 minute and 1 second"),
        (120, "2 minutes"),
        (3600 + 120 + 5, "1 hour, 2 minutes and 5 seconds"),
        (2 * 86400 + 3600 + 60 + 1, "2 days, 1 hour, 1 minute and 1 second"),
    ],
)
def test_relative_time(seconds: int, expected: str) -> None:
    assert relative_time(seconds) == expected


def test_shrink_string() -> None:
    assert shrink_string("short", 10) == "short"
    assert shrink_string("abcdef", 4) == "abc"
    assert shrink_string("日本語のテキスト", 3) == "日本"
