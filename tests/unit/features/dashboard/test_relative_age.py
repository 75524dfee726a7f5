from datetime import UTC, datetime, timedelta, timezone

import pytest

from features.dashboard.utils import ensure_utc, format_relative_age

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "Just now"),
        (59, "Just now"),
        (60, "1 minutes ago"),
        (119, "1 minutes ago"),
        (3599, "59 minutes ago"),
        (3600, "1 hours ago"),
        (86399, "23 hours ago"),
        (86400, "1 days ago"),
        (86400 * 9 + 5, "9 days ago"),
    ],
)
def test_age_label_boundaries(seconds: int, expected: str) -> None:
    assert format_relative_age(NOW - timedelta(seconds=seconds), NOW) == expected


def test_future_timestamps_render_as_just_now() -> None:
    assert format_relative_age(NOW + timedelta(hours=3), NOW) == "Just now"


def test_naive_timestamps_are_treated_as_utc() -> None:
    naive = (NOW - timedelta(minutes=5)).replace(tzinfo=None)

    assert format_relative_age(naive, NOW) == "5 minutes ago"


def test_ensure_utc_converts_other_offsets() -> None:
    plus_two = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    assert ensure_utc(plus_two) == NOW
    assert ensure_utc(plus_two).tzinfo == UTC
