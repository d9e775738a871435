from datetime import datetime, timezone

from splitledger.services.user_service import start_of_month


def test_start_of_month():
    now = datetime(2026, 10, 17, 11, 30, 5, 123, tzinfo=timezone.utc)
    assert start_of_month(now) == datetime(2026, 10, 1, tzinfo=timezone.utc)


def test_start_of_month_defaults_to_now():
    since = start_of_month()
    assert since.day == 1
    assert since.tzinfo is not None
    assert since <= datetime.now(timezone.utc)
