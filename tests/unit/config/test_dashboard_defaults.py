import os

from config import dashboard
from core.config import Settings


def test_dashboard_defaults() -> None:
    assert dashboard.MAX_ACTIVITY_LIMIT == 50
    assert dashboard.FALLBACK_DISPLAY_NAME == "there"
    assert dashboard.MIN_PASSWORD_LENGTH == 6
    assert dashboard.DEFAULT_QUICK_ADD_TYPE == "task_added"
    assert dashboard.DEFAULT_QUICK_ADD_TITLE == "New task created"
    assert dashboard.EMPTY_FEED_MESSAGE == "No activities yet. Click the + button to get started!"


def test_settings_snapshot_environment() -> None:
    settings = Settings()

    assert settings.supabase_url == os.environ["SUPABASE_URL"].rstrip("/")
    assert settings.recent_activity_limit == dashboard.RECENT_ACTIVITY_LIMIT
