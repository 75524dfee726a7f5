import pytest

from core.exceptions import ConfigurationError
from infrastructure.db.engines import _extract_search_path_from_url, create_store_engine


def test_search_path_is_moved_out_of_the_url() -> None:
    url = "postgresql+asyncpg://postgres:pw@db.example.com:5432/postgres?options=-csearch_path%3Ddashboard"

    clean, schema = _extract_search_path_from_url(url)

    assert schema == "dashboard"
    assert clean == "postgresql+asyncpg://postgres:pw@db.example.com:5432/postgres"


def test_url_without_options_is_unchanged() -> None:
    url = "postgresql+asyncpg://postgres:pw@db.example.com/postgres"

    assert _extract_search_path_from_url(url) == (url, None)


def test_other_query_parameters_survive() -> None:
    clean, schema = _extract_search_path_from_url(
        "postgresql+asyncpg://u:p@h/db?sslmode=require&options=-csearch_path%3Dpublic"
    )

    assert schema == "public"
    assert clean.endswith("?sslmode=require")


def test_empty_url_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as exc:
        create_store_engine("")

    assert exc.value.key == "DASHBOARD_DB_URL"


@pytest.mark.anyio("asyncio")
async def test_sqlite_urls_get_a_plain_engine() -> None:
    engine = create_store_engine("sqlite+aiosqlite:///:memory:")
    try:
        assert engine.dialect.name == "sqlite"
    finally:
        await engine.dispose()
