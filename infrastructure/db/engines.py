"""Database engine management utilities.

The dashboard store is the hosted PostgreSQL database (asyncpg driver). Any
other URL (for example ``sqlite+aiosqlite`` during local development) gets a
plain engine without the PostgreSQL-specific connection arguments.
"""

from __future__ import annotations

import logging
import os
import re
import ssl
from urllib.parse import parse_qs, unquote, urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from config.database.defaults import COMMAND_TIMEOUT
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

AsyncSessionFactory = async_sessionmaker[AsyncSession]


def _create_ssl_context(cert_path: str | None) -> ssl.SSLContext | None:
    """Create SSL context for PostgreSQL connection if certificate path provided.

    Args:
        cert_path: Path to CA certificate file (e.g., prod-ca-2021.crt)

    Returns:
        SSLContext configured with CA cert, or None if no cert path
    """
    if not cert_path:
        return None

    if not os.path.exists(cert_path):
        logger.warning("SSL certificate not found at %s, skipping SSL", cert_path)
        return None

    ctx = ssl.create_default_context(cafile=cert_path)

    # The pooler hostname may not match the certificate; the CA is still verified
    skip_hostname_check = os.environ.get("SUPABASE_SSL_SKIP_HOSTNAME_CHECK", "").lower() == "true"
    ctx.check_hostname = not skip_hostname_check
    ctx.verify_mode = ssl.CERT_REQUIRED
    if skip_hostname_check:
        logger.info("SSL enabled (hostname verification disabled)")
    else:
        logger.info("SSL enabled with certificate: %s", cert_path)

    return ctx


def _extract_search_path_from_url(url: str) -> tuple[str, str | None]:
    """Extract search_path from PostgreSQL URL options and return clean URL.

    asyncpg doesn't accept 'options' as a URL parameter - it must be passed
    via connect_args['server_settings']['search_path'].

    Args:
        url: Database URL, possibly with ?options=-csearch_path=schema

    Returns:
        Tuple of (clean_url_without_options, schema_or_none)
    """
    if "?" not in url:
        return url, None

    parsed = urlparse(url)
    if not parsed.query:
        return url, None

    query_params = parse_qs(parsed.query)
    options = query_params.get("options", [])

    schema = None
    if options:
        # Parse options like "-csearch_path=dashboard" or "-csearch_path%3Ddashboard"
        options_str = unquote(options[0])
        match = re.search(r"-csearch_path[=](\w+)", options_str)
        if match:
            schema = match.group(1)

    remaining_params = {k: v for k, v in query_params.items() if k != "options"}
    if remaining_params:
        new_query = "&".join(f"{k}={v[0]}" for k, v in remaining_params.items())
    else:
        new_query = ""

    clean_url = urlunparse(parsed._replace(query=new_query))
    return clean_url, schema


def create_store_engine(
    url: str,
    *,
    echo: bool = False,
    pool_size: int = 10,
    max_overflow: int = 10,
    pool_recycle: int = 900,
    url_key: str = "DASHBOARD_DB_URL",
) -> AsyncEngine:
    """Create an async SQLAlchemy engine for the hosted table store."""
    if not url:
        raise ConfigurationError("Database connection URL is required", key=url_key)

    if not url.startswith("postgresql"):
        logger.debug("Creating non-PostgreSQL engine for %s", url.split(":", 1)[0])
        return create_async_engine(url, echo=echo)

    clean_url, schema = _extract_search_path_from_url(url)

    # asyncpg uses command_timeout and server_settings for search_path
    connect_args: dict = {"command_timeout": COMMAND_TIMEOUT}
    if schema:
        connect_args["server_settings"] = {"search_path": schema}
        logger.debug("PostgreSQL search_path set to: %s", schema)

    ssl_context = _create_ssl_context(os.environ.get("SUPABASE_SSL_CERT_PATH"))
    if ssl_context:
        connect_args["ssl"] = ssl_context

    return create_async_engine(
        clean_url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=pool_recycle,
        pool_pre_ping=True,
        isolation_level="READ COMMITTED",
        connect_args=connect_args,
    )


def get_session_factory(engine: AsyncEngine) -> AsyncSessionFactory:
    """Return an ``async_sessionmaker`` bound to ``engine``."""

    return async_sessionmaker(engine, expire_on_commit=False)


__all__ = [
    "AsyncSessionFactory",
    "create_store_engine",
    "get_session_factory",
]
