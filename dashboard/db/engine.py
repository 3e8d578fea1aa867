# dashboard/db/engine.py

from functools import lru_cache

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from dashboard.config import get_settings

# Synchronous driver names rewritten to their asyncio counterparts
ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "postgresql+psycopg2": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def to_async_url(raw_url: str) -> URL:
    """
    Turn a plain connection string (e.g. a hosted POSTGRES_URL) into a URL
    usable by create_async_engine.

    asyncpg does not understand libpq's `sslmode`, so it is passed on as `ssl`.
    """
    url = make_url(raw_url)
    drivername = ASYNC_DRIVERS.get(url.drivername, url.drivername)
    url = url.set(drivername=drivername)

    if drivername == "postgresql+asyncpg" and "sslmode" in url.query:
        query = dict(url.query)
        query["ssl"] = query.pop("sslmode")
        url = url.set(query=query)

    return url


@lru_cache
def get_engine() -> AsyncEngine:
    # echo=True if you want to see SQL printed in the terminal
    return create_async_engine(to_async_url(get_settings().postgres_url))
