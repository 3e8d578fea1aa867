import asyncio

from dashboard.db.engine import get_engine
from dashboard.db.schema import metadata


async def _main():
    engine = get_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(metadata.drop_all)
            await conn.run_sync(metadata.create_all)
    finally:
        await engine.dispose()
    print("DB schema created.")


def main():
    asyncio.run(_main())


if __name__ == "__main__":
    main()
