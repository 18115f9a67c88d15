#!/usr/bin/env python
"""Check data store connectivity and that the dataset tables are present.

Usage:
    python scripts/check_db.py
"""

import asyncio
import sys

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import create_async_engine

import app.features.data_platform.models  # noqa: F401
from app.core.config import get_settings
from app.core.database import Base


async def check_database() -> int:
    """Verify the connection and the expected tables."""
    settings = get_settings()

    print("ShopInsights - Data Store Check")
    print("=" * 35)
    print(f"Database URL: {settings.database_url.split('@')[-1]}")  # Hide credentials
    print()

    engine = create_async_engine(settings.database_url)

    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            assert result.scalar() == 1
            print("[OK] Basic connectivity")

            existing = set(await conn.run_sync(lambda sync: inspect(sync).get_table_names()))
            missing = sorted(set(Base.metadata.tables) - existing)
            if missing:
                print(f"[WARN] Missing tables: {', '.join(missing)}")
                print("       Run: python scripts/seed_demo_data.py --create-tables")
            else:
                print("[OK] Dataset tables present")

        print()
        print("Data store check completed successfully!")
        return 0

    except Exception as e:
        print(f"[FAIL] Connection failed: {e}")
        print()
        print("Troubleshooting:")
        print("  1. Ensure PostgreSQL is running")
        print("  2. Check DATABASE_URL in .env file")
        return 1

    finally:
        await engine.dispose()


def main() -> None:
    sys.exit(asyncio.run(check_database()))


if __name__ == "__main__":
    main()
