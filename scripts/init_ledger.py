#!/usr/bin/env python3
"""
Script to seed the ledger with the bootstrap lots.

This script:
1. Creates the world_state table if it does not exist
2. Writes lots 001..005 (overwriting any existing values)
3. Optionally prints every entry in the ledger

Usage:
  python scripts/init_ledger.py [--list]
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.use_cases.lots import init_ledger, list_lots
from src.config.settings import get_settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_schema,
    create_session_factory,
)


async def seed_ledger(show_entries: bool) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    try:
        if settings.auto_create_schema:
            await create_schema(engine)

        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            lots = await init_ledger.execute(uow)
        print(f"✅ {len(lots)} lots initialized")

        if show_entries:
            uow = SQLAlchemyUnitOfWork(session_factory)
            async with uow:
                entries = await list_lots.execute(uow)
            print(list_lots.to_wire(entries))
    except Exception as exc:
        print(f"\n❌ Error seeding ledger: {exc}")
        import traceback

        traceback.print_exc()
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed the ledger with the bootstrap lots")
    parser.add_argument("--list", action="store_true", help="Print every ledger entry afterwards")

    args = parser.parse_args()

    asyncio.run(seed_ledger(args.list))
