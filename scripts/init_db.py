# scripts/init_db.py
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from sqlalchemy import text

from eventlog.config.settings import get_settings
from eventlog.infrastructure.database import models  # noqa: F401  registers event_logs on Base
from eventlog.infrastructure.database.session import build_engine, create_schema


async def init_db():
    engine = build_engine(get_settings())
    try:
        async with engine.begin() as conn:
            result = await conn.execute(text("SELECT 1"))
            print("DB Connected:", result.scalar())
        await create_schema(engine)
        print("Table event_logs ready")
    finally:
        await engine.dispose()

asyncio.run(init_db())
