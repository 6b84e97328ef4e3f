#!/usr/bin/env python3
"""
Initialize database schema for production.
Run this once after setting up PostgreSQL.
"""
import asyncio
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.ext.asyncio import create_async_engine

from pulse.config import DEFAULT_DATABASE_URL, load_env_file_fallback
from pulse.models import Base


def get_database_url() -> str:
    if not os.getenv("DATABASE_URL"):
        load_env_file_fallback()
    database_url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    # 'db' is the Docker Compose service name; use localhost when run from the host
    if "@db:" in database_url and not os.getenv("PULSE_IN_DOCKER"):
        database_url = database_url.replace("@db:", "@localhost:")
    return database_url


async def init_db(database_url: str, echo: bool = True) -> None:
    """Create all tables."""
    engine = create_async_engine(database_url, echo=echo)
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    print("Database schema initialized successfully!")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init_db(get_database_url()))
