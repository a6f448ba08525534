#!/usr/bin/env python3
"""
Create all database tables for Courtside

Run this once the database in DATABASE_URL is reachable. With --seed the
new tables are filled with the sample players, matches and predictions.

Usage:
    python create_tables.py [--seed] [--players N]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from courtside.config import settings
from courtside.services.data_client import DataStoreError
from courtside.services.sample_data import seed_sample_data
from courtside.services.sql_client import SqlDataClient

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

TABLES = (
    "players",
    "matches",
    "predictions",
    "model_feedback",
    "model_weights",
    "compliance_sources",
    "player_aliases",
)


async def create_tables(seed: bool = False, player_count: int = settings.SAMPLE_PLAYER_COUNT):
    """Create all database tables"""
    print("=" * 60)
    print("Creating Database Tables")
    print("=" * 60)
    print()

    if not settings.remote_configured:
        print("❌ DATABASE_URL is not set")
        sys.exit(1)

    client = SqlDataClient()
    try:
        print("Creating tables...")
        await client.create_tables()

        print()
        print("✅ Tables created successfully!")
        print()
        print("Tables created:")
        for table in TABLES:
            print(f"  - {table}")
        print()

        if seed:
            counts = await seed_sample_data(client, player_count=player_count)
            print(f"✅ Seeded sample data: {counts}")
            print()

        print("Next steps:")
        print("  1. Start API: uvicorn courtside.main:app --reload")
        print("  2. Generate predictions: python generate_predictions.py")
        print()

    except DataStoreError as e:
        print()
        print("❌ ERROR: Failed to create tables")
        print(f"   {str(e)}")
        print()
        sys.exit(1)

    finally:
        await client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create Courtside database tables")
    parser.add_argument("--seed", action="store_true", help="Fill the new tables with sample data")
    parser.add_argument("--players", type=int, default=settings.SAMPLE_PLAYER_COUNT, help="Sample player count")
    args = parser.parse_args()

    asyncio.run(create_tables(seed=args.seed, player_count=args.players))
