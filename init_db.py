"""Create the journal tables, optionally filling recent days with sample entries"""
import argparse
import asyncio
import random
from datetime import date, timedelta

from journal.database import engine, create_tables
from journal.api.dependencies import build_backend
from journal.services.journal_service import JournalService
from journal.services.record_store import RecordStore

SAMPLE_FOODS = ["Oatmeal", "Pizza", "Salad", "Coffee", "Pasta", "Yogurt", "Chicken", "Apple"]


async def seed(days: int) -> None:
    service = JournalService(RecordStore(build_backend("sql"), cache_enabled=False))
    today = date.today()
    saved = 0
    for offset in reversed(range(days)):
        day = today - timedelta(days=offset)
        for _ in range(random.randint(1, 4)):
            await service.add_food_entry(day, random.choice(SAMPLE_FOODS), random.randint(7, 21), random.randint(0, 59))
        await service.set_workout(day, random.random() < 0.4)
        result = await service.set_mood(day, random.randint(3, 9))
        saved += result.ok
    print(f"Seeded {saved} day(s) ending {today.isoformat()}.")


async def init(seed_days: int) -> None:
    await create_tables(engine)
    print("Database tables created successfully.")
    if seed_days:
        await seed(seed_days)
    await engine.dispose()


def parse_args():
    parser = argparse.ArgumentParser(description="Initialize the journal database.")
    parser.add_argument("--seed-days", type=int, default=0, help="Fill this many days (ending today) with sample data.")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    if args.seed_days < 0:
        raise SystemExit("--seed-days must be >= 0")
    asyncio.run(init(args.seed_days))
