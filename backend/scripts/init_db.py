#!/usr/bin/env python
"""Create the database schema and optionally load seed data.

Seed data is the eight default categories plus a demo catalog of six
coins and a five-position portfolio.

Usage:
    cd backend
    python -m scripts.init_db
    python -m scripts.init_db --seed
    python -m scripts.init_db --drop --seed
"""

import argparse

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from database import drop_db, get_engine, init_db
from logging_config import setup_logging
from services.seed_service import SeedService


def init_database(drop: bool = False, seed: bool = False, engine: Engine | None = None) -> None:
    """Create (optionally recreate) the schema and optionally seed it."""
    engine = engine or get_engine()

    if drop:
        drop_db(engine)
        print("Dropped all tables")

    init_db(engine)
    print(f"Schema ready at {engine.url.render_as_string(hide_password=True)}")

    if not seed:
        return

    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        service = SeedService()
        categories = service.seed_default_categories(db)
        coins = service.seed_demo_portfolio(db)
        print(f"Seeded {categories} categories and {coins} coins")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create the portfolio database schema")
    parser.add_argument("--drop", action="store_true", help="Drop all tables first")
    parser.add_argument("--seed", action="store_true", help="Load default categories and demo data")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args()
    setup_logging("DEBUG" if args.verbose else None)
    init_database(drop=args.drop, seed=args.seed)


if __name__ == "__main__":
    main()
