"""Seed data for a fresh database."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from models import Category, Coin
from services.catalog_service import CatalogService
from services.category_service import CategoryService
from services.holdings_service import HoldingsService

logger = logging.getLogger(__name__)

# Stable ids: callers and seed links refer to categories by number
DEFAULT_CATEGORIES = [
    (1, "AI"),
    (2, "Layer 1"),
    (3, "Memecoin"),
    (4, "Stablecoin"),
    (5, "Proof Of Work"),
    (6, "Proof of Stake"),
    (7, "Real World Assets"),
    (8, "Decentralized Finance"),
]

# ticker, name, launch, current, all-time low, all-time high, category ids
SEED_COINS = [
    ("BTC", "Bitcoin", "0.002", "85937.63", "0.002", "89864.13", [2, 5]),
    ("ETH", "Ethereum", "0.74", "3248.14", "0.433", "4878.26", [2, 6]),
    ("USDT", "USD Tether", "1.00", "1.00", "1.00", "1.00", [4]),
    ("PONKE", "Ponke", "0.071399", "0.508", "0.00928", "0.7098", [3]),
    ("ONDO", "Ondo", "0.2195", "0.867", "0.08217", "1.48", [7]),
    ("FET", "Artificial Superintelligence Alliance", "0.34", "1.38", "0.00817", "3.45", [1]),
]

# ticker, quantity, entry price, notes
SEED_HOLDINGS = [
    ("PONKE", "6500", "0.0265", "Love this Monkey! High risk high reward"),
    ("ONDO", "1500", "0.1", "ICO investment"),
    ("ETH", "0.33", "1859", "Safer bet"),
    ("FET", "357", "2.08", "AI has potential"),
    ("USDT", "2000", "1", "Money on the side ready for a dip in the market"),
]


class SeedService:
    """Loads the default categories and the demo catalog/portfolio."""

    def seed_default_categories(self, db: Session) -> int:
        """Create the default categories on a fresh database.

        If any category already exists, this is a no-op.

        Returns:
            Number of categories created
        """
        if db.query(Category).count() > 0:
            logger.info("Categories already exist, skipping seed")
            return 0

        for category_id, name in DEFAULT_CATEGORIES:
            CategoryService.create_category(db, name, category_id=category_id)
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)

    def seed_demo_portfolio(self, db: Session) -> int:
        """Create the demo coins and holdings through the write procedures.

        Going through the procedures means the seed shows up in the change
        logs like any other edit. Skipped when the catalog is not empty.

        Returns:
            Number of coins created
        """
        if db.query(Coin).count() > 0:
            logger.info("Catalog already populated, skipping demo seed")
            return 0

        for ticker, name, launch, current, low, high, category_ids in SEED_COINS:
            CatalogService.add_coin(
                db,
                ticker,
                name,
                Decimal(launch),
                Decimal(current),
                Decimal(low),
                Decimal(high),
                category_ids,
            )

        for ticker, quantity, entry_price, notes in SEED_HOLDINGS:
            HoldingsService.add_holding(
                db, ticker, Decimal(entry_price), Decimal(quantity), notes
            )

        logger.info(
            "Seeded %d coins and %d holdings", len(SEED_COINS), len(SEED_HOLDINGS)
        )
        return len(SEED_COINS)

    def seed_all(self, db: Session) -> None:
        """Seed categories, then the demo catalog and portfolio."""
        self.seed_default_categories(db)
        self.seed_demo_portfolio(db)
