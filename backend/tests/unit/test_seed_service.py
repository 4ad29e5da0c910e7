"""Unit tests for SeedService."""

from models import Category, Coin, CoinCategory, CoinLog, Holding, PortfolioLog
from services.seed_service import (
    DEFAULT_CATEGORIES,
    SEED_COINS,
    SEED_HOLDINGS,
    SeedService,
)


class TestSeedDefaultCategories:
    def test_seeds_eight_with_stable_ids(self, db):
        assert SeedService().seed_default_categories(db) == 8

        rows = db.query(Category).order_by(Category.id).all()
        assert [(c.id, c.name) for c in rows] == DEFAULT_CATEGORIES

    def test_noop_when_categories_exist(self, db, categories):
        assert SeedService().seed_default_categories(db) == 0
        assert db.query(Category).count() == 8


class TestSeedDemoPortfolio:
    def test_seed_all(self, seeded):
        assert seeded.query(Coin).count() == len(SEED_COINS)
        assert seeded.query(Holding).count() == len(SEED_HOLDINGS)
        assert seeded.query(CoinCategory).count() == 8

    def test_seed_is_logged(self, seeded):
        assert seeded.query(CoinLog).count() == len(SEED_COINS)
        assert seeded.query(PortfolioLog).count() == len(SEED_HOLDINGS)

    def test_second_run_is_noop(self, seeded):
        assert SeedService().seed_demo_portfolio(seeded) == 0
        assert seeded.query(Coin).count() == len(SEED_COINS)
        assert seeded.query(CoinLog).count() == len(SEED_COINS)

    def test_holding_notes(self, seeded):
        usdt = seeded.query(Holding).filter_by(ticker="USDT").one()
        assert usdt.notes == "Money on the side ready for a dip in the market"
