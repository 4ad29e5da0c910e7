"""Test fixtures and sample data."""
import pytest
from decimal import Decimal

from models import Category, Coin, Holding
from services.catalog_service import CatalogService
from services.holdings_service import HoldingsService
from services.seed_service import SeedService
from sqlalchemy.orm import Session


def make_coin(
    db: Session,
    ticker: str,
    launch_price: str = "1",
    current_price: str = "1",
    category_ids: list[int] | None = None,
    name: str | None = None,
) -> Coin:
    """Add a catalog coin with simple defaults.

    This is a helper function (not a fixture) for tests that need several
    coins with different prices.
    """
    return CatalogService.add_coin(
        db,
        ticker,
        name or ticker.title(),
        Decimal(launch_price),
        Decimal(current_price),
        Decimal(launch_price),
        Decimal(current_price),
        category_ids or [],
    )


@pytest.fixture
def categories(db: Session) -> list[Category]:
    """Create the eight default categories (ids 1-8)."""
    SeedService().seed_default_categories(db)
    return db.query(Category).order_by(Category.id).all()


@pytest.fixture
def btc(db: Session, categories: list[Category]) -> Coin:
    """Bitcoin, classified as Layer 1 and Proof Of Work."""
    return CatalogService.add_coin(
        db,
        "BTC",
        "Bitcoin",
        Decimal("0.002"),
        Decimal("85937.63"),
        Decimal("0.002"),
        Decimal("89864.13"),
        [2, 5],
    )


@pytest.fixture
def eth(db: Session, categories: list[Category]) -> Coin:
    """Ethereum, classified as Layer 1 and Proof of Stake."""
    return CatalogService.add_coin(
        db,
        "ETH",
        "Ethereum",
        Decimal("0.74"),
        Decimal("3248.14"),
        Decimal("0.433"),
        Decimal("4878.26"),
        [2, 6],
    )


@pytest.fixture
def eth_holding(db: Session, eth: Coin) -> Holding:
    """0.33 ETH bought at 1859."""
    return HoldingsService.add_holding(
        db, "ETH", Decimal("1859"), Decimal("0.33"), "Safer bet"
    )


@pytest.fixture
def seeded(db: Session) -> Session:
    """Database loaded with the default categories and demo portfolio."""
    SeedService().seed_all(db)
    return db
