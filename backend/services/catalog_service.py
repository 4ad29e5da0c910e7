"""Service for the coin catalog and its classification links."""

import logging
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from database import write_transaction
from models import Category, Coin, CoinCategory, Holding
from models.utils import to_decimal
from services.exceptions import ConstraintViolation, NotFound
from utils.ticker import is_valid_ticker, normalize_ticker

logger = logging.getLogger(__name__)

COIN_NAME_MAX_LENGTH = 50


class CatalogService:
    """Write procedures and lookups for catalog coins.

    Coins are only ever deleted through :meth:`remove_coin_everywhere`,
    which clears the rows that reference the coin first.
    """

    @staticmethod
    def get_coin(db: Session, ticker: str) -> Optional[Coin]:
        """Get a coin by ticker, or None if it is not in the catalog."""
        return (
            db.query(Coin)
            .filter(Coin.ticker == normalize_ticker(ticker))
            .first()
        )

    @staticmethod
    def list_coins(db: Session) -> list[Coin]:
        """Get all catalog coins ordered by ticker."""
        return db.query(Coin).order_by(Coin.ticker).all()

    @staticmethod
    def add_coin(
        db: Session,
        ticker: str,
        name: str,
        launch_price: Decimal,
        current_price: Decimal,
        all_time_low: Decimal,
        all_time_high: Decimal,
        category_ids: Sequence[int] = (),
    ) -> Coin:
        """Add a new coin to the catalog and classify it.

        Args:
            db: Database session
            ticker: Coin ticker (normalized to upper case)
            name: Display name
            launch_price: Price at launch, must be > 0
            current_price: Latest price
            all_time_low: Lowest recorded price
            all_time_high: Highest recorded price
            category_ids: Categories to link; must not contain duplicates

        Returns:
            The created Coin

        Raises:
            ConstraintViolation: Ticker taken, launch price not positive,
                duplicate or unknown category id
        """
        ticker = normalize_ticker(ticker)
        fields = CatalogService._coin_fields(
            ticker, name, launch_price, current_price, all_time_low, all_time_high
        )

        with write_transaction(db):
            if db.query(Coin.ticker).filter(Coin.ticker == ticker).first():
                raise ConstraintViolation(f"Coin {ticker} already exists", ticker)

            coin = Coin(ticker=ticker, **fields)
            db.add(coin)
            db.flush()
            CatalogService._link_categories(db, ticker, category_ids)

        db.refresh(coin)
        logger.info(
            "Coin added: %s (%s, %d categories)", ticker, coin.name, len(category_ids)
        )
        return coin

    @staticmethod
    def update_coin(
        db: Session,
        ticker: str,
        name: str,
        launch_price: Decimal,
        current_price: Decimal,
        all_time_low: Decimal,
        all_time_high: Decimal,
        category_ids: Sequence[int] = (),
    ) -> Coin:
        """Replace a coin's fields and its whole category set.

        The existing classification links are deleted and the given ones
        inserted; nothing is merged.

        Raises:
            NotFound: If the ticker is not in the catalog
            ConstraintViolation: Launch price not positive, duplicate or
                unknown category id
        """
        ticker = normalize_ticker(ticker)

        with write_transaction(db):
            coin = db.query(Coin).filter(Coin.ticker == ticker).first()
            if coin is None:
                raise NotFound(f"Coin {ticker} is not in the catalog", ticker)

            fields = CatalogService._coin_fields(
                ticker, name, launch_price, current_price, all_time_low, all_time_high
            )
            for key, value in fields.items():
                setattr(coin, key, value)

            db.query(CoinCategory).filter(CoinCategory.ticker == ticker).delete(
                synchronize_session=False
            )
            db.flush()
            CatalogService._link_categories(db, ticker, category_ids)

        db.refresh(coin)
        logger.info(
            "Coin updated: %s (%d categories)", ticker, len(category_ids)
        )
        return coin

    @staticmethod
    def remove_coin_everywhere(db: Session, ticker: str) -> bool:
        """Delete a coin together with everything that references it.

        Order: classification links, then the holding, then the coin.
        Deleting an unknown ticker is a no-op.

        Returns:
            True if the coin existed and was removed, False otherwise
        """
        ticker = normalize_ticker(ticker)

        with write_transaction(db):
            coin = db.query(Coin).filter(Coin.ticker == ticker).first()
            if coin is None:
                logger.debug("Remove skipped, coin %s not in catalog", ticker)
                return False

            links_removed = (
                db.query(CoinCategory)
                .filter(CoinCategory.ticker == ticker)
                .delete(synchronize_session=False)
            )

            # ORM deletes (not bulk) so the change-log hooks fire
            holding = db.query(Holding).filter(Holding.ticker == ticker).first()
            if holding is not None:
                db.delete(holding)
                db.flush()

            db.delete(coin)
            db.flush()

        logger.info(
            "Coin removed everywhere: %s (%d links, holding=%s)",
            ticker, links_removed, holding is not None,
        )
        return True

    @staticmethod
    def _coin_fields(
        ticker: str,
        name: str,
        launch_price,
        current_price,
        all_time_low,
        all_time_high,
    ) -> dict:
        """Validate coin input and return the column values to store."""
        if not is_valid_ticker(ticker):
            raise ConstraintViolation(f"Invalid ticker: {ticker!r}", ticker)

        name = (name or "").strip()
        if not name or len(name) > COIN_NAME_MAX_LENGTH:
            raise ConstraintViolation(
                f"Coin name must be 1-{COIN_NAME_MAX_LENGTH} characters", ticker
            )

        fields = {
            "name": name,
            "launch_price": to_decimal(launch_price),
            "current_price": to_decimal(current_price),
            "all_time_low": to_decimal(all_time_low),
            "all_time_high": to_decimal(all_time_high),
        }
        missing = [key for key, value in fields.items() if value is None]
        if missing:
            raise ConstraintViolation(
                f"Missing values for {', '.join(missing)}", ticker
            )
        if fields["launch_price"] <= 0:
            raise ConstraintViolation(
                f"Launch price must be greater than 0, got {launch_price}", ticker
            )
        return fields

    @staticmethod
    def _link_categories(
        db: Session, ticker: str, category_ids: Sequence[int]
    ) -> None:
        """Insert one classification link per category id."""
        if not category_ids:
            return

        known = {
            cid for (cid,) in
            db.query(Category.id).filter(Category.id.in_(sorted(set(category_ids)))).all()
        }
        unknown = sorted(set(category_ids) - known)
        if unknown:
            raise ConstraintViolation(
                f"Unknown category id(s): {', '.join(map(str, unknown))}", ticker
            )

        for category_id in category_ids:
            db.add(CoinCategory(ticker=ticker, category_id=category_id))
        # Duplicate ids trip the (ticker, category_id) unique constraint here
        db.flush()
