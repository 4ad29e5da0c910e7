"""Service for the portfolio holdings."""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from database import acquire_write_lock, write_transaction
from models import Coin, Holding
from models.utils import to_decimal
from services.exceptions import ConstraintViolation, ValidationError, WriteConflict
from utils.ticker import normalize_ticker

logger = logging.getLogger(__name__)

NOTES_MAX_LENGTH = 255

COIN_NOT_IN_CATALOG = "The coin does not exist in the coin catalog. Add the coin first."
COIN_ALREADY_HELD = (
    "You already have that coin in your portfolio! "
    "Update the coin in the portfolio instead."
)


class HoldingsService:
    """Write procedures and lookups for portfolio positions."""

    @staticmethod
    def get_holding(db: Session, ticker: str) -> Optional[Holding]:
        """Get the position in a coin, or None if the coin is not held."""
        return (
            db.query(Holding)
            .filter(Holding.ticker == normalize_ticker(ticker))
            .first()
        )

    @staticmethod
    def list_holdings(db: Session) -> list[Holding]:
        """Get all positions ordered by ticker."""
        return db.query(Holding).order_by(Holding.ticker).all()

    @staticmethod
    def add_holding(
        db: Session,
        ticker: str,
        entry_price: Decimal,
        quantity: Decimal = Decimal("0"),
        notes: Optional[str] = None,
    ) -> Holding:
        """Add a catalog coin to the portfolio.

        The catalog check, the already-held check and the insert run in one
        transaction that holds the database write lock from the first read,
        so two concurrent callers cannot both pass the checks. If isolation
        is weaker than that, the unique ticker constraint rejects the second
        insert; under SERIALIZABLE the loser gets a serialization failure
        instead. Either way the same ValidationError is raised.

        Args:
            db: Database session
            ticker: Coin ticker (must be in the catalog)
            entry_price: Average entry price, must be > 0
            quantity: Amount held, must be >= 0
            notes: Free-form notes

        Returns:
            The created Holding

        Raises:
            ValidationError: Coin not in the catalog, or already held
            ConstraintViolation: Non-positive entry price, negative
                quantity, notes too long
            WriteConflict: Serialization failure not caused by an add of
                the same coin
        """
        ticker = normalize_ticker(ticker)
        quantity, entry_price = HoldingsService._position_fields(
            ticker, quantity, entry_price, notes
        )

        try:
            with write_transaction(db):
                acquire_write_lock(db)

                if not db.query(Coin.ticker).filter(Coin.ticker == ticker).first():
                    raise ValidationError(COIN_NOT_IN_CATALOG, ticker)

                if HoldingsService.get_holding(db, ticker) is not None:
                    raise ValidationError(COIN_ALREADY_HELD, ticker)

                holding = Holding(
                    ticker=ticker,
                    holdings=quantity,
                    entry_price=entry_price,
                    notes=notes,
                )
                db.add(holding)
                db.flush()
        except ValidationError as exc:
            logger.warning("Add to portfolio refused for %s: %s", ticker, exc)
            raise
        except (ConstraintViolation, WriteConflict) as exc:
            # Lost the race against a concurrent add of the same coin
            if db.query(Holding.id).filter(Holding.ticker == ticker).first():
                logger.warning("Concurrent add to portfolio detected for %s", ticker)
                raise ValidationError(COIN_ALREADY_HELD, ticker) from exc
            raise

        db.refresh(holding)
        logger.info(
            "Holding added: %s qty=%s @ %s", ticker, holding.holdings, holding.entry_price
        )
        return holding

    @staticmethod
    def update_holding(
        db: Session,
        ticker: str,
        quantity: Decimal,
        entry_price: Decimal,
        notes: Optional[str] = None,
    ) -> Optional[Holding]:
        """Overwrite quantity, entry price and notes of a position.

        Updating a coin that is not held affects nothing and raises no
        error; the return value tells the caller which case happened.

        Returns:
            The updated Holding, or None if the ticker is not held

        Raises:
            ConstraintViolation: Non-positive entry price, negative
                quantity, notes too long
        """
        ticker = normalize_ticker(ticker)
        quantity, entry_price = HoldingsService._position_fields(
            ticker, quantity, entry_price, notes
        )

        with write_transaction(db):
            holding = HoldingsService.get_holding(db, ticker)
            if holding is None:
                logger.debug("Update skipped, %s not in portfolio", ticker)
                return None

            holding.holdings = quantity
            holding.entry_price = entry_price
            holding.notes = notes
            db.flush()

        db.refresh(holding)
        logger.info("Holding updated: %s qty=%s @ %s", ticker, quantity, entry_price)
        return holding

    @staticmethod
    def remove_holding(db: Session, ticker: str) -> bool:
        """Remove a position. Removing a coin that is not held is a no-op.

        Returns:
            True if a position was removed, False otherwise
        """
        ticker = normalize_ticker(ticker)

        with write_transaction(db):
            holding = HoldingsService.get_holding(db, ticker)
            if holding is None:
                logger.debug("Remove skipped, %s not in portfolio", ticker)
                return False
            db.delete(holding)
            db.flush()

        logger.info("Holding removed: %s", ticker)
        return True

    @staticmethod
    def _position_fields(
        ticker: str, quantity, entry_price, notes: Optional[str]
    ) -> tuple[Decimal, Decimal]:
        """Validate position input against the portfolio table constraints."""
        quantity = to_decimal(quantity if quantity is not None else Decimal("0"))
        entry_price = to_decimal(entry_price)

        if quantity < 0:
            raise ConstraintViolation(
                f"Holdings cannot be negative, got {quantity}", ticker
            )
        if entry_price is None or entry_price <= 0:
            raise ConstraintViolation(
                f"Entry price must be greater than 0, got {entry_price}", ticker
            )
        if notes is not None and len(notes) > NOTES_MAX_LENGTH:
            raise ConstraintViolation(
                f"Notes cannot exceed {NOTES_MAX_LENGTH} characters", ticker
            )
        return quantity, entry_price
