"""Typed exception hierarchy for write procedures.

Lets callers tell malformed input rejected by the store apart from
missing rows and from business rules refused by a procedure.
"""


class PortfolioError(Exception):
    """Base exception for all catalog and holdings errors.

    Carries the ticker involved (when there is one) so callers can
    report which coin the failure concerns.
    """

    def __init__(self, message: str, ticker: str = ""):
        self.ticker = ticker
        super().__init__(message)


class ConstraintViolation(PortfolioError):
    """A uniqueness, foreign key or check constraint was violated.

    Examples: duplicate ticker, non-positive launch price, negative
    holdings, unknown category id.
    """

    pass


class NotFound(PortfolioError):
    """A ticker that the operation requires does not exist."""

    pass


class ValidationError(PortfolioError):
    """A procedure refused the request on a business rule.

    Raised deliberately with a human-readable message, e.g. adding a coin
    to the portfolio before it is in the catalog, or adding it twice.
    """

    pass


class WriteConflict(PortfolioError):
    """A concurrent transaction made this one impossible to serialize.

    Raised only under SERIALIZABLE isolation; the transaction has been
    rolled back and nothing was written.
    """

    pass
