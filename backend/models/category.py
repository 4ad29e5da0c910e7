"""Category model - coin classification taxonomy."""

from sqlalchemy import Column, Integer, String

from database import Base

# Joins a coin's category names in the reporting views, so names never
# contain a comma.
CATEGORY_SEPARATOR = ", "


class Category(Base):
    """A classification bucket such as "Layer 1" or "Memecoin"."""

    __tablename__ = "category"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)
