# backend/models/catalog.py
from sqlalchemy import Column, String, Numeric, CheckConstraint
from database import Base

# Catalog entry
# One rentable game title. The price is the per-copy rental price that the
# cart builder multiplies by the ordered quantity.
class CatalogEntry(Base):
    __tablename__ = "catalog"

    game_id = Column(String(50), primary_key=True, index=True)
    game_name = Column(String, nullable=False, index=True)
    genre = Column(String, index=True)

    price = Column(Numeric(10, 2), CheckConstraint("price >= 0"), nullable=False)

    description = Column(String)
    image_url = Column(String, nullable=True)
