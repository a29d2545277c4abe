# backend/services/catalog.py
from decimal import Decimal, InvalidOperation
from typing import List

from sqlalchemy.orm import Session

from models.catalog import CatalogEntry
from schemas.catalog import CatalogEntryOut, CatalogFilter
from schemas.user import UserSession
from utils.errors import InputError, RecordNotFound
from utils.permissions import Capability, require_capability

GAME_PREFIX = "game"

# Operator facing field name -> column
EDITABLE_FIELDS = {
    "name": CatalogEntry.game_name,
    "genre": CatalogEntry.genre,
    "price": CatalogEntry.price,
    "description": CatalogEntry.description,
    "image_url": CatalogEntry.image_url,
}


def game_key(number: str) -> str:
    number = (number or "").strip()
    return number if number.startswith(GAME_PREFIX) else f"{GAME_PREFIX}{number}"


def browse(db: Session, flt: CatalogFilter) -> List[CatalogEntryOut]:
    query = db.query(CatalogEntry)

    if flt.genre:
        query = query.filter(CatalogEntry.genre == flt.genre)
    if flt.max_price is not None:
        query = query.filter(CatalogEntry.price <= flt.max_price)

    col = CatalogEntry.price
    query = query.order_by(col.asc() if flt.order == "asc" else col.desc(), CatalogEntry.game_id)
    return [CatalogEntryOut.model_validate(g) for g in query.all()]


def get_game(db: Session, game_id: str) -> CatalogEntry:
    # Accept the full id or just its number ("game7" or "7")
    keys = {(game_id or "").strip(), game_key(game_id)}
    game = db.query(CatalogEntry).filter(CatalogEntry.game_id.in_(keys)).order_by(CatalogEntry.game_id).first()
    if not game:
        raise RecordNotFound("Game info not found.")
    return game


def update_game(db: Session, session: UserSession, game_id: str, field: str, value: str) -> CatalogEntry:
    require_capability(session, Capability.UPDATE_CATALOG)
    if field not in EDITABLE_FIELDS:
        raise InputError(f"Unknown catalog field '{field}'.")

    game = get_game(db, game_id)

    if field == "price":
        try:
            value = Decimal(value.strip().lstrip("$"))
        except InvalidOperation:
            raise InputError(f"'{value}' is not a price.")
        if not value.is_finite() or value < 0:
            raise InputError("Price must be a non-negative number.")

    setattr(game, EDITABLE_FIELDS[field].key, value)
    db.commit()
    db.refresh(game)
    return game
