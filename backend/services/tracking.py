# backend/services/tracking.py
from datetime import datetime
from typing import Callable

from sqlalchemy.orm import Session

from models.order import RentalOrder
from models.tracking import TrackingRecord
from schemas.tracking import TrackingOut
from schemas.user import UserSession
from services.ids import TRACKING_PREFIX
from utils.errors import InputError, RecordNotFound
from utils.permissions import Capability, require_capability

EDITABLE_FIELDS = {
    "status": TrackingRecord.status,
    "location": TrackingRecord.current_location,
    "courier": TrackingRecord.courier_name,
    "comments": TrackingRecord.additional_comments,
}


def tracking_key(number: str) -> str:
    number = (number or "").strip()
    return number if number.startswith(TRACKING_PREFIX) else f"{TRACKING_PREFIX}{number}"


# Tracking info of one of the session's own orders
def view_tracking(db: Session, session: UserSession, number: str) -> TrackingOut:
    t = db.query(TrackingRecord).join(
        RentalOrder, TrackingRecord.rental_order_id == RentalOrder.rental_order_id
    ).filter(
        TrackingRecord.tracking_id == tracking_key(number),
        RentalOrder.login == session.login,
    ).first()

    if not t:
        raise RecordNotFound("Tracking info not found or does not belong to you.")
    return TrackingOut.model_validate(t)


def get_tracking(db: Session, number: str) -> TrackingRecord:
    t = db.query(TrackingRecord).filter(TrackingRecord.tracking_id == tracking_key(number)).first()
    if not t:
        raise RecordNotFound("Tracking info not found.")
    return t


# Staff edit of any tracking record; every edit refreshes the last update date
def update_tracking(
    db: Session,
    session: UserSession,
    number: str,
    field: str,
    value: str,
    clock: Callable[[], datetime] = datetime.now,
) -> TrackingOut:
    require_capability(session, Capability.UPDATE_TRACKING)
    if field not in EDITABLE_FIELDS:
        raise InputError(f"Unknown tracking field '{field}'.")

    t = get_tracking(db, number)
    setattr(t, EDITABLE_FIELDS[field].key, value)
    t.last_update_date = clock()
    db.commit()
    db.refresh(t)
    return TrackingOut.model_validate(t)
