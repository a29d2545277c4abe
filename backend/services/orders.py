# backend/services/orders.py
from datetime import datetime, timedelta
import logging
from typing import Callable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from config import settings
from models.order import RentalOrder, GameLineItem
from models.tracking import TrackingRecord
from schemas.order import Cart, OrderReceipt, OrderDetail, OrderGameOut
from schemas.user import UserSession
from services.ids import IdentifierAllocator, ORDER_PREFIX
from utils.errors import AllocationError, InputError, RecordNotFound, TransactionError
from utils.gateway import Gateway
from utils.permissions import Capability, require_capability

logger = logging.getLogger(__name__)


def order_key(number: str) -> str:
    """Full order id from what the operator typed ("12" or "gamerentalorder12")."""
    number = (number or "").strip()
    return number if number.startswith(ORDER_PREFIX) else f"{ORDER_PREFIX}{number}"


class OrderTransactionCoordinator:
    """Writes a finished cart as one rental order.

    The order header, its line items and its tracking record are inserted in
    that order inside a single atomic block. Either all three are committed or
    the store is left as it was and TransactionError is raised.
    """

    def __init__(
        self,
        gateway: Gateway,
        allocator: IdentifierAllocator = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.gateway = gateway
        self.allocator = allocator or IdentifierAllocator(gateway)
        self.clock = clock

    def place(self, session: UserSession, cart: Cart) -> OrderReceipt:
        require_capability(session, Capability.PLACE_ORDER)

        if cart.is_empty:
            if not settings.ALLOW_EMPTY_ORDERS:
                raise InputError("Your cart is empty, no order was placed.")
            logger.warning("Placing an order with no games for %s", session.login)

        order_id = tracking_id = None
        try:
            with self.gateway.atomic() as db:
                order_id = self.allocator.next_order_id()
                tracking_id = self.allocator.next_tracking_id()
                now = self.clock()
                due = now + timedelta(days=settings.ORDER_DUE_DAYS)

                db.add(RentalOrder(
                    rental_order_id=order_id,
                    login=session.login,
                    no_of_games=cart.game_count,
                    total_price=cart.total_price,
                    order_timestamp=now,
                    due_date=due,
                ))
                db.flush()

                db.add_all([
                    GameLineItem(rental_order_id=order_id, game_id=it.game_id, units_ordered=it.quantity)
                    for it in cart.items
                ])
                db.flush()

                db.add(TrackingRecord(
                    tracking_id=tracking_id,
                    rental_order_id=order_id,
                    status=settings.DEFAULT_TRACKING_STATUS,
                    current_location=settings.DEFAULT_TRACKING_LOCATION,
                    courier_name=settings.DEFAULT_TRACKING_COURIER,
                    last_update_date=now,
                    additional_comments="",
                ))
        except AllocationError as e:
            logger.error("Order for %s rolled back, no id could be allocated: %s", session.login, e)
            err = TransactionError(str(e))
            err.rental_order_id = order_id
            raise err from e
        except TransactionError as e:
            e.rental_order_id = order_id
            logger.error("Order %s for %s rolled back: %s", order_id, session.login, e.reason)
            raise

        logger.info("Order %s (tracking %s) placed for %s: %d games, %s",
                    order_id, tracking_id, session.login, cart.game_count, cart.total_price)

        return OrderReceipt(
            rental_order_id=order_id,
            tracking_id=tracking_id,
            login=session.login,
            game_count=cart.game_count,
            total_price=cart.total_price,
            order_timestamp=now,
            due_date=due,
        )


def order_history(db: Session, session: UserSession, limit: Optional[int] = None) -> List[str]:
    # Ids share one prefix, so a longer id carries the larger number
    q = db.query(RentalOrder.rental_order_id).filter(
        RentalOrder.login == session.login
    ).order_by(
        RentalOrder.order_timestamp.desc(),
        func.length(RentalOrder.rental_order_id).desc(),
        RentalOrder.rental_order_id.desc(),
    )
    if limit:
        q = q.limit(limit)
    return [row[0] for row in q.all()]


def order_detail(db: Session, session: UserSession, number: str) -> OrderDetail:
    o = db.query(RentalOrder).options(
        joinedload(RentalOrder.games), joinedload(RentalOrder.tracking)
    ).filter(
        RentalOrder.rental_order_id == order_key(number),
        RentalOrder.login == session.login,
    ).first()

    if not o:
        raise RecordNotFound("Order not found or does not belong to you.")

    return OrderDetail(
        rental_order_id=o.rental_order_id,
        order_timestamp=o.order_timestamp,
        due_date=o.due_date,
        total_price=o.total_price,
        tracking_id=o.tracking.tracking_id if o.tracking else None,
        games=[OrderGameOut.model_validate(g) for g in o.games],
    )
