from decimal import Decimal

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from config import settings
from conftest import FIXED_NOW
from models.order import GameLineItem, RentalOrder
from models.tracking import TrackingRecord
from schemas.order import Cart, LineItem
from schemas.user import UserSession
from services.orders import OrderTransactionCoordinator, order_detail, order_history
from utils.errors import InputError, PermissionDenied, RecordNotFound, TransactionError
from utils.permissions import Role


def _cart(*items):
    lines = [LineItem(game_id=g, quantity=q, unit_price=Decimal(p)) for g, q, p in items]
    return Cart(
        items=lines,
        game_count=sum(it.quantity for it in lines),
        total_price=sum((it.line_total for it in lines), Decimal("0")).quantize(Decimal("0.01")),
    )


@pytest.fixture
def coordinator(gateway, clock):
    return OrderTransactionCoordinator(gateway, clock=clock)


@pytest.fixture
def fail_line_items(engine):
    def _fail(conn, cursor, statement, parameters, context, executemany):
        if statement.startswith("INSERT INTO gamesinorder"):
            raise OperationalError(statement, parameters, Exception("disk I/O error"))

    def disarm():
        if event.contains(engine, "before_cursor_execute", _fail):
            event.remove(engine, "before_cursor_execute", _fail)

    event.listen(engine, "before_cursor_execute", _fail)
    yield disarm
    disarm()


def test_place_order_writes_header_items_and_tracking(seeded, db, coordinator, customer):
    receipt = coordinator.place(customer, _cart(("G1", 2, "9.99")))

    assert receipt.rental_order_id == "gamerentalorder1"
    assert receipt.tracking_id == "trackingid1"
    assert receipt.game_count == 2
    assert receipt.total_price == Decimal("19.98")

    order = db.query(RentalOrder).one()
    assert order.login == "alice"
    assert order.no_of_games == 2
    assert order.total_price == Decimal("19.98")
    assert order.order_timestamp == FIXED_NOW
    assert (order.due_date - order.order_timestamp).days == 7

    assert [(g.game_id, g.units_ordered) for g in db.query(GameLineItem).all()] == [("G1", 2)]

    tracking = db.query(TrackingRecord).one()
    assert tracking.rental_order_id == "gamerentalorder1"
    assert tracking.status == "Order Processing"
    assert tracking.current_location == "home office"
    assert tracking.courier_name == "TBD"
    assert tracking.last_update_date == FIXED_NOW


def test_stored_totals_match_line_items(seeded, db, coordinator, customer):
    coordinator.place(customer, _cart(("G1", 3, "9.99"), ("G2", 1, "5.00"), ("game3", 2, "14.50")))

    order = db.query(RentalOrder).one()
    items = db.query(GameLineItem).all()
    assert order.no_of_games == sum(i.units_ordered for i in items) == 6
    assert order.total_price == Decimal("63.97")


def test_consecutive_orders_get_increasing_ids(seeded, coordinator, customer):
    first = coordinator.place(customer, _cart(("G1", 1, "9.99")))
    second = coordinator.place(customer, _cart(("G2", 1, "5.00")))

    assert (first.rental_order_id, second.rental_order_id) == ("gamerentalorder1", "gamerentalorder2")
    assert (first.tracking_id, second.tracking_id) == ("trackingid1", "trackingid2")


def test_line_item_failure_leaves_store_unchanged(seeded, db, coordinator, customer, fail_line_items):
    with pytest.raises(TransactionError) as exc:
        coordinator.place(customer, _cart(("G1", 2, "9.99")))

    assert exc.value.rental_order_id == "gamerentalorder1"
    assert "disk I/O error" in exc.value.reason
    assert db.query(RentalOrder).filter_by(rental_order_id="gamerentalorder1").first() is None
    assert db.query(GameLineItem).count() == 0
    assert db.query(TrackingRecord).count() == 0


def test_failed_attempt_does_not_consume_ids(seeded, coordinator, customer, fail_line_items):
    with pytest.raises(TransactionError):
        coordinator.place(customer, _cart(("G1", 1, "9.99")))
    fail_line_items()

    receipt = coordinator.place(customer, _cart(("G1", 1, "9.99")))

    assert receipt.rental_order_id == "gamerentalorder1"
    assert receipt.tracking_id == "trackingid1"


def test_duplicate_line_rows_roll_back_whole_order(seeded, db, coordinator, customer):
    # Two rows for the same game violate the (order, game) key
    cart = Cart(
        items=[
            LineItem(game_id="G1", quantity=1, unit_price=Decimal("9.99")),
            LineItem(game_id="G1", quantity=1, unit_price=Decimal("9.99")),
        ],
        game_count=2,
        total_price=Decimal("19.98"),
    )

    with pytest.raises(TransactionError):
        coordinator.place(customer, cart)

    assert db.query(RentalOrder).count() == 0
    assert db.query(TrackingRecord).count() == 0


def test_empty_cart_is_still_an_order_by_default(seeded, db, coordinator, customer):
    receipt = coordinator.place(customer, Cart())

    assert receipt.game_count == 0
    assert receipt.total_price == Decimal("0.00")
    assert db.query(RentalOrder).one().no_of_games == 0
    assert db.query(GameLineItem).count() == 0
    assert db.query(TrackingRecord).count() == 1


def test_empty_cart_rejected_when_disabled(seeded, db, coordinator, customer, monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_EMPTY_ORDERS", False)

    with pytest.raises(InputError):
        coordinator.place(customer, Cart())

    assert db.query(RentalOrder).count() == 0


def test_unknown_role_cannot_order(seeded, coordinator):
    class Stranger:
        login = "alice"
        role = "guest"

    with pytest.raises(PermissionDenied):
        coordinator.place(Stranger(), _cart(("G1", 1, "9.99")))


def test_history_and_detail_only_show_own_orders(seeded, coordinator, customer, db):
    coordinator.place(customer, _cart(("G1", 2, "9.99")))
    coordinator.place(UserSession(login="bob", role=Role.EMPLOYEE), _cart(("G2", 1, "5.00")))
    coordinator.place(customer, _cart(("G2", 1, "5.00")))

    assert order_history(db, customer) == ["gamerentalorder3", "gamerentalorder1"]
    assert order_history(db, customer, limit=1) == ["gamerentalorder3"]

    detail = order_detail(db, customer, "1")
    assert detail.tracking_id == "trackingid1"
    assert detail.total_price == Decimal("19.98")
    assert [(g.game_id, g.units_ordered) for g in detail.games] == [("G1", 2)]

    with pytest.raises(RecordNotFound):
        order_detail(db, customer, "2")


def test_history_breaks_timestamp_ties_by_id_number(seeded, coordinator, customer, db):
    for _ in range(10):
        coordinator.place(customer, _cart(("G2", 1, "5.00")))

    history = order_history(db, customer)

    assert history[:3] == ["gamerentalorder10", "gamerentalorder9", "gamerentalorder8"]
    assert order_history(db, customer, limit=1) == ["gamerentalorder10"]
