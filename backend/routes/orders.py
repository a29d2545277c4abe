# backend/routes/orders.py
from datetime import datetime

from config import settings
from routes.common import menu_action
from services.cart import CartBuilder
from services.orders import OrderTransactionCoordinator, order_detail, order_history
from utils.audit import write_log
from utils.display import id_number, money
from utils.errors import TransactionError
from utils.gateway import Gateway
from utils.permissions import Capability, require_capability


# Build a cart interactively and commit it as one rental order
@menu_action
def place_order(db, prompter, session, clock=datetime.now):
    require_capability(session, Capability.PLACE_ORDER)
    prompter.say("\n---ORDER PLACEMENT---\n")

    gateway = Gateway(db)
    cart = CartBuilder(gateway, prompter).build()

    try:
        receipt = OrderTransactionCoordinator(gateway, clock=clock).place(session, cart)
    except TransactionError as e:
        write_log(db, user_login=session.login, action="ORDER_PLACE", resource="orders", status="FAIL",
                  meta={"order_id": getattr(e, "rental_order_id", None), "reason": e.reason})
        raise

    write_log(db, user_login=session.login, action="ORDER_PLACE", resource="orders", status="SUCCESS",
              meta={"order_id": receipt.rental_order_id, "tracking_id": receipt.tracking_id,
                    "games": receipt.game_count, "total": str(receipt.total_price)})

    prompter.say(f"\nRental Order #{id_number(receipt.rental_order_id)} placed, "
                 f"with Tracking ID #{id_number(receipt.tracking_id)} has successfully been placed.")
    prompter.say(f"Order total: {money(receipt.total_price)} for {receipt.game_count} games. \n")
    return receipt


def _print_order_ids(prompter, title, ids):
    if not ids:
        prompter.say("You have no order history.")
    else:
        prompter.say(title)
        for order_id in ids:
            prompter.say(f"- #{id_number(order_id)}")
    prompter.say()


@menu_action
def view_all_orders(db, prompter, session):
    ids = order_history(db, session)
    _print_order_ids(prompter, "Your order history:", ids)
    return ids


@menu_action
def view_recent_orders(db, prompter, session):
    limit = settings.RECENT_ORDERS_LIMIT
    ids = order_history(db, session, limit=limit)
    _print_order_ids(prompter, f"Your {limit} most recent orders:", ids)
    return ids


@menu_action
def view_order_info(db, prompter, session):
    number = prompter.prompt_line("Enter the ID # of the order you'd like to view: ")
    detail = order_detail(db, session, number)

    prompter.say("Order details:")
    prompter.say(f"- Order Timestamp: {detail.order_timestamp}")
    prompter.say(f"- Due Date: {detail.due_date}")
    prompter.say(f"- Total Price: {money(detail.total_price)}")
    prompter.say(f"- Tracking ID: {id_number(detail.tracking_id) if detail.tracking_id else 'none'}")

    if detail.games:
        prompter.say("Games in this order:")
        for g in detail.games:
            prompter.say(f"- Game ID: {g.game_id}, Units Ordered: {g.units_ordered}")
    else:
        prompter.say("No games found for this order.")
    return detail
