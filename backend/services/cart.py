# backend/services/cart.py
from decimal import Decimal
import logging
from typing import Dict, Optional, Tuple

from schemas.order import Cart, LineItem
from utils.gateway import Gateway
from utils.prompt import Prompter

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class CartBuilder:
    """Collects (game, quantity) pairs from the operator and totals them.

    Only reads catalog prices; nothing is written until the finished cart is
    handed to the order coordinator.
    """

    def __init__(self, gateway: Gateway, prompter: Prompter):
        self.gateway = gateway
        self.prompter = prompter
        self._items: Dict[str, LineItem] = {}
        self.game_count = 0
        self.total_price = Decimal("0")

    def lookup(self, game_id: str) -> Optional[Tuple[str, Decimal]]:
        rows = self.gateway.query_rows(
            "SELECT price, game_name FROM catalog WHERE game_id = :game_id",
            {"game_id": game_id},
        )
        if not rows or rows[0][0] is None:
            return None
        price, name = rows[0]
        return name, Decimal(price)

    def add(self, game_id: str, name: str, unit_price: Decimal, quantity: int) -> bool:
        # Zero or negative quantities are accepted but add nothing
        if quantity <= 0:
            return False

        existing = self._items.get(game_id)
        if existing:
            existing.quantity += quantity
        else:
            self._items[game_id] = LineItem(
                game_id=game_id, game_name=name, quantity=quantity, unit_price=unit_price
            )

        self.game_count += quantity
        self.total_price += unit_price * quantity
        return True

    def cart(self) -> Cart:
        return Cart(
            items=list(self._items.values()),
            game_count=self.game_count,
            total_price=self.total_price.quantize(CENT),
        )

    def build(self) -> Cart:
        while True:
            game_id = self.prompter.prompt_line("Enter the game ID you would like to rent: ").strip()

            found = self.lookup(game_id)
            if found is None:
                self.prompter.say("Game not found or no price available.")
            else:
                name, price = found
                quantity = self.prompter.prompt_int(
                    f"Enter how many copies of {name} you would like to order: "
                )
                if not self.add(game_id, name, price, quantity):
                    logger.debug("Skipped %s with quantity %d", game_id, quantity)

            if not self.prompter.confirm("Would you like to add another game to your cart? (y/n): "):
                break

        cart = self.cart()
        logger.info("Cart built: %d line items, %d games, total %s",
                    len(cart.items), cart.game_count, cart.total_price)
        return cart
