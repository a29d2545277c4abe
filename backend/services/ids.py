# backend/services/ids.py
"""Identifier allocation for rental orders and tracking records.

Identifiers are a fixed prefix followed by an increasing number
("gamerentalorder12", "trackingid12"). The last issued number of each kind
lives in the ``idcounters`` table and is advanced with a single UPDATE, so the
row lock it takes keeps two sessions from handing out the same number. Call
the allocator inside ``Gateway.atomic()`` so the counter advance commits or
rolls back together with the rows that use the new id.
"""
import logging
import re

from utils.errors import AllocationError
from utils.gateway import Gateway

logger = logging.getLogger(__name__)

ORDER_PREFIX = "gamerentalorder"
TRACKING_PREFIX = "trackingid"

_DIGITS = re.compile(r"[^0-9]")


def numeric_suffix(identifier: str) -> int:
    digits = _DIGITS.sub("", identifier or "")
    if not digits:
        raise AllocationError(f"Stored identifier '{identifier}' has no numeric part")
    return int(digits)


class IdKind:
    def __init__(self, counter: str, prefix: str, table: str, column: str):
        self.counter = counter
        self.prefix = prefix
        self.table = table
        self.column = column

    def format(self, number: int) -> str:
        return f"{self.prefix}{number}"


ORDER_IDS = IdKind("rentalorder", ORDER_PREFIX, "rentalorder", "rental_order_id")
TRACKING_IDS = IdKind("trackingid", TRACKING_PREFIX, "trackinginfo", "tracking_id")


class IdentifierAllocator:
    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    def next_order_id(self) -> str:
        return self._next(ORDER_IDS)

    def next_tracking_id(self) -> str:
        return self._next(TRACKING_IDS)

    def stored_max(self, kind: IdKind) -> int:
        # Numeric, not lexicographic: gamerentalorder10 sorts above gamerentalorder9
        rows = self.gateway.query_rows(f"SELECT {kind.column} FROM {kind.table}")
        return max((numeric_suffix(row[0]) for row in rows), default=0)

    def _next(self, kind: IdKind) -> str:
        updated = self.gateway.execute_write(
            "UPDATE idcounters SET value = value + 1 WHERE name = :name",
            {"name": kind.counter},
        )
        if updated == 0:
            # First allocation of this kind; an empty table starts at 1
            seed = self.stored_max(kind) + 1
            self.gateway.execute_write(
                "INSERT INTO idcounters (name, value) VALUES (:name, :value)",
                {"name": kind.counter, "value": seed},
            )
            logger.info("Seeded %s counter at %d", kind.counter, seed)

        number = self._counter_value(kind)
        identifier = kind.format(number)

        # Rows written without going through the counter (seed scripts, manual
        # inserts) can be ahead of it; jump past them
        taken = self.gateway.query_rows(
            f"SELECT 1 FROM {kind.table} WHERE {kind.column} = :id", {"id": identifier}
        )
        if taken:
            number = self.stored_max(kind) + 1
            self.gateway.execute_write(
                "UPDATE idcounters SET value = :value WHERE name = :name",
                {"name": kind.counter, "value": number},
            )
            identifier = kind.format(number)
            logger.warning("%s counter was behind stored rows, resynced at %d", kind.counter, number)

        return identifier

    def _counter_value(self, kind: IdKind) -> int:
        rows = self.gateway.query_rows(
            "SELECT value FROM idcounters WHERE name = :name", {"name": kind.counter}
        )
        if not rows or rows[0][0] is None:
            raise AllocationError(f"No {kind.counter} counter could be read")
        return int(rows[0][0])
