# backend/utils/display.py
from decimal import Decimal
import re
from typing import List, Sequence


def id_number(identifier: str) -> str:
    """Numeric suffix shown to the operator ("gamerentalorder12" -> "12")."""
    return re.sub(r"[^0-9]", "", identifier or "")


def money(value) -> str:
    return f"${Decimal(value).quantize(Decimal('0.01'))}"


def format_table(headers: Sequence[str], rows: List[Sequence]) -> str:
    # Column width is the longest value in the column, header included
    widths = [len(h) for h in headers]
    for row in rows:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len("" if value is None else str(value)))

    def line(values):
        cells = ["" if v is None else str(v) for v in values]
        return " | ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip()

    out = [line(headers), "-+-".join("-" * w for w in widths)]
    out.extend(line(row) for row in rows)
    return "\n".join(out)
