"""Custom column types.

SQLite has no exact decimal type (``Numeric`` is stored as REAL), so
money and weight are stored as integer hundredths and surface as
``Decimal`` with scale 2. ``SUM``/``COALESCE`` over these columns keep
the column type, so aggregates come back as ``Decimal`` too.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import Integer
from sqlalchemy.types import TypeDecorator

_HUNDRED = Decimal(100)
_TWO_PLACES = Decimal("0.01")


class Hundredths(TypeDecorator[Decimal]):
    """Decimal with two fractional digits, stored as an INTEGER."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> int | None:
        if value is None:
            return None
        amount = Decimal(str(value)) if not isinstance(value, Decimal) else value
        return int((amount * _HUNDRED).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def process_result_value(self, value: Any, dialect: Any) -> Decimal | None:
        if value is None:
            return None
        return (Decimal(int(value)) / _HUNDRED).quantize(_TWO_PLACES)
