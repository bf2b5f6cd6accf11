import uuid
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
# предел колонок Numeric(10, 2)
MAX_AMOUNT = Decimal("99999999.99")


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_money(value) -> Decimal:
    """
    Приводит цену к Decimal с точностью до копеек.
    float идёт через str, чтобы не тащить двоичную погрешность.
    Бросает ValueError на нечисловом значении и на сумме больше MAX_AMOUNT.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
        if not amount.is_finite():
            raise ValueError(f"Invalid amount: {value!r}")
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError):
        raise ValueError(f"Invalid amount: {value!r}")
    check_amount(amount)
    return amount


def check_amount(amount: Decimal) -> Decimal:
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"Amount {amount} exceeds {MAX_AMOUNT}")
    return amount
