# freshbulk/utils/formatters.py
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP


def format_price(price: Decimal | int | float | str) -> str:
    amount = Decimal(str(price)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"₹{amount}"


def format_date(value: datetime) -> str:
    return value.strftime("%B %d, %Y").replace(" 0", " ")
