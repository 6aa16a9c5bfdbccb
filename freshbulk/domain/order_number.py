# freshbulk/domain/order_number.py
from freshbulk.utils.settings import ORDER_NUMBER_PREFIX


def generate_order_number(sequence: int, prefix: str = ORDER_NUMBER_PREFIX) -> str:
    """
    Numer zamowienia widoczny dla klienta: prefiks + id dopelnione zerami do 5 cyfr.
    Id jest unikalne w obrebie store, wiec numer tez.
    """
    if sequence <= 0:
        raise ValueError("Numer sekwencji musi byc dodatni")
    return f"{prefix}{sequence:05d}"


def normalize_order_number(order_number: str, prefix: str = ORDER_NUMBER_PREFIX) -> str:
    """Dokleja prefiks do golego numeru, np. '00012' -> 'FBO-00012'."""
    order_number = (order_number or "").strip()
    if not order_number:
        return ""
    if order_number.upper().startswith(prefix.upper()):
        return prefix + order_number[len(prefix):]
    return f"{prefix}{order_number}"
