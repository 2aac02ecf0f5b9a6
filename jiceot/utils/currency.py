from decimal import Decimal, InvalidOperation


def parse_amount(amount: str) -> Decimal:
    """Parse a stored decimal string; empty means zero. Raises ValueError when malformed."""
    if amount is None or str(amount).strip() == "":
        return Decimal("0")
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount!r}")
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    return value


def normalize_amount(amount) -> str:
    """Return the canonical two-decimal string stored for an amount, e.g. '12.50'."""
    return f"{parse_amount(amount):.2f}"


def format_currency(amount, symbol: str = "$") -> str:
    """Format an amount as currency string, e.g. '$1,234.56'."""
    return f"{symbol}{parse_amount(amount):,.2f}"
