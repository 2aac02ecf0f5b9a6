"""Deep links that open a prefilled payment/expense form.

The query keys (bill_type_id / expense_type_id, year, month, amount) are read
by the creation forms and must keep their names.
"""
from urllib.parse import urlencode

from jiceot.models.obligation_type import ObligationType
from jiceot.utils.constants import PREFILL_ROUTES


def prefill_query(
    ob_type: ObligationType,
    year: int,
    month: int,
    amount: str | None = None,
    return_url: str | None = None,
) -> dict[str, str]:
    """amount defaults to the type's fixed amount ('' when it has none)."""
    _, id_key = PREFILL_ROUTES[ob_type.kind]
    params = {
        id_key: str(ob_type.id),
        "year": str(year),
        "month": str(month),
        "amount": ob_type.fixed_amount if amount is None else amount,
    }
    if return_url:
        params["returnUrl"] = return_url
    return params


def prefill_link(
    ob_type: ObligationType,
    year: int,
    month: int,
    settle: bool = False,
    return_url: str | None = None,
) -> str:
    """Link to the creation form; settle=True prefills a zero "settled" amount."""
    path, _ = PREFILL_ROUTES[ob_type.kind]
    query = prefill_query(ob_type, year, month, "0" if settle else None, return_url)
    return f"{path}?{urlencode(query)}"
