import logging

from jiceot.database.obligation_type_dao import ObligationTypeDAO
from jiceot.models.obligation_type import ObligationType, validate_cycle
from jiceot.utils.constants import OBLIGATION_KINDS
from jiceot.utils.currency import normalize_amount
from jiceot.utils.date_helpers import validate_period

logger = logging.getLogger(__name__)


class ObligationTypeService:
    def __init__(self, type_dao: ObligationTypeDAO):
        self._dao = type_dao

    def get_all(self, include_stopped: bool = False, kind: str | None = None) -> list[ObligationType]:
        return self._dao.list_obligation_types(include_stopped=include_stopped, kind=kind)

    def get_by_id(self, type_id: int) -> ObligationType | None:
        return self._dao.get_by_id(type_id)

    def create(
        self,
        name: str,
        kind: str,
        cycle_months: int = 0,
        anchor_day: int = 0,
        fixed_amount: str = "",
        start_year: int | None = None,
        start_month: int | None = None,
        icon: str = "",
        color: str = "",
    ) -> ObligationType:
        self._validate(name, kind, cycle_months, anchor_day, start_year, start_month)
        ob_type = self._dao.create(
            name=name.strip(), kind=kind, cycle_months=cycle_months,
            anchor_day=anchor_day, fixed_amount=self._clean_amount(fixed_amount),
            start_year=start_year, start_month=start_month, icon=icon, color=color,
        )
        logger.info("Created %s type %d (%s)", kind, ob_type.id, ob_type.name)
        return ob_type

    def update(
        self,
        type_id: int,
        name: str,
        cycle_months: int = 0,
        anchor_day: int = 0,
        fixed_amount: str = "",
        start_year: int | None = None,
        start_month: int | None = None,
        icon: str = "",
        color: str = "",
        stopped: bool = False,
    ) -> ObligationType:
        existing = self._dao.get_by_id(type_id)
        if existing is None:
            raise ValueError(f"Type {type_id} does not exist.")
        self._validate(name, existing.kind, cycle_months, anchor_day, start_year, start_month)
        return self._dao.update(
            type_id=type_id, name=name.strip(), cycle_months=cycle_months,
            anchor_day=anchor_day, fixed_amount=self._clean_amount(fixed_amount),
            start_year=start_year, start_month=start_month, icon=icon, color=color,
            stopped=stopped,
        )

    def set_stopped(self, type_id: int, stopped: bool):
        self._dao.set_stopped(type_id, stopped)

    def delete(self, type_id: int):
        self._dao.delete(type_id)
        logger.info("Deleted type %d", type_id)

    def _clean_amount(self, fixed_amount: str) -> str:
        if fixed_amount is None or str(fixed_amount).strip() == "":
            return ""
        amount = normalize_amount(fixed_amount)
        if amount.startswith("-"):
            raise ValueError("Fixed amount must be 0 or greater.")
        return amount

    def _validate(self, name, kind, cycle_months, anchor_day, start_year, start_month):
        if not name or not name.strip():
            raise ValueError("Name cannot be empty.")
        if kind not in OBLIGATION_KINDS:
            raise ValueError("Kind must be bill or expense.")
        validate_cycle(cycle_months, anchor_day)
        if (start_year is None) != (start_month is None):
            raise ValueError("Start year and month must be given together.")
        if start_year is not None:
            validate_period(start_year, start_month)
