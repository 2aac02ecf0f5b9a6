import logging

from jiceot.database.completion_dao import CompletionDAO
from jiceot.database.obligation_type_dao import ObligationTypeDAO
from jiceot.models.completion_record import CompletionRecord
from jiceot.utils.currency import normalize_amount
from jiceot.utils.date_helpers import validate_period

logger = logging.getLogger(__name__)


class CompletionService:
    """Logs bill payments and expense items against a type for one period."""

    def __init__(self, completion_dao: CompletionDAO, type_dao: ObligationTypeDAO):
        self._dao = completion_dao
        self._type_dao = type_dao

    def list_for_period(self, type_id: int, year: int, month: int) -> list[CompletionRecord]:
        return self._dao.list_for_period(type_id, year, month)

    def record(
        self, type_id: int, year: int, month: int, amount: str, note: str = ""
    ) -> CompletionRecord:
        amount = self._validate(type_id, year, month, amount)
        record = self._dao.create(type_id, year, month, amount, note)
        logger.info("Recorded %s for type %d in %d-%02d", amount, type_id, year, month)
        return record

    def mark_settled(self, type_id: int, year: int, month: int, note: str = "") -> CompletionRecord:
        """Complete a period without a payment, recorded as a zero amount."""
        return self.record(type_id, year, month, "0", note)

    def delete(self, record_id: int):
        self._dao.delete(record_id)

    def _validate(self, type_id, year, month, amount) -> str:
        if self._type_dao.get_by_id(type_id) is None:
            raise ValueError(f"Type {type_id} does not exist.")
        validate_period(year, month)
        if amount is None or str(amount).strip() == "":
            raise ValueError("Amount is required.")
        normalized = normalize_amount(amount)
        if normalized.startswith("-"):
            raise ValueError("Amount must be 0 or greater.")
        return normalized
