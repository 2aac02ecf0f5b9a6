from dataclasses import dataclass


@dataclass
class CompletionRecord:
    """A bill payment or expense item logged against a type for one (year, month)."""
    id: int
    type_id: int
    kind: str               # 'bill' | 'expense'
    year: int
    month: int
    amount: str             # decimal string; '0.00' marks "settled, no payment"
    note: str = ""
    created_at: str = ""

    @property
    def period(self) -> tuple[int, int]:
        return (self.year, self.month)
