from typing import Optional
from jiceot.database.db_manager import DatabaseManager
from jiceot.models.completion_record import CompletionRecord


class CompletionDAO:
    """Bill payments and expense items; the kind comes from the owning type."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> CompletionRecord:
        return CompletionRecord(
            id=row["id"],
            type_id=row["type_id"],
            kind=row["kind"],
            year=row["year"],
            month=row["month"],
            amount=row["amount"],
            note=row["note"],
            created_at=row["created_at"],
        )

    def _select(self) -> str:
        return """
            SELECT c.*, t.kind AS kind
            FROM completions c
            JOIN obligation_types t ON c.type_id = t.id
        """

    def list_for_period(self, type_id: int, year: int, month: int) -> list[CompletionRecord]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " WHERE c.type_id = ? AND c.year = ? AND c.month = ? ORDER BY c.id",
            (type_id, year, month),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def list_for_types(self, type_ids: list[int]) -> list[CompletionRecord]:
        if not type_ids:
            return []
        conn = self._db.get_connection()
        placeholders = ", ".join("?" for _ in type_ids)
        rows = conn.execute(
            self._select()
            + f" WHERE c.type_id IN ({placeholders}) ORDER BY c.year, c.month, c.id",
            list(type_ids),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def list_for_month(self, year: int, month: int, kind: str | None = None) -> list[CompletionRecord]:
        conn = self._db.get_connection()
        sql = self._select() + " WHERE c.year = ? AND c.month = ?"
        params: list = [year, month]
        if kind:
            sql += " AND t.kind = ?"
            params.append(kind)
        sql += " ORDER BY c.id"
        rows = conn.execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, record_id: int) -> Optional[CompletionRecord]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE c.id = ?", (record_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, type_id: int, year: int, month: int, amount: str, note: str = "") -> CompletionRecord:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "INSERT INTO completions (type_id, year, month, amount, note) VALUES (?, ?, ?, ?, ?)",
            (type_id, year, month, amount, note),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def delete(self, record_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM completions WHERE id = ?", (record_id,))
        conn.commit()
