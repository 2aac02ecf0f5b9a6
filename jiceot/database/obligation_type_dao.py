from typing import Optional
from jiceot.database.db_manager import DatabaseManager
from jiceot.models.obligation_type import ObligationType


class ObligationTypeDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> ObligationType:
        return ObligationType(
            id=row["id"],
            name=row["name"],
            kind=row["kind"],
            cycle_months=row["cycle_months"],
            anchor_day=row["anchor_day"],
            fixed_amount=row["fixed_amount"],
            stopped=bool(row["stopped"]),
            start_year=row["start_year"],
            start_month=row["start_month"],
            icon=row["icon"],
            color=row["color"],
        )

    def list_obligation_types(
        self, include_stopped: bool = False, kind: str | None = None
    ) -> list[ObligationType]:
        conn = self._db.get_connection()
        sql = "SELECT * FROM obligation_types WHERE 1 = 1"
        params: list = []
        if not include_stopped:
            sql += " AND stopped = 0"
        if kind:
            sql += " AND kind = ?"
            params.append(kind)
        sql += " ORDER BY name COLLATE NOCASE, id"
        rows = conn.execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, type_id: int) -> Optional[ObligationType]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM obligation_types WHERE id = ?", (type_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def count(self, kind: str | None = None) -> int:
        conn = self._db.get_connection()
        if kind:
            row = conn.execute(
                "SELECT COUNT(*) FROM obligation_types WHERE kind = ?", (kind,)
            ).fetchone()
        else:
            row = conn.execute("SELECT COUNT(*) FROM obligation_types").fetchone()
        return row[0]

    def create(
        self,
        name: str,
        kind: str,
        cycle_months: int,
        anchor_day: int,
        fixed_amount: str = "",
        start_year: int | None = None,
        start_month: int | None = None,
        icon: str = "",
        color: str = "",
    ) -> ObligationType:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO obligation_types
               (name, kind, cycle_months, anchor_day, fixed_amount,
                start_year, start_month, icon, color)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                name, kind, cycle_months, anchor_day, fixed_amount,
                start_year, start_month, icon, color,
            ),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        type_id: int,
        name: str,
        cycle_months: int,
        anchor_day: int,
        fixed_amount: str = "",
        start_year: int | None = None,
        start_month: int | None = None,
        icon: str = "",
        color: str = "",
        stopped: bool = False,
    ) -> ObligationType:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE obligation_types SET
               name=?, cycle_months=?, anchor_day=?, fixed_amount=?,
               start_year=?, start_month=?, icon=?, color=?, stopped=?,
               updated_at=datetime('now')
               WHERE id=?""",
            (
                name, cycle_months, anchor_day, fixed_amount,
                start_year, start_month, icon, color,
                1 if stopped else 0, type_id,
            ),
        )
        conn.commit()
        return self.get_by_id(type_id)

    def set_stopped(self, type_id: int, stopped: bool):
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE obligation_types SET stopped = ?, updated_at = datetime('now') WHERE id = ?",
            (1 if stopped else 0, type_id),
        )
        conn.commit()

    def delete(self, type_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM obligation_types WHERE id = ?", (type_id,))
        conn.commit()
