"""Visitor repository: the visitors table (alembic/versions/004_create_visitors.py).

interested_in is a TEXT[] column; asyncpg maps Python lists to it directly.
"""

from src.cm_common.table_repository import TableRepository


class VisitorRepository(TableRepository):
    def __init__(self) -> None:
        super().__init__(
            table="visitors",
            columns=(
                "full_name", "email", "phone", "visit_date", "source",
                "interested_in", "notes", "followed_up", "follow_up_needed",
            ),
            order_by="visit_date DESC",
        )
