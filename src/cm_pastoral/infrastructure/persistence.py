"""Pastoral visit repository: alembic/versions/009_create_pastoral_visits.py."""

from src.cm_common.table_repository import TableRepository


class PastoralVisitRepository(TableRepository):
    def __init__(self) -> None:
        super().__init__(
            table="pastoral_visits",
            columns=(
                "member_id", "visitor_id", "visit_date", "visit_type", "pastor_id",
                "notes", "follow_up_needed", "status",
            ),
            order_by="visit_date DESC",
        )
