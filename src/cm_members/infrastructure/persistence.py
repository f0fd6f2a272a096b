"""Member repository: the members table (alembic/versions/003_create_members.py)."""

from src.cm_common.table_repository import TableRepository


class MemberRepository(TableRepository):
    def __init__(self) -> None:
        super().__init__(
            table="members",
            columns=(
                "full_name", "email", "phone", "address", "birth_date",
                "baptism_date", "membership_date", "status", "notes",
            ),
            order_by="full_name ASC",
        )
