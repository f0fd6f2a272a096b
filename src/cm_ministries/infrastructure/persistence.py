"""Ministry repository: the ministries table (alembic/versions/007_create_ministries.py)."""

from src.cm_common.table_repository import TableRepository


class MinistryRepository(TableRepository):
    def __init__(self) -> None:
        super().__init__(
            table="ministries",
            columns=("name", "description", "leader_id", "meeting_schedule", "status"),
            order_by="name ASC",
        )
