"""Stream repository: the streams table (alembic/versions/006_create_streams.py)."""

from src.cm_common.table_repository import TableRepository


class StreamRepository(TableRepository):
    def __init__(self) -> None:
        super().__init__(
            table="streams",
            columns=(
                "title", "description", "stream_url", "platform", "scheduled_date",
                "status", "thumbnail_url", "created_by",
            ),
            order_by="scheduled_date ASC",
        )
