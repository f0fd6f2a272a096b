"""Event repository: the events table (alembic/versions/005_create_events.py)."""

from src.cm_common.table_repository import TableRepository


class EventRepository(TableRepository):
    def __init__(self) -> None:
        super().__init__(
            table="events",
            columns=(
                "title", "description", "event_date", "end_date", "location",
                "event_type", "image_url", "status", "follow_up_needed", "created_by",
            ),
            order_by="event_date ASC",
        )
