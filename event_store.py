import logging
from datetime import date, time
from typing import List, Optional

from models import Event
from schemas import Event as EventSchema
from errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _require_fields(date_value, time_value, title):
    if not date_value or not time_value or not title:
        raise ValidationError("Fields 'date', 'time' and 'title' are required.")


class EventStore:
    """Persistence of calendar events.

    Each call opens its own session from `session_factory` and returns plain
    `schemas.Event` records. Database failures propagate as SQLAlchemyError.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def list(self, start: date, end: date) -> List[EventSchema]:
        """Events with start <= date <= end, ordered by date then time."""
        if not start or not end:
            raise ValidationError("Query parameters 'start' and 'end' are required.")

        with self.session_factory() as db:
            rows = (
                db.query(Event)
                .filter(Event.date >= start, Event.date <= end)
                .order_by(Event.date.asc(), Event.time.asc(), Event.id.asc())
                .all()
            )
            return [EventSchema.model_validate(r) for r in rows]

    def get(self, event_id: int) -> EventSchema:
        with self.session_factory() as db:
            event = db.get(Event, event_id)
            if event is None:
                raise NotFoundError("Event not found")
            return EventSchema.model_validate(event)

    def create(
        self,
        date: date,
        time: time,
        title: str,
        channel: Optional[str] = None,
        platform: Optional[str] = None,
        notes: Optional[str] = None,
        creator: Optional[int] = None,
    ) -> EventSchema:
        _require_fields(date, time, title)

        with self.session_factory() as db:
            event = Event(
                date=date,
                time=time,
                title=title,
                channel=channel or None,
                platform=platform or None,
                notes=notes or None,
                created_by=creator,
            )
            db.add(event)
            db.commit()
            db.refresh(event)
            logger.info(f"Created event {event.id} on {event.date} {event.time}")
            return EventSchema.model_validate(event)

    def update(
        self,
        event_id: int,
        date: date,
        time: time,
        title: str,
        channel: Optional[str] = None,
        platform: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> EventSchema:
        _require_fields(date, time, title)

        with self.session_factory() as db:
            event = db.get(Event, event_id)
            if event is None:
                raise NotFoundError("Event not found")

            event.date = date
            event.time = time
            event.title = title
            event.channel = channel or None
            event.platform = platform or None
            event.notes = notes or None

            db.commit()
            db.refresh(event)
            logger.info(f"Updated event {event.id}")
            return EventSchema.model_validate(event)

    def delete(self, event_id: int) -> None:
        with self.session_factory() as db:
            deleted = db.query(Event).filter(Event.id == event_id).delete(synchronize_session=False)
            if not deleted:
                raise NotFoundError("Event not found")
            db.commit()
            logger.info(f"Deleted event {event_id}")
