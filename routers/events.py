import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from starlette.concurrency import run_in_threadpool

from schemas import Event as EventSchema, EventCreate, EventUpdate, SessionUser, Success
from event_store import EventStore
from dependencies import get_current_admin_user, get_current_user, get_event_store
from errors import translate_store_errors

logger = logging.getLogger(__name__)

router = APIRouter()

# Store calls block on the database, so they run in the threadpool

@router.get("", response_model=List[EventSchema])
async def get_events(
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    store: EventStore = Depends(get_event_store),
    current_user: Optional[SessionUser] = Depends(get_current_user)
):
    """
    List events between two dates
    - start: first day of the range (YYYY-MM-DD, inclusive)
    - end: last day of the range (YYYY-MM-DD, inclusive)
    """
    with translate_store_errors("Failed to fetch events"):
        return await run_in_threadpool(store.list, start, end)

@router.get("/{event_id}", response_model=EventSchema)
async def get_event(
    event_id: int,
    store: EventStore = Depends(get_event_store),
    current_user: Optional[SessionUser] = Depends(get_current_user)
):
    """Get a specific event by ID"""
    with translate_store_errors("Failed to fetch event"):
        return await run_in_threadpool(store.get, event_id)

@router.post("", response_model=EventSchema, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    store: EventStore = Depends(get_event_store),
    current_user: Optional[SessionUser] = Depends(get_current_user)
):
    """Create a new event"""
    creator = current_user.id if current_user else None

    with translate_store_errors("Failed to create event"):
        created = await run_in_threadpool(
            store.create,
            date=event.date,
            time=event.time,
            title=event.title,
            channel=event.channel,
            platform=event.platform,
            notes=event.notes,
            creator=creator,
        )

    logger.info(f"Event {created.id} created by user {creator}")
    return created

@router.put("/{event_id}", response_model=EventSchema)
async def update_event(
    event_id: int,
    event: EventUpdate,
    store: EventStore = Depends(get_event_store),
    current_user: Optional[SessionUser] = Depends(get_current_user)
):
    """Replace the fields of an existing event (any authenticated user)"""
    with translate_store_errors("Failed to update event"):
        return await run_in_threadpool(
            store.update,
            event_id,
            date=event.date,
            time=event.time,
            title=event.title,
            channel=event.channel,
            platform=event.platform,
            notes=event.notes,
        )

@router.delete("/{event_id}", response_model=Success)
async def delete_event(
    event_id: int,
    store: EventStore = Depends(get_event_store),
    current_user: Optional[SessionUser] = Depends(get_current_admin_user)
):
    """Delete an event (admin only when authentication is enabled)"""
    with translate_store_errors("Failed to delete event"):
        await run_in_threadpool(store.delete, event_id)

    logger.info(f"Event {event_id} deleted by user {current_user.id if current_user else None}")
    return Success()
