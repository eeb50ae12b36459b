from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload
from typing import Dict, List, Optional, Sequence, Tuple
from app.database import MAX_BIG_INTEGER_ID
from app.db.models.event import Event
from app.constants.label_types import SortOrder

def get_events_by_ids(db: Session, event_ids: Sequence[int]) -> List[Event]:
    """Get the events with the given IDs; missing IDs are simply absent from the result"""
    # IDs outside the column range cannot match a row
    event_ids = [event_id for event_id in event_ids if 1 <= event_id <= MAX_BIG_INTEGER_ID]
    if not event_ids:
        return []
    return db.query(Event).filter(Event.id.in_(event_ids)).all()

def _apply_event_filters(
    query,
    start_timestamp: Optional[int] = None,
    end_timestamp: Optional[int] = None,
    device_id: Optional[str] = None,
    types: Optional[List[str]] = None
):
    """Apply the optional timestamp, device and type filters to an event query"""
    if start_timestamp is not None:
        query = query.filter(Event.timestamp >= start_timestamp)
    if end_timestamp is not None:
        query = query.filter(Event.timestamp <= end_timestamp)
    if device_id:
        query = query.filter(Event.device_id == device_id)
    if types:
        query = query.filter(Event.type.in_(types))
    return query

def get_unlabeled_events(
    db: Session,
    skip: int = 0,
    limit: int = 10,
    start_timestamp: Optional[int] = None,
    end_timestamp: Optional[int] = None,
    device_id: Optional[str] = None,
    types: Optional[List[str]] = None,
    sort: SortOrder = SortOrder.DESC
) -> Tuple[List[Event], int]:
    """Get one page of events not linked to any label, plus the total match count"""
    query = db.query(Event).filter(~Event.label_links.any())
    query = _apply_event_filters(query, start_timestamp, end_timestamp, device_id, types)

    total = query.count()
    order = Event.timestamp.asc() if sort == SortOrder.ASC else Event.timestamp.desc()
    events = (
        query.options(
            selectinload(Event.ads),
            selectinload(Event.channels),
            selectinload(Event.content),
        )
        .order_by(order, Event.id)
        .offset(skip)
        .limit(limit)
        .all()
    )
    return events, total

def count_events_by_device(
    db: Session,
    start_timestamp: Optional[int] = None,
    end_timestamp: Optional[int] = None,
    device_id: Optional[str] = None,
    labeled: Optional[bool] = None
) -> Dict[str, int]:
    """Count events per device; labeled=True/False restricts to labeled/unlabeled events"""
    query = db.query(Event.device_id, func.count(Event.id))
    query = _apply_event_filters(query, start_timestamp, end_timestamp, device_id)
    if labeled is True:
        query = query.filter(Event.label_links.any())
    elif labeled is False:
        query = query.filter(~Event.label_links.any())
    return {row[0]: row[1] for row in query.group_by(Event.device_id).all()}
