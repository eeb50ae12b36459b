from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional, Sequence, Tuple
from datetime import datetime
from app.database import MAX_INTEGER_ID
from app.db.models.event import Event
from app.db.models.label import Label, LabelEvent
from app.constants.label_types import LabelType, SortOrder

def _with_details(query):
    """Eager-load the linked events and every type-specific detail row"""
    return query.options(
        selectinload(Label.events).selectinload(LabelEvent.event),
        selectinload(Label.song),
        selectinload(Label.ad),
        selectinload(Label.error),
        selectinload(Label.program),
        selectinload(Label.movie),
        selectinload(Label.promo),
        selectinload(Label.sports),
    )

def _on_device(device_id: str):
    """Match labels with at least one event on the device"""
    return Label.events.any(LabelEvent.event.has(Event.device_id == device_id))

def apply_label_filters(
    query,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    created_by: Optional[str] = None,
    label_type: Optional[LabelType] = None,
    device_id: Optional[str] = None
):
    """Apply the optional list filters to a label query"""
    if start_date is not None:
        query = query.filter(Label.created_at >= start_date)
    if end_date is not None:
        query = query.filter(Label.created_at <= end_date)
    if created_by:
        query = query.filter(Label.created_by == created_by)
    if label_type:
        query = query.filter(Label.label_type == LabelType(label_type).value)
    if device_id:
        query = query.filter(_on_device(device_id))
    return query

def _storable_id(label_id: int) -> bool:
    """Check a label ID fits the id column"""
    return 1 <= label_id <= MAX_INTEGER_ID

def get_label(db: Session, label_id: int) -> Optional[Label]:
    """Get a label by ID with its events and details"""
    if not _storable_id(label_id):
        return None
    return _with_details(db.query(Label)).filter(Label.id == label_id).first()

def get_labels(
    db: Session,
    skip: int = 0,
    limit: int = 10,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    created_by: Optional[str] = None,
    label_type: Optional[LabelType] = None,
    device_id: Optional[str] = None,
    sort: SortOrder = SortOrder.DESC
) -> Tuple[List[Label], int]:
    """Get one page of labels with optional filters, plus the total match count"""
    query = apply_label_filters(db.query(Label), start_date, end_date, created_by, label_type, device_id)
    total = query.count()

    order = Label.created_at.asc() if sort == SortOrder.ASC else Label.created_at.desc()
    labels = _with_details(query).order_by(order, Label.id).offset(skip).limit(limit).all()
    return labels, total

def get_all_labels(
    db: Session,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    created_by: Optional[str] = None,
    label_type: Optional[LabelType] = None,
    device_id: Optional[str] = None,
    sort: SortOrder = SortOrder.DESC
) -> List[Label]:
    """Get every label matching the filters, used by reports"""
    query = apply_label_filters(db.query(Label), start_date, end_date, created_by, label_type, device_id)
    order = Label.created_at.asc() if sort == SortOrder.ASC else Label.created_at.desc()
    return _with_details(query).order_by(order, Label.id).all()

def get_labels_overlapping(
    db: Session,
    device_id: str,
    start_timestamp: int,
    end_timestamp: int,
    sort: SortOrder = SortOrder.DESC
) -> List[Label]:
    """Get labels on a device whose span overlaps [start_timestamp, end_timestamp]"""
    overlaps = or_(
        Label.start_time.between(start_timestamp, end_timestamp),
        Label.end_time.between(start_timestamp, end_timestamp),
        and_(Label.start_time <= start_timestamp, Label.end_time >= end_timestamp),
    )
    order = Label.start_time.asc() if sort == SortOrder.ASC else Label.start_time.desc()
    return (
        _with_details(db.query(Label))
        .filter(overlaps, _on_device(device_id))
        .order_by(order, Label.id)
        .all()
    )

def delete_labels(db: Session, label_ids: Sequence[int]) -> int:
    """Delete the labels with the given IDs; IDs that do not exist are ignored"""
    label_ids = [label_id for label_id in label_ids if _storable_id(label_id)]
    labels = db.query(Label).filter(Label.id.in_(label_ids)).all() if label_ids else []
    for label in labels:
        db.delete(label)
    db.commit()
    return len(labels)
