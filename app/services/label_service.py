"""
Label service: creating, querying, updating and deleting labels over detected events.

Store failures are translated into AppError subclasses here so routers only
forward results. Uniqueness violations on the label/event link become a
ConflictError; anything else from SQLAlchemy is logged and reported as a
generic InternalError.
"""

import logging
from contextlib import contextmanager
from datetime import date
from typing import Dict, Iterable, List, Optional, Type, Union

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.constants.label_types import LabelType, SortOrder
from app.db.crud import device as device_crud
from app.db.crud import event as event_crud
from app.db.crud import label as label_crud
from app.db.models.event import Event
from app.db.models.label import Label, LabelEvent
from app.db.models.label_details import (
    SongLabel, AdLabel, ErrorLabel, ProgramLabel, MovieLabel, PromoLabel, SportsLabel
)
from app.db.schemas import label as schemas
from app.db.schemas.event import Event as EventSchema, EventPage, UnlabeledEventOptions
from app.errors import AppError, BadRequestError, ConflictError, InternalError, NotFoundError
from app.services.pagination import page_count, page_offset
from app.time_utils import to_epoch_seconds, to_naive_utc, utc_day_bounds

logger = logging.getLogger(__name__)

DETAIL_MODELS: Dict[LabelType, Type] = {
    LabelType.SONG: SongLabel,
    LabelType.AD: AdLabel,
    LabelType.ERROR: ErrorLabel,
    LabelType.PROGRAM: ProgramLabel,
    LabelType.MOVIE: MovieLabel,
    LabelType.PROMO: PromoLabel,
    LabelType.SPORTS: SportsLabel,
}

DETAIL_READ_SCHEMAS: Dict[LabelType, Type[BaseModel]] = {
    LabelType.SONG: schemas.SongDetailsRead,
    LabelType.AD: schemas.AdDetailsRead,
    LabelType.ERROR: schemas.ErrorDetailsRead,
    LabelType.PROGRAM: schemas.ProgramDetailsRead,
    LabelType.MOVIE: schemas.MovieDetailsRead,
    LabelType.PROMO: schemas.PromoDetailsRead,
    LabelType.SPORTS: schemas.SportsDetailsRead,
}


@contextmanager
def store_errors(db: Session, failure_message: str):
    """Roll back and translate store errors raised inside the block"""
    try:
        yield
    except AppError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error: {e.orig}")
        raise ConflictError("Label already exists for one or more events") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{failure_message}: {e}", exc_info=True)
        raise InternalError(failure_message) from e


def parse_event_ids(raw_ids: Iterable[Union[int, str]]) -> List[int]:
    """Parse event IDs to integers, dropping duplicates but keeping order"""
    parsed = []
    for raw in raw_ids:
        try:
            parsed.append(int(str(raw).strip()))
        except ValueError:
            raise BadRequestError(f"Invalid event ID: {raw}")
    return list(dict.fromkeys(parsed))


def _load_events(db: Session, event_ids: List[int]) -> List[Event]:
    events = event_crud.get_events_by_ids(db, event_ids)
    if len(events) != len(event_ids):
        raise NotFoundError("One or more events not found")
    return sorted(events, key=lambda e: (e.timestamp, e.id))


def _sorted_links(label: Label) -> List[LabelEvent]:
    return sorted(label.events, key=lambda link: (link.event.timestamp, link.event_id))


def _label_fields(label: Label) -> dict:
    links = _sorted_links(label)
    fields = {
        "id": label.id,
        "label_type": label.label_type,
        "created_by": label.created_by,
        "created_at": label.created_at,
        "start_time": label.start_time,
        "end_time": label.end_time,
        "notes": label.notes,
        "image_paths": [link.event.image_path for link in links],
    }
    for label_type, read_schema in DETAIL_READ_SCHEMAS.items():
        details = getattr(label, label_type.value)
        fields[label_type.value] = read_schema.model_validate(details) if details is not None else None
    return fields


def to_label_schema(label: Label) -> schemas.Label:
    fields = _label_fields(label)
    fields["event_ids"] = [str(link.event_id) for link in _sorted_links(label)]
    return schemas.Label.model_validate(fields)


def to_program_guide_schema(label: Label) -> schemas.ProgramGuideLabel:
    fields = _label_fields(label)
    links = _sorted_links(label)
    fields["device_id"] = links[0].event.device_id if links else None
    return schemas.ProgramGuideLabel.model_validate(fields)


def _set_details(label: Label, label_type: LabelType, details: BaseModel) -> None:
    """Create or update the detail row for label_type"""
    values = details.model_dump()
    existing = getattr(label, label_type.value)
    if existing is None:
        setattr(label, label_type.value, DETAIL_MODELS[label_type](**values))
        return
    for field, value in values.items():
        setattr(existing, field, value)


def _clear_other_details(label: Label, keep: LabelType) -> None:
    for label_type in LabelType:
        if label_type != keep and getattr(label, label_type.value) is not None:
            setattr(label, label_type.value, None)


class LabelService:
    @staticmethod
    def create_label(db: Session, data: schemas.LabelCreate, created_by: str) -> schemas.Label:
        with store_errors(db, "Failed to create label"):
            events = _load_events(db, parse_event_ids(data.event_ids))
            timestamps = [event.timestamp for event in events]

            label = Label(
                label_type=data.label_type.value,
                created_by=created_by,
                start_time=min(timestamps),
                end_time=max(timestamps),
                notes=data.notes,
            )
            label.events = [LabelEvent(event=event) for event in events]
            _set_details(label, data.label_type, getattr(data, data.label_type.value))

            db.add(label)
            db.commit()
            logger.info(f"Label {label.id} ({label.label_type}) created by {created_by} over {len(events)} events")
            return to_label_schema(label_crud.get_label(db, label.id))

    @staticmethod
    def get_label(db: Session, label_id: int) -> schemas.Label:
        with store_errors(db, "Failed to fetch label"):
            label = label_crud.get_label(db, label_id)
            if not label:
                raise NotFoundError("Label not found")
            return to_label_schema(label)

    @staticmethod
    def get_unlabeled_events(db: Session, options: UnlabeledEventOptions) -> EventPage:
        start_timestamp = to_epoch_seconds(options.start_date) if options.start_date else None
        end_timestamp = to_epoch_seconds(options.end_date) if options.end_date else None
        logger.debug(
            f"Unlabeled events window: start={start_timestamp} end={end_timestamp} "
            f"device={options.device_id} types={options.types}"
        )

        with store_errors(db, "Failed to fetch unlabeled events"):
            events, total = event_crud.get_unlabeled_events(
                db,
                skip=page_offset(options.page, options.limit),
                limit=options.limit,
                start_timestamp=start_timestamp,
                end_timestamp=end_timestamp,
                device_id=options.device_id,
                types=options.types,
                sort=options.sort,
            )
            return EventPage(
                events=[EventSchema.model_validate(event) for event in events],
                total=total,
                total_pages=page_count(total, options.limit),
                current_page=options.page,
            )

    @staticmethod
    def get_labels(db: Session, options: schemas.LabelListOptions) -> schemas.LabelPage:
        with store_errors(db, "Failed to fetch labels"):
            labels, total = label_crud.get_labels(
                db,
                skip=page_offset(options.page, options.limit),
                limit=options.limit,
                start_date=to_naive_utc(options.start_date),
                end_date=to_naive_utc(options.end_date),
                created_by=options.created_by,
                label_type=options.label_type,
                device_id=options.device_id,
                sort=options.sort,
            )
            return schemas.LabelPage(
                labels=[to_label_schema(label) for label in labels],
                total=total,
                total_pages=page_count(total, options.limit),
                current_page=options.page,
            )

    @staticmethod
    def update_label(db: Session, label_id: int, data: schemas.LabelUpdate) -> schemas.Label:
        with store_errors(db, "Failed to update label"):
            label = label_crud.get_label(db, label_id)
            if not label:
                raise NotFoundError("Label not found")

            if "notes" in data.model_fields_set:
                label.notes = data.notes

            if data.event_ids is not None:
                events = _load_events(db, parse_event_ids(data.event_ids))
                # Old links must be gone before the new ones hit the unique event_id index
                label.events.clear()
                db.flush()
                label.events = [LabelEvent(event=event) for event in events]
                label.start_time = events[0].timestamp
                label.end_time = max(event.timestamp for event in events)

            label_type = data.label_type or LabelType(label.label_type)
            for provided in LabelType:
                if provided != label_type and getattr(data, provided.value) is not None:
                    raise BadRequestError(
                        f"'{provided.value}' details do not match label_type '{label_type.value}'"
                    )

            details = getattr(data, label_type.value)
            if details is not None:
                _set_details(label, label_type, details)
            elif getattr(label, label_type.value) is None:
                raise BadRequestError(
                    f"'{label_type.value}' details are required for label_type '{label_type.value}'"
                )

            label.label_type = label_type.value
            _clear_other_details(label, label_type)

            db.commit()
            logger.info(f"Label {label_id} updated")
            return to_label_schema(label_crud.get_label(db, label_id))

    @staticmethod
    def delete_label(db: Session, label_id: int) -> None:
        with store_errors(db, "Failed to delete label"):
            label = label_crud.get_label(db, label_id)
            if not label:
                raise NotFoundError("Label not found")
            db.delete(label)
            db.commit()
            logger.info(f"Label {label_id} deleted")

    @staticmethod
    def delete_labels_bulk(db: Session, label_ids: List[int]) -> int:
        with store_errors(db, "Failed to delete labels"):
            deleted = label_crud.delete_labels(db, label_ids)
            logger.info(f"Bulk delete removed {deleted} of {len(label_ids)} requested labels")
            return deleted

    @staticmethod
    def get_program_guide_by_date(
        db: Session,
        day: date,
        device_id: str,
        sort: Optional[SortOrder] = SortOrder.DESC
    ) -> List[schemas.ProgramGuideLabel]:
        with store_errors(db, "Failed to fetch program guide"):
            if not device_crud.get_device_by_device_id(db, device_id):
                raise NotFoundError("Invalid device ID")

            start_timestamp, end_timestamp = utc_day_bounds(day)
            labels = label_crud.get_labels_overlapping(
                db, device_id, start_timestamp, end_timestamp, sort=sort or SortOrder.DESC
            )
            return [to_program_guide_schema(label) for label in labels]
