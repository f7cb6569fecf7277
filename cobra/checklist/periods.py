"""Event and operational period operations.

Only one operational period per event is current. Creating a current
period or promoting one with ``set_current_period`` clears the flag on the
event's other periods. Archiving or deleting a period never removes its
checklists: they are detached and become incident-level checklists.
"""
import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlmodel import Session, select

from cobra.checklist.exceptions import NotFoundError
from cobra.core.user import UserContext
from cobra.models import ChecklistInstance, Event, OperationalPeriod
from cobra.models.event import EventCreate
from cobra.models.operational_period import OperationalPeriodCreate

logger = logging.getLogger(__name__)


def create_event(session: Session, data: EventCreate, user: UserContext) -> Event:
    event = Event(
        name=data.name.strip(),
        category=data.category,
        is_active=data.is_active,
        created_by=user.email,
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    logger.info(f"Created event {event.id} '{event.name}' by {user.email}")
    return event


def get_event(session: Session, event_id: UUID) -> Event:
    event = session.get(Event, event_id)
    if not event:
        logger.warning(f"Event {event_id} not found")
        raise NotFoundError(f"Event {event_id} not found")
    return event


def list_events(session: Session) -> list[Event]:
    statement = (
        select(Event)
        .where(Event.is_archived == False)  # noqa: E712
        .order_by(Event.created_at.desc())
    )
    return list(session.exec(statement).all())


def get_operational_period(session: Session, period_id: UUID) -> OperationalPeriod:
    period = session.get(OperationalPeriod, period_id)
    if not period:
        logger.warning(f"Operational period {period_id} not found")
        raise NotFoundError(f"Operational period {period_id} not found")
    return period


def list_operational_periods(
    session: Session, event_id: UUID, include_archived: bool = False
) -> list[OperationalPeriod]:
    """Periods of an event, newest start time first."""
    statement = select(OperationalPeriod).where(OperationalPeriod.event_id == event_id)
    if not include_archived:
        statement = statement.where(OperationalPeriod.is_archived == False)  # noqa: E712
    return list(session.exec(statement.order_by(OperationalPeriod.start_time.desc())).all())


def get_current_period(session: Session, event_id: UUID) -> OperationalPeriod | None:
    """The event's current, non-archived period, or None."""
    statement = (
        select(OperationalPeriod)
        .where(OperationalPeriod.event_id == event_id)
        .where(OperationalPeriod.is_current == True)  # noqa: E712
        .where(OperationalPeriod.is_archived == False)  # noqa: E712
    )
    return session.exec(statement).first()


def _unset_current(
    session: Session, event_id: UUID, user: UserContext, keep_id: UUID | None = None
) -> int:
    statement = (
        select(OperationalPeriod)
        .where(OperationalPeriod.event_id == event_id)
        .where(OperationalPeriod.is_current == True)  # noqa: E712
    )
    count = 0
    for other in session.exec(statement).all():
        if other.id == keep_id:
            continue
        other.is_current = False
        other.last_modified_by = user.email
        other.last_modified_at = datetime.now(UTC)
        session.add(other)
        count += 1
    return count


def create_operational_period(
    session: Session, event_id: UUID, data: OperationalPeriodCreate, user: UserContext
) -> OperationalPeriod:
    get_event(session, event_id)

    period = OperationalPeriod(
        event_id=event_id,
        name=data.name.strip(),
        start_time=data.start_time,
        end_time=data.end_time,
        is_current=data.is_current,
        description=data.description,
        created_by=user.email,
    )

    if period.is_current:
        unset = _unset_current(session, event_id, user)
        logger.info(f"Unset {unset} existing current periods for event {event_id}")

    session.add(period)
    session.commit()
    session.refresh(period)
    logger.info(f"Created operational period {period.id} '{period.name}' for event {event_id}")
    return period


def set_current_period(session: Session, period_id: UUID, user: UserContext) -> OperationalPeriod:
    """Make a period current and clear the flag on the event's other periods."""
    period = get_operational_period(session, period_id)

    unset = _unset_current(session, period.event_id, user, keep_id=period.id)

    period.is_current = True
    period.last_modified_by = user.email
    period.last_modified_at = datetime.now(UTC)
    session.add(period)
    session.commit()
    session.refresh(period)

    logger.info(f"Set operational period {period_id} as current, unset {unset} other periods")
    return period


def _detach_checklists(session: Session, period: OperationalPeriod) -> int:
    statement = select(ChecklistInstance).where(
        ChecklistInstance.operational_period_id == period.id
    )
    count = 0
    for checklist in session.exec(statement).all():
        checklist.operational_period_id = None
        checklist.operational_period_name = None
        session.add(checklist)
        count += 1
    return count


def archive_operational_period(
    session: Session, period_id: UUID, user: UserContext
) -> OperationalPeriod:
    """Soft-delete a period. Its checklists become incident-level."""
    period = get_operational_period(session, period_id)

    detached = _detach_checklists(session, period)
    period.is_archived = True
    period.is_current = False
    period.archived_by = user.email
    period.archived_at = datetime.now(UTC)
    session.add(period)
    session.commit()
    session.refresh(period)

    logger.info(f"Archived operational period {period_id}, detached {detached} checklists")
    return period


def delete_operational_period(session: Session, period_id: UUID) -> int:
    """Delete a period, detaching its checklists first.

    Returns:
        Number of checklists moved to the incident level.
    """
    period = get_operational_period(session, period_id)

    detached = _detach_checklists(session, period)
    session.flush()
    session.delete(period)
    session.commit()

    logger.info(f"Deleted operational period {period_id}, detached {detached} checklists")
    return detached
