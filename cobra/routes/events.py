"""Event routes, including the operational periods of an event."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from cobra.checklist import periods
from cobra.core.database import get_session
from cobra.core.user import UserContext, get_user_context
from cobra.models.event import EventCreate, EventRead
from cobra.models.operational_period import OperationalPeriodCreate, OperationalPeriodRead

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventRead, status_code=201)
async def create_event(
    data: EventCreate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """Create an event."""
    return periods.create_event(session, data, user)


@router.get("", response_model=list[EventRead])
async def list_events(session: Session = Depends(get_session)):
    """List non-archived events, newest first."""
    return periods.list_events(session)


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: UUID, session: Session = Depends(get_session)):
    return periods.get_event(session, event_id)


@router.get("/{event_id}/operational-periods", response_model=list[OperationalPeriodRead])
async def list_operational_periods(
    event_id: UUID,
    include_archived: bool = False,
    session: Session = Depends(get_session),
):
    """List an event's operational periods, latest start first."""
    periods.get_event(session, event_id)
    return periods.list_operational_periods(session, event_id, include_archived)


@router.get("/{event_id}/operational-periods/current", response_model=OperationalPeriodRead)
async def get_current_operational_period(
    event_id: UUID, session: Session = Depends(get_session)
):
    """
    Get the event's current operational period.

    Returns 404 when the event has no current period.
    """
    period = periods.get_current_period(session, event_id)
    if not period:
        raise HTTPException(
            status_code=404,
            detail=f"No current operational period for event {event_id}",
        )
    return period


@router.post(
    "/{event_id}/operational-periods",
    response_model=OperationalPeriodRead,
    status_code=201,
)
async def create_operational_period(
    event_id: UUID,
    data: OperationalPeriodCreate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """
    Create an operational period.

    When created as current, the event's other periods stop being current.
    """
    return periods.create_operational_period(session, event_id, data, user)
