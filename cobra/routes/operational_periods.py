"""Routes acting on a single operational period."""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlmodel import Session

from cobra.checklist import periods
from cobra.core.database import get_session
from cobra.core.user import UserContext, get_user_context
from cobra.models.operational_period import OperationalPeriodRead

router = APIRouter(prefix="/operational-periods", tags=["operational-periods"])


@router.get("/{period_id}", response_model=OperationalPeriodRead)
async def get_operational_period(period_id: UUID, session: Session = Depends(get_session)):
    return periods.get_operational_period(session, period_id)


@router.post("/{period_id}/set-current", response_model=OperationalPeriodRead)
async def set_current_operational_period(
    period_id: UUID,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """Make this the event's current period; all others are unset."""
    return periods.set_current_period(session, period_id, user)


@router.post("/{period_id}/archive", response_model=OperationalPeriodRead)
async def archive_operational_period(
    period_id: UUID,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """
    Archive an operational period.

    Its checklists are kept and show up as incident-level checklists.
    """
    return periods.archive_operational_period(session, period_id, user)


@router.delete("/{period_id}")
async def delete_operational_period(period_id: UUID, session: Session = Depends(get_session)):
    """Delete an operational period without deleting its checklists."""
    detached = periods.delete_operational_period(session, period_id)
    return {"deleted": str(period_id), "detached_checklists": detached}
