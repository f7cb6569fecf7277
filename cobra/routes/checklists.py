"""Checklist routes.

Includes the per-event views: the flat list, the list for one operational
period, and the grouped view used by the checklist dashboard.
"""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlmodel import Session

from cobra.checklist import service
from cobra.core.database import get_session
from cobra.core.user import UserContext, get_user_context
from cobra.models.checklist import (
    ChecklistClone,
    ChecklistCreate,
    ChecklistGroupingRead,
    ChecklistRead,
    ChecklistUpdate,
)

router = APIRouter(tags=["checklists"])


@router.post("/checklists", response_model=ChecklistRead, status_code=201)
async def create_checklist(
    data: ChecklistCreate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """Create a checklist from a template."""
    return service.create_from_template(session, data, user)


@router.get("/checklists/archived", response_model=list[ChecklistRead])
async def archived_checklists(session: Session = Depends(get_session)):
    """List archived checklists, oldest archive first."""
    return service.get_archived_checklists(session)


@router.get("/checklists/{checklist_id}", response_model=ChecklistRead)
async def get_checklist(checklist_id: UUID, session: Session = Depends(get_session)):
    return service.get_checklist(session, checklist_id)


@router.put("/checklists/{checklist_id}", response_model=ChecklistRead)
async def update_checklist(
    checklist_id: UUID,
    data: ChecklistUpdate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """Rename a checklist or move it to another operational period."""
    return service.update_checklist(session, checklist_id, data, user)


@router.post("/checklists/{checklist_id}/archive", response_model=ChecklistRead)
async def archive_checklist(
    checklist_id: UUID,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """Archive a checklist. It becomes read-only and leaves active views."""
    return service.archive_checklist(session, checklist_id, user)


@router.post("/checklists/{checklist_id}/restore", response_model=ChecklistRead)
async def restore_checklist(
    checklist_id: UUID,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    return service.restore_checklist(session, checklist_id, user)


@router.post("/checklists/{checklist_id}/clone", response_model=ChecklistRead, status_code=201)
async def clone_checklist(
    checklist_id: UUID,
    data: ChecklistClone,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """
    Clone a checklist.

    With ``preserve_status`` the copy keeps item completion, statuses and
    notes; otherwise it starts fresh.
    """
    return service.clone_checklist(
        session, checklist_id, data.name, data.preserve_status, user
    )


@router.post("/checklists/{checklist_id}/recalculate", response_model=ChecklistRead)
async def recalculate_checklist(checklist_id: UUID, session: Session = Depends(get_session)):
    """Recompute and store a checklist's progress counters."""
    return service.recalculate_progress(session, checklist_id)


@router.get("/events/{event_id}/checklists", response_model=list[ChecklistRead])
async def event_checklists(
    event_id: UUID,
    include_archived: bool = False,
    session: Session = Depends(get_session),
):
    """List an event's checklists, newest first."""
    return service.get_checklists_by_event(session, event_id, include_archived)


@router.get("/events/{event_id}/checklists/mine", response_model=list[ChecklistRead])
async def my_event_checklists(
    event_id: UUID,
    include_archived: bool = False,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """
    List the event's checklists visible to the caller's positions.

    Checklists with no assigned positions are visible to everyone.
    """
    return service.get_my_checklists(session, event_id, user, include_archived)


@router.get("/events/{event_id}/checklists/grouped", response_model=ChecklistGroupingRead)
async def grouped_event_checklists(event_id: UUID, session: Session = Depends(get_session)):
    """
    Active checklists of an event grouped by operational period.

    Sections come back in display order: current period, incident-level,
    then previous periods with the most recently active first.
    """
    grouping, current_id = service.get_grouped_checklists(session, event_id)
    return {
        "event_id": event_id,
        "current_operational_period_id": current_id,
        "total_checklists": grouping.total_checklists,
        "has_current_period": grouping.has_current_period,
        "sections": grouping.sections,
    }


@router.get(
    "/events/{event_id}/operational-periods/{period_id}/checklists",
    response_model=list[ChecklistRead],
)
async def operational_period_checklists(
    event_id: UUID,
    period_id: UUID,
    include_archived: bool = False,
    session: Session = Depends(get_session),
):
    return service.get_checklists_by_operational_period(
        session, event_id, period_id, include_archived
    )
