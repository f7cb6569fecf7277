"""Template library routes."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from cobra.checklist import templates
from cobra.checklist.exceptions import StatusConfigurationError, UnsupportedItemTypeError
from cobra.core.database import get_session
from cobra.core.user import UserContext, get_user_context
from cobra.models.template import TemplateCreate, TemplateDuplicate, TemplateRead, TemplateUpdate

router = APIRouter(prefix="/templates", tags=["templates"])


@router.post("", response_model=TemplateRead, status_code=201)
async def create_template(
    data: TemplateCreate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """
    Create a template.

    Unknown item types or malformed status options are rejected with 422
    before anything is stored.
    """
    try:
        return templates.create_template(session, data, user)
    except (UnsupportedItemTypeError, StatusConfigurationError) as e:
        session.rollback()
        raise HTTPException(status_code=422, detail=str(e))


@router.get("", response_model=list[TemplateRead])
async def list_templates(include_inactive: bool = False, session: Session = Depends(get_session)):
    return templates.list_templates(session, include_inactive)


@router.get("/archived", response_model=list[TemplateRead])
async def archived_templates(session: Session = Depends(get_session)):
    """List archived templates, oldest archive first."""
    return templates.get_archived_templates(session)


@router.get("/category/{category}", response_model=list[TemplateRead])
async def templates_by_category(category: str, session: Session = Depends(get_session)):
    return templates.list_templates_by_category(session, category)


@router.get("/{template_id}", response_model=TemplateRead)
async def get_template(template_id: UUID, session: Session = Depends(get_session)):
    return templates.get_template(session, template_id)


@router.put("/{template_id}", response_model=TemplateRead)
async def update_template(
    template_id: UUID,
    data: TemplateUpdate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """
    Replace a template and its items.

    Checklists already created from the template keep their own items.
    """
    try:
        return templates.update_template(session, template_id, data, user)
    except (UnsupportedItemTypeError, StatusConfigurationError) as e:
        session.rollback()
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/{template_id}/archive", response_model=TemplateRead)
async def archive_template(
    template_id: UUID,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """Archive a template. It can no longer be used to create checklists."""
    return templates.archive_template(session, template_id, user)


@router.post("/{template_id}/restore", response_model=TemplateRead)
async def restore_template(
    template_id: UUID,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    return templates.restore_template(session, template_id, user)


@router.post("/{template_id}/duplicate", response_model=TemplateRead, status_code=201)
async def duplicate_template(
    template_id: UUID,
    data: TemplateDuplicate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    return templates.duplicate_template(session, template_id, data.name, user)
