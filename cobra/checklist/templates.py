"""Template library operations.

Editing, archiving or duplicating a template never reaches checklists that
were already created from it; those hold their own copies of the items.
"""
import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlmodel import Session, func, select

from cobra.checklist.exceptions import NotFoundError
from cobra.checklist.items import ItemType, parse_item_type
from cobra.checklist.status_options import parse_status_options
from cobra.core.user import UserContext
from cobra.models import Template, TemplateItem
from cobra.models.template import TemplateCreate, TemplateItemCreate, TemplateUpdate

logger = logging.getLogger(__name__)


def _build_items(items_data: list[TemplateItemCreate]) -> list[TemplateItem]:
    """
    Validate item definitions and turn them into template items.

    Items without an explicit display order are numbered in the order given.
    Status options are kept for status items only.

    Raises:
        UnsupportedItemTypeError: An item has an unknown type.
        StatusConfigurationError: An item's status options are malformed.
    """
    items = []
    for index, item_data in enumerate(items_data):
        item_type = parse_item_type(item_data.item_type)
        options = parse_status_options(item_data.status_options)
        items.append(
            TemplateItem(
                item_text=item_data.item_text.strip(),
                item_type=item_type.value,
                display_order=(
                    item_data.display_order
                    if item_data.display_order is not None
                    else (index + 1) * 10
                ),
                is_required=item_data.is_required,
                status_options=options if item_type is ItemType.STATUS else None,
                allowed_positions=item_data.allowed_positions,
                default_notes=item_data.default_notes,
            )
        )
    return items


def _touch(template: Template, user: UserContext) -> None:
    template.last_modified_by = user.email
    template.last_modified_by_position = user.position
    template.last_modified_at = datetime.now(UTC)


def create_template(session: Session, data: TemplateCreate, user: UserContext) -> Template:
    """
    Create a template with its item definitions.

    Item types are validated before anything is added to the session so that
    no unsupported type can reach a checklist.
    """
    items = _build_items(data.items)
    template = Template(
        name=data.name.strip(),
        description=data.description,
        category=data.category,
        created_by=user.email,
        created_by_position=user.position,
        items=items,
    )

    session.add(template)
    session.commit()
    session.refresh(template)

    logger.info(
        f"Created template {template.id} '{template.name}' with "
        f"{len(template.items)} items by {user.email}"
    )
    return template


def get_template(session: Session, template_id: UUID) -> Template:
    template = session.get(Template, template_id)
    if not template:
        logger.warning(f"Template {template_id} not found")
        raise NotFoundError(f"Template {template_id} not found")
    return template


def list_templates(session: Session, include_inactive: bool = False) -> list[Template]:
    statement = select(Template).where(Template.is_archived == False)  # noqa: E712
    if not include_inactive:
        statement = statement.where(Template.is_active == True)  # noqa: E712
    templates = list(session.exec(statement.order_by(Template.category, Template.name)).all())
    logger.info(f"Retrieved {len(templates)} templates")
    return templates


def list_templates_by_category(session: Session, category: str) -> list[Template]:
    """Active, unarchived templates of one category, matched case-insensitively."""
    statement = (
        select(Template)
        .where(Template.is_archived == False)  # noqa: E712
        .where(Template.is_active == True)  # noqa: E712
        .where(func.lower(Template.category) == category.lower())
        .order_by(Template.name)
    )
    templates = list(session.exec(statement).all())
    logger.info(f"Retrieved {len(templates)} templates in category {category}")
    return templates


def get_archived_templates(session: Session) -> list[Template]:
    statement = (
        select(Template)
        .where(Template.is_archived == True)  # noqa: E712
        .order_by(Template.archived_at)
    )
    return list(session.exec(statement).all())


def update_template(
    session: Session, template_id: UUID, data: TemplateUpdate, user: UserContext
) -> Template:
    """
    Replace a template's fields and its whole item list.

    The new items are validated before the old ones are dropped, so a bad
    request leaves the template untouched.

    Raises:
        NotFoundError: The template does not exist.
        UnsupportedItemTypeError: An item has an unknown type.
        StatusConfigurationError: An item's status options are malformed.
    """
    template = get_template(session, template_id)
    items = _build_items(data.items)

    template.name = data.name.strip()
    template.description = data.description
    template.category = data.category
    template.is_active = data.is_active
    template.items = items
    _touch(template, user)

    session.add(template)
    session.commit()
    session.refresh(template)

    logger.info(f"Updated template {template_id} with {len(template.items)} items by {user.email}")
    return template


def archive_template(session: Session, template_id: UUID, user: UserContext) -> Template:
    template = get_template(session, template_id)

    template.is_archived = True
    template.archived_by = user.email
    template.archived_at = datetime.now(UTC)

    session.add(template)
    session.commit()
    session.refresh(template)
    logger.info(f"Archived template {template_id} by {user.email}")
    return template


def restore_template(session: Session, template_id: UUID, user: UserContext) -> Template:
    template = get_template(session, template_id)

    template.is_archived = False
    template.archived_by = None
    template.archived_at = None
    _touch(template, user)

    session.add(template)
    session.commit()
    session.refresh(template)
    logger.info(f"Restored template {template_id} by {user.email}")
    return template


def duplicate_template(
    session: Session, template_id: UUID, new_name: str, user: UserContext
) -> Template:
    """
    Copy a template and its items under a new name.

    The copy is active and unarchived whatever the state of the source, and
    is attributed to the acting user.
    """
    original = get_template(session, template_id)

    duplicate = Template(
        name=new_name.strip(),
        description=original.description,
        category=original.category,
        created_by=user.email,
        created_by_position=user.position,
        items=[
            TemplateItem(
                item_text=item.item_text,
                item_type=item.item_type,
                display_order=item.display_order,
                is_required=item.is_required,
                status_options=(
                    [option.model_copy() for option in item.status_options]
                    if item.status_options is not None
                    else None
                ),
                allowed_positions=item.allowed_positions,
                default_notes=item.default_notes,
            )
            for item in original.items
        ],
    )

    session.add(duplicate)
    session.commit()
    session.refresh(duplicate)

    logger.info(
        f"Duplicated template {template_id} to {duplicate.id} "
        f"with {len(duplicate.items)} items"
    )
    return duplicate
