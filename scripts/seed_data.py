#!/usr/bin/env python3
"""
Seed a demo event with operational periods, templates and checklists.

Creates one hurricane response event with three operational periods (the
last one current), two templates, and checklists spread across the current
period, the incident level and the earlier periods so the grouped checklist
view has something to show.

Usage:
    python scripts/seed_data.py [--reset]

Options:
    --reset    Drop and recreate all tables before seeding
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import UTC, datetime, timedelta

from sqlmodel import Session, SQLModel

from cobra.checklist import periods, service, templates
from cobra.checklist.status_options import StatusOption
from cobra.core.database import create_db_and_tables, engine
from cobra.core.user import UserContext
from cobra.models.checklist import ChecklistCreate
from cobra.models.event import EventCreate
from cobra.models.operational_period import OperationalPeriodCreate
from cobra.models.template import TemplateCreate, TemplateItemCreate

SEED_USER = UserContext(
    email="seed@cobra.mil",
    full_name="System Seed",
    position="Incident Commander",
    positions=["Incident Commander"],
)

STATUS_OPTIONS = [
    StatusOption(label="Not Started", order=1),
    StatusOption(label="In Progress", order=2),
    StatusOption(label="Complete", is_completion=True, order=3),
]


def seed_templates(session: Session) -> list:
    safety = templates.create_template(
        session,
        TemplateCreate(
            name="Daily Safety Briefing",
            category="Safety",
            items=[
                TemplateItemCreate(item_text="Review weather forecast", is_required=True),
                TemplateItemCreate(item_text="Confirm PPE for all crews", is_required=True),
                TemplateItemCreate(item_text="Identify hazards at work sites"),
                TemplateItemCreate(
                    item_text="Brief crew leaders",
                    item_type="status",
                    status_options=STATUS_OPTIONS,
                ),
            ],
        ),
        SEED_USER,
    )
    shelter = templates.create_template(
        session,
        TemplateCreate(
            name="Emergency Shelter Opening",
            category="Mass Care",
            items=[
                TemplateItemCreate(item_text="Facility walkthrough completed", is_required=True),
                TemplateItemCreate(item_text="Cots and blankets staged"),
                TemplateItemCreate(item_text="Food service arranged"),
                TemplateItemCreate(
                    item_text="Accessibility review",
                    item_type="status",
                    is_required=True,
                    status_options=STATUS_OPTIONS,
                ),
            ],
        ),
        SEED_USER,
    )
    return [safety, shelter]


def seed_event(session: Session) -> tuple:
    event = periods.create_event(
        session, EventCreate(name="Hurricane Milton Response", category="Hurricane"), SEED_USER
    )

    day_one = datetime.now(UTC).replace(hour=6, minute=0, second=0, microsecond=0) - timedelta(days=1)
    op_periods = []
    for index, (label, hours) in enumerate([("Day", 0), ("Night", 12), ("Day", 24)], start=1):
        start = day_one + timedelta(hours=hours)
        op_periods.append(
            periods.create_operational_period(
                session,
                event.id,
                OperationalPeriodCreate(
                    name=f"OP {index} - {label} Shift",
                    start_time=start,
                    end_time=None if index == 3 else start + timedelta(hours=12),
                    is_current=index == 3,
                ),
                SEED_USER,
            )
        )
    return event, op_periods


def seed_checklists(session: Session, event, op_periods, template_list) -> int:
    safety, shelter = template_list
    plan = [
        (safety, op_periods[0], 4),
        (safety, op_periods[1], 2),
        (safety, op_periods[2], 1),
        (shelter, None, 3),
    ]

    for template, period, completed in plan:
        checklist = service.create_from_template(
            session,
            ChecklistCreate(
                template_id=template.id,
                event_id=event.id,
                operational_period_id=period.id if period else None,
            ),
            SEED_USER,
        )
        for item in checklist.items[:completed]:
            if item.item_type == "status":
                service.update_item_status(
                    session, checklist.id, item.id, "Complete", None, SEED_USER
                )
            else:
                service.update_item_completion(
                    session, checklist.id, item.id, True, None, SEED_USER
                )
        session.refresh(checklist)
        print(f"  {checklist.name} [{period.name if period else 'incident'}]: "
              f"{checklist.progress_percentage}%")
    return len(plan)


def main(reset: bool = False):
    """Seed the configured database."""
    if reset:
        print("Dropping all tables...")
        import cobra.models  # noqa: F401

        SQLModel.metadata.drop_all(engine)

    create_db_and_tables()

    with Session(engine) as session:
        template_list = seed_templates(session)
        print(f"Created {len(template_list)} templates")

        event, op_periods = seed_event(session)
        print(f"Created event '{event.name}' with {len(op_periods)} operational periods")

        count = seed_checklists(session, event, op_periods, template_list)
        print(f"Created {count} checklists")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo checklist data")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args()
    main(reset=args.reset)
