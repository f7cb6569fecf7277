"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from cobra.checklist.status_options import StatusOption
from cobra.core.database import get_session
from cobra.core.user import UserContext
from cobra.main import app
from cobra.models import (
    ChecklistInstance,
    ChecklistItem,
    Event,
    OperationalPeriod,
    Template,
    TemplateItem,
)

STATUS_OPTIONS = [
    StatusOption(label="Not Started", is_completion=False, order=1),
    StatusOption(label="In Progress", is_completion=False, order=2),
    StatusOption(label="Complete", is_completion=True, order=3),
    StatusOption(label="N/A", is_completion=True, order=4),
]


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="user")
def user_fixture() -> UserContext:
    return UserContext(
        email="safety.officer@cobra.mil",
        full_name="Safety Officer",
        position="Safety Officer",
        positions=["Safety Officer"],
    )


@pytest.fixture(name="sample_event")
def sample_event_fixture(session: Session) -> Event:
    """Create a sample event for testing."""
    event = Event(name="Hurricane Milton Response", category="Hurricane")
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture(name="periods")
def periods_fixture(session: Session, sample_event: Event) -> list[OperationalPeriod]:
    """Two operational periods; the second one is current."""
    start = datetime.now(UTC) - timedelta(hours=18)
    op1 = OperationalPeriod(
        event_id=sample_event.id,
        name="OP 1 - Day Shift",
        start_time=start,
        end_time=start + timedelta(hours=12),
    )
    op2 = OperationalPeriod(
        event_id=sample_event.id,
        name="OP 2 - Night Shift",
        start_time=start + timedelta(hours=12),
        is_current=True,
    )
    session.add(op1)
    session.add(op2)
    session.commit()
    session.refresh(op1)
    session.refresh(op2)
    return [op1, op2]


@pytest.fixture(name="sample_template")
def sample_template_fixture(session: Session) -> Template:
    """A template with two checkbox items and one status item."""
    template = Template(name="Daily Safety Briefing", category="Safety")
    template.items = [
        TemplateItem(item_text="Review weather", display_order=10, is_required=True),
        TemplateItem(item_text="Confirm PPE", display_order=20),
        TemplateItem(
            item_text="Brief crews",
            item_type="status",
            display_order=30,
            is_required=True,
            status_options=STATUS_OPTIONS,
        ),
    ]
    session.add(template)
    session.commit()
    session.refresh(template)
    return template


@pytest.fixture(name="sample_checklist")
def sample_checklist_fixture(session: Session, sample_event: Event) -> ChecklistInstance:
    """An incident-level checklist with two checkbox items and one status item."""
    checklist = ChecklistInstance(
        name="Safety Briefing",
        event_id=sample_event.id,
        event_name=sample_event.name,
        total_items=3,
        required_items=2,
    )
    checklist.items = [
        ChecklistItem(item_text="Review weather", display_order=10, is_required=True),
        ChecklistItem(item_text="Confirm PPE", display_order=20),
        ChecklistItem(
            item_text="Brief crews",
            item_type="status",
            display_order=30,
            is_required=True,
            status_options=STATUS_OPTIONS,
        ),
    ]
    session.add(checklist)
    session.commit()
    session.refresh(checklist)
    return checklist


@pytest.fixture(name="archived_checklist")
def archived_checklist_fixture(session: Session, sample_event: Event) -> ChecklistInstance:
    checklist = ChecklistInstance(
        name="Old Checklist",
        event_id=sample_event.id,
        event_name=sample_event.name,
        is_archived=True,
        archived_by="admin@cobra.mil",
        archived_at=datetime.now(UTC),
        total_items=1,
    )
    checklist.items = [ChecklistItem(item_text="Done long ago", is_completed=True)]
    session.add(checklist)
    session.commit()
    session.refresh(checklist)
    return checklist
