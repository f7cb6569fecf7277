"""Tests for database models."""

from datetime import UTC, datetime, timedelta

from sqlmodel import Session, select

from cobra.checklist.status_options import StatusOption
from cobra.models import (
    ChecklistInstance,
    ChecklistItem,
    Event,
    OperationalPeriod,
    Template,
    TemplateItem,
)


class TestEventModel:
    def test_create_event(self, session: Session):
        """Test creating a basic event."""
        event = Event(name="Flood Response", category="Flood")
        session.add(event)
        session.commit()

        retrieved = session.exec(select(Event).where(Event.name == "Flood Response")).first()

        assert retrieved is not None
        assert retrieved.is_active is True
        assert retrieved.is_archived is False

    def test_operational_period_relationship(self, sample_event: Event, periods, session: Session):
        session.refresh(sample_event)
        assert {p.name for p in sample_event.operational_periods} == {
            "OP 1 - Day Shift",
            "OP 2 - Night Shift",
        }


class TestOperationalPeriodModel:
    def test_defaults(self, sample_event: Event, session: Session):
        period = OperationalPeriod(
            event_id=sample_event.id,
            name="OP 1",
            start_time=datetime.now(UTC),
        )
        session.add(period)
        session.commit()

        retrieved = session.get(OperationalPeriod, period.id)
        assert retrieved.is_current is False
        assert retrieved.end_time is None
        assert retrieved.is_archived is False


class TestChecklistModel:
    def test_create_checklist(self, sample_checklist: ChecklistInstance, session: Session):
        retrieved = session.get(ChecklistInstance, sample_checklist.id)
        assert retrieved.operational_period_id is None
        assert retrieved.progress_percentage == 0.0
        assert retrieved.is_archived is False
        assert len(retrieved.items) == 3

    def test_items_in_display_order(self, sample_event: Event, session: Session):
        checklist = ChecklistInstance(name="Ordered", event_id=sample_event.id)
        checklist.items = [
            ChecklistItem(item_text="third", display_order=3),
            ChecklistItem(item_text="first", display_order=1),
            ChecklistItem(item_text="second", display_order=2),
        ]
        session.add(checklist)
        session.commit()
        session.expire_all()

        retrieved = session.get(ChecklistInstance, checklist.id)
        assert [i.item_text for i in retrieved.items] == ["first", "second", "third"]

    def test_status_options_loaded_as_models(self, sample_checklist: ChecklistInstance, session: Session):
        session.expire_all()
        item = session.exec(
            select(ChecklistItem).where(ChecklistItem.item_type == "status")
        ).one()

        assert all(isinstance(o, StatusOption) for o in item.status_options)
        assert [o.label for o in item.status_options] == [
            "Not Started",
            "In Progress",
            "Complete",
            "N/A",
        ]

    def test_deleting_checklist_deletes_items(self, sample_checklist: ChecklistInstance, session: Session):
        item_ids = [i.id for i in sample_checklist.items]

        session.delete(sample_checklist)
        session.commit()

        for item_id in item_ids:
            assert session.get(ChecklistItem, item_id) is None

    def test_checkbox_item_untouched_by_default(self, sample_checklist: ChecklistInstance):
        item = sample_checklist.items[0]
        assert item.is_completed is None
        assert item.completed_at is None


class TestTemplateModel:
    def test_template_items(self, sample_template: Template, session: Session):
        session.expire_all()
        template = session.get(Template, sample_template.id)
        assert [i.item_text for i in template.items] == [
            "Review weather",
            "Confirm PPE",
            "Brief crews",
        ]
        assert template.items[2].status_options[2].is_completion is True

    def test_equal_display_order_sorted_by_creation(self, session: Session):
        created = datetime(2024, 3, 1, 8, 0, tzinfo=UTC)
        template = Template(name="Tie Break")
        template.items = [
            TemplateItem(item_text="added second", display_order=10, created_at=created + timedelta(seconds=1)),
            TemplateItem(item_text="added first", display_order=10, created_at=created),
            TemplateItem(item_text="earlier order", display_order=5, created_at=created + timedelta(seconds=2)),
        ]
        session.add(template)
        session.commit()
        session.expire_all()

        retrieved = session.get(Template, template.id)
        assert [i.item_text for i in retrieved.items] == [
            "earlier order",
            "added first",
            "added second",
        ]
