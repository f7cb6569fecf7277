from cobra.models.checklist import ChecklistInstance
from cobra.models.event import Event
from cobra.models.item import ChecklistItem
from cobra.models.operational_period import OperationalPeriod
from cobra.models.template import Template, TemplateItem

__all__ = [
    "Event",
    "OperationalPeriod",
    "Template",
    "TemplateItem",
    "ChecklistInstance",
    "ChecklistItem",
]
