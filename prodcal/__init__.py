"""Production calendar generator.

Turns free-text recurrence rules ("first working day of every month",
"9th, if weekend then previous Friday") into dated events for a year.
"""

from .assembler import generate_events
from .model import CalendarEvent, RawLine, RuleClassification, RuleFamily, ShiftPolicy

__all__ = [
    "__version__",
    "generate_events",
    "CalendarEvent",
    "RawLine",
    "RuleClassification",
    "RuleFamily",
    "ShiftPolicy",
]
__version__ = "0.1.0"

APP_ID = "prodcal"
PURPOSE = "Turn free-text recurrence rules into a production calendar"
