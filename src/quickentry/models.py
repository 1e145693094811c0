"""Structured records produced by the utterance parsers."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

OUTFLOW = 'outflow'
INFLOW = 'inflow'
DIRECTIONS = (OUTFLOW, INFLOW)

PRIORITY_HIGH = 'high'
PRIORITY_MEDIUM = 'medium'
PRIORITY_LOW = 'low'


@dataclass
class DateMatch:
    """Resolved calendar date plus the substring that produced it.

    ``matched_span`` is None when no date reference was recognized and
    ``date`` is simply the reference day.
    """
    date: date
    matched_span: Optional[str] = None
    rule: str = 'default'

    @property
    def is_explicit(self) -> bool:
        return self.matched_span is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date.isoformat(),
            'matched_span': self.matched_span,
            'rule': self.rule,
        }


@dataclass
class AmountMatch:
    """Extracted amount and the exact substring it was read from."""
    value: Decimal
    matched_span: str
    tier: str


@dataclass
class ParsedExpense:
    """Structured transaction extracted from an utterance."""
    amount: Decimal
    direction: str
    category: str
    date: date
    note: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'amount': str(self.amount),
            'direction': self.direction,
            'category': self.category,
            'date': self.date.isoformat(),
            'note': self.note,
        }


@dataclass
class ParsedTask:
    """Structured task extracted from an utterance."""
    text: str
    priority: str = PRIORITY_MEDIUM
    due_date: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'priority': self.priority,
            'due_date': self.due_date.isoformat() if self.due_date else None,
        }
