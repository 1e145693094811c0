"""Utterance parsing components - date, amount, expense and task parsers."""

from .date_resolver import DateResolver
from .amount_parser import AmountParser
from .expense_parser import ExpenseParser
from .task_parser import TaskParser

__all__ = ['DateResolver', 'AmountParser', 'ExpenseParser', 'TaskParser']
