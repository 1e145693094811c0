"""Quick entry - turn free-text utterances into expenses and tasks."""

__version__ = "1.0.0"

from .models import DateMatch, ParsedExpense, ParsedTask
from .classify import CategoryClassifier
from .parsers import DateResolver, ExpenseParser, TaskParser
from .export import ExcelExporter

__all__ = [
    'DateMatch',
    'ParsedExpense',
    'ParsedTask',
    'CategoryClassifier',
    'DateResolver',
    'ExpenseParser',
    'TaskParser',
    'ExcelExporter',
]
