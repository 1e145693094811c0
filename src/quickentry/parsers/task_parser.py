"""Task parsing: priority, due date and a clean label from one utterance."""

import logging
from datetime import date
from typing import Optional

from ..models import PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM, ParsedTask
from ..textutils import collapse_whitespace, keyword_pattern, remove_once
from .base import BaseParser, ParseContext
from .date_resolver import DateResolver

logger = logging.getLogger(__name__)


class TaskParser(BaseParser):
    """Turn a free-text utterance into a ParsedTask."""

    def __init__(self, today: Optional[date] = None):
        super().__init__(today=today)
        self.date_resolver = DateResolver(today=today)

        self.urgent_keywords = [
            '今天必須', '今天必须', '今天要', '緊急', '紧急', '重要',
            '馬上', '马上', '立刻', 'urgent', 'important', 'asap', 'immediately',
            'must',
        ]
        self.relaxed_keywords = [
            '之後再', '之后再', '有空', '順便', '顺便', '不急', '隨時', '随时',
            'later is fine', 'when convenient', 'no rush', 'whenever',
        ]
        self.urgent_pattern = keyword_pattern(self.urgent_keywords)
        self.relaxed_pattern = keyword_pattern(self.relaxed_keywords)
        self.priority_pattern = keyword_pattern(self.urgent_keywords + self.relaxed_keywords)

    def parse_context(self, context: ParseContext) -> Optional[ParsedTask]:
        """
        Extract a task from an utterance.

        Args:
            context: Parse context with the utterance and reference date

        Returns:
            ParsedTask, or None for blank input
        """
        if context.is_blank:
            return None

        text = context.text
        priority = self.detect_priority(text)

        # Only an explicit date reference sets a due date
        date_match = self.date_resolver.parse_context(context)
        due_date = date_match.date if date_match.is_explicit else None

        label = self.clean_text(text, date_match.matched_span)

        return ParsedTask(text=label, priority=priority, due_date=due_date)

    def detect_priority(self, text: str) -> str:
        """
        Return the task priority.

        The relaxed check runs after the urgent one and unconditionally, so
        text carrying both vocabularies ends up low.
        """
        priority = PRIORITY_MEDIUM
        if self.urgent_pattern.search(text):
            priority = PRIORITY_HIGH
        if self.relaxed_pattern.search(text):
            priority = PRIORITY_LOW
        return priority

    def clean_text(self, text: str, date_span: Optional[str]) -> str:
        """Drop the date span and priority words; never return an empty label."""
        cleaned = remove_once(text, date_span)
        cleaned = self.priority_pattern.sub('', cleaned)
        cleaned = collapse_whitespace(cleaned)
        return cleaned or text.strip()
