"""Date resolution for relative and absolute date references in utterances."""

import re
import logging
from datetime import date, timedelta
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from ..models import DateMatch
from ..textutils import keyword_regex
from .base import BaseParser, ParseContext

logger = logging.getLogger(__name__)

# Sunday=0 .. Saturday=6, the same numbering used for every week phrase
WEEKDAY_INDEX = {
    '日': 0, '天': 0, '一': 1, '二': 2, '三': 3, '四': 4, '五': 5, '六': 6,
    'sunday': 0, 'monday': 1, 'tuesday': 2, 'wednesday': 3,
    'thursday': 4, 'friday': 5, 'saturday': 6,
}

MONTH_INDEX = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

_CN_WEEK = r'(?:週|周|星期|禮拜|礼拜)'
_CN_WEEKDAY = r'([一二三四五六日天])'
_EN_WEEKDAY = r'(sunday|monday|tuesday|wednesday|thursday|friday|saturday)'
_EN_MONTH = (r'(january|february|march|april|may|june|july|august|september|'
             r'october|november|december|jan|feb|mar|apr|jun|jul|aug|sept|sep|oct|nov|dec)')


def start_of_week(day: date) -> date:
    """Return the Sunday that starts the week containing ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def snap_to_weekday(day: date, weekday: int) -> date:
    """Move ``day`` to the given weekday (Sunday=0) inside its own week."""
    return start_of_week(day) + timedelta(days=weekday)


class DateResolver(BaseParser):
    """Resolve the first recognizable date reference in an utterance."""

    def __init__(self, today: Optional[date] = None):
        super().__init__(today=today)

        # Relative day keywords. Longer keywords come first so that
        # 大前天 is not read as 前天.
        self.relative_days = [
            ('大前天', -3), ('前天', -2), ('昨天', -1), ('昨日', -1),
            ('今天', 0), ('今日', 0), ('今', 0),
            ('明天', 1), ('明日', 1),
            ('大後天', 3), ('大后天', 3), ('後天', 2), ('后天', 2),
            ('day before yesterday', -2), ('yesterday', -1),
            ('today', 0), ('tonight', 0),
            ('day after tomorrow', 2), ('tomorrow', 1),
        ]
        self._relative_patterns = [
            (re.compile(keyword_regex(keyword), re.IGNORECASE), offset)
            for keyword, offset in self.relative_days
        ]

        # Week phrases in evaluation order: (rule, week offset, patterns)
        self.week_patterns: List[Tuple[str, int, List[re.Pattern]]] = [
            ('last_week', -1, [
                re.compile(r'上(?:個|个)?' + _CN_WEEK + _CN_WEEKDAY),
                re.compile(r'\blast\s+(?:week\s+)?' + _EN_WEEKDAY + r'\b', re.IGNORECASE),
            ]),
            ('this_week', 0, [
                re.compile(r'(?:這|这|本)(?:個|个)?' + _CN_WEEK + _CN_WEEKDAY),
                re.compile(r'\bthis\s+(?:week\s+)?' + _EN_WEEKDAY + r'\b', re.IGNORECASE),
            ]),
            ('next_week', 1, [
                re.compile(r'下(?:個|个)?' + _CN_WEEK + _CN_WEEKDAY),
                re.compile(r'\bnext\s+(?:week\s+)?' + _EN_WEEKDAY + r'\b', re.IGNORECASE),
            ]),
        ]

        self.month_day_patterns = [
            (re.compile(r'(\d{1,2})月(\d{1,2})[日號号]?'), 'numeric'),
            (re.compile(r'\b' + _EN_MONTH + r'\.?\s+(\d{1,2})(?:st|nd|rd|th)?\b',
                        re.IGNORECASE), 'month_name'),
        ]

        # M/D, but not the start of a clock time such as 3/30:00
        self.slash_pattern = re.compile(r'(\d{1,2})/(\d{1,2})(?!\d*:)')

        # A month/day more than this far ahead is taken to be last year's
        self.future_window = relativedelta(months=2)

    def resolve(self, text: str, today: Optional[date] = None) -> DateMatch:
        """
        Resolve the date referenced by an utterance.

        Args:
            text: Raw utterance
            today: Optional reference date

        Returns:
            DateMatch; falls back to the reference date with no matched span
        """
        context = self.build_context(text, today)
        result = self.parse_context(context)
        self.logger.debug(f"Resolved {text!r} -> {result.date} via {result.rule}")
        return result

    def parse_context(self, context: ParseContext) -> DateMatch:
        text = context.text
        today = context.today

        result = self._match_relative_day(text, today)
        if result:
            return result

        for rule, week_offset, patterns in self.week_patterns:
            result = self._match_weekday(text, today, rule, week_offset, patterns)
            if result:
                return result

        result = self._match_month_day(text, today)
        if result:
            return result

        result = self._match_slash(text, today)
        if result:
            return result

        return DateMatch(date=today, matched_span=None, rule='default')

    def _match_relative_day(self, text: str, today: date) -> Optional[DateMatch]:
        for pattern, offset in self._relative_patterns:
            match = pattern.search(text)
            if match:
                return DateMatch(
                    date=today + timedelta(days=offset),
                    matched_span=match.group(0),
                    rule='relative_day',
                )
        return None

    def _match_weekday(self, text: str, today: date, rule: str,
                       week_offset: int, patterns: List[re.Pattern]) -> Optional[DateMatch]:
        for pattern in patterns:
            match = pattern.search(text)
            if not match:
                continue
            weekday = WEEKDAY_INDEX.get(match.group(1).lower())
            if weekday is None:
                continue
            anchor = today + timedelta(weeks=week_offset)
            return DateMatch(
                date=snap_to_weekday(anchor, weekday),
                matched_span=match.group(0),
                rule=rule,
            )
        return None

    def _match_month_day(self, text: str, today: date) -> Optional[DateMatch]:
        for pattern, pattern_type in self.month_day_patterns:
            match = pattern.search(text)
            if not match:
                continue

            if pattern_type == 'month_name':
                month = MONTH_INDEX[match.group(1)[:3].lower()]
            else:
                month = int(match.group(1))
            day = int(match.group(2))

            resolved = self.infer_year(month, day, today)
            if resolved is None:
                self.logger.debug(f"Ignoring invalid month/day: {match.group(0)}")
                return None
            return DateMatch(date=resolved, matched_span=match.group(0), rule='month_day')
        return None

    def _match_slash(self, text: str, today: date) -> Optional[DateMatch]:
        match = self.slash_pattern.search(text)
        if not match:
            return None

        month, day = int(match.group(1)), int(match.group(2))
        if not (1 <= month <= 12 and 1 <= day <= 31):
            return None

        resolved = self.infer_year(month, day, today)
        if resolved is None:
            return None
        return DateMatch(date=resolved, matched_span=match.group(0), rule='slash')

    def infer_year(self, month: int, day: int, today: date) -> Optional[date]:
        """
        Build a date for month/day in the current year, stepping back one year
        when that date lies more than two months after ``today``.

        Returns:
            The resolved date, or None if month/day is not a real calendar date
        """
        try:
            candidate = date(today.year, month, day)
        except ValueError:
            return None

        if candidate > today + self.future_window:
            try:
                candidate = date(today.year - 1, month, day)
            except ValueError:
                return None
        return candidate
