"""Expense parsing: amount, direction, category, date and note from one utterance."""

import re
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from ..classify import CategoryClassifier
from ..models import INFLOW, OUTFLOW, ParsedExpense
from ..textutils import collapse_whitespace, keyword_pattern, remove_once
from .amount_parser import AmountParser
from .base import BaseParser, ParseContext
from .date_resolver import DateResolver

logger = logging.getLogger(__name__)


class ExpenseParser(BaseParser):
    """Turn a free-text utterance into a ParsedExpense."""

    def __init__(self, today: Optional[date] = None,
                 rules_path: Optional[Path] = None,
                 classifier: Optional[CategoryClassifier] = None):
        """
        Args:
            today: Fixed reference date; the system clock is used when omitted
            rules_path: Category rules file, used when no classifier is given
            classifier: Pre-loaded category classifier to share between parsers
        """
        super().__init__(today=today)
        self.amount_parser = AmountParser()
        self.date_resolver = DateResolver(today=today)
        self.classifier = classifier or CategoryClassifier(rules_path)

        # Presence of any of these marks money coming in
        self.inflow_keywords = [
            '收到', '收入', '薪水', '薪資', '薪资', '工資', '工资', '月薪',
            '獎金', '奖金', '紅利', '红利', '退款', '退稅', '退税', '利息',
            '股息', '分紅', '分红', '賺', '赚', '領到', '领到', '入帳', '入账',
            'salary', 'paycheck', 'wages', 'bonus', 'refund', 'interest', 'dividend',
            'earned', 'received',
        ]
        self.inflow_pattern = keyword_pattern(self.inflow_keywords)

        # Filler verbs dropped from the note. Longer forms come first so
        # that 花費 is removed whole instead of leaving 費 behind.
        self.filler_pattern = re.compile(
            r'花費了?|花费了?|消費了?|消费了?|支出了?|支付了?|'
            r'花了?|付了?|買了?|买了?|收到|領到|领到|賺了?|赚了?|'
            r'\b(?:spent|paid|bought|received|earned|cost)\b',
            re.IGNORECASE,
        )

    def parse_context(self, context: ParseContext) -> Optional[ParsedExpense]:
        """
        Extract a transaction from an utterance.

        Args:
            context: Parse context with the utterance and reference date

        Returns:
            ParsedExpense, or None when no positive amount is present
        """
        if context.is_blank:
            return None

        text = context.text

        amount = self.amount_parser.parse_context(context)
        if amount is None:
            return None

        direction = self.detect_direction(text)

        # Expenses always carry a date; the reference day when none is named
        date_match = self.date_resolver.parse_context(context)

        category = self.classifier.classify(text, direction)
        note = self.build_note(text, amount.matched_span, date_match.matched_span)

        self.logger.debug(
            f"amount={amount.value} ({amount.tier}), direction={direction}, "
            f"category={category}, date={date_match.date} ({date_match.rule})"
        )

        return ParsedExpense(
            amount=amount.value,
            direction=direction,
            category=category,
            date=date_match.date,
            note=note,
        )

    def detect_direction(self, text: str) -> str:
        """Return 'inflow' if any income keyword is present, else 'outflow'."""
        match = self.inflow_pattern.search(text)
        if match:
            self.logger.debug(f"Inflow keyword: {match.group(0)!r}")
            return INFLOW
        return OUTFLOW

    def build_note(self, text: str, amount_span: Optional[str],
                   date_span: Optional[str]) -> str:
        """Strip amount, date and filler verbs from the utterance."""
        note = remove_once(text, amount_span)
        note = remove_once(note, date_span)
        note = self.filler_pattern.sub('', note)
        return collapse_whitespace(note)
