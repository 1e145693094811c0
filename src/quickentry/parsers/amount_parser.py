"""Amount extraction with unit, symbol and largest-number fallbacks."""

import re
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..models import AmountMatch
from .base import BaseParser, ParseContext

logger = logging.getLogger(__name__)

# Digits with optional 1,200-style grouping and up to two decimals
_NUMBER = r'((?:\d{1,3}(?:,\d{3})+(?!\d)|\d+)(?:\.\d{1,2})?)'


class AmountParser(BaseParser):
    """Specialized parser for the money amount mentioned in an utterance."""

    def __init__(self):
        super().__init__()

        # Tiers in priority order; the first tier with any match wins
        self.unit_pattern = re.compile(
            _NUMBER + r'\s*(?:元|塊|块|円|圓|(?:dollars?|bucks?|yuan|rmb)\b)',
            re.IGNORECASE,
        )
        self.symbol_pattern = re.compile(r'(?:NT\$|\$|¥|￥)' + _NUMBER)
        self.bare_pattern = re.compile(_NUMBER)

    def parse_context(self, context: ParseContext) -> Optional[AmountMatch]:
        """
        Extract the amount from an utterance.

        Args:
            context: Parse context with the utterance

        Returns:
            AmountMatch with a strictly positive value, or None
        """
        if context.is_blank:
            return None

        text = context.text
        candidate = (
            self._first_match(self.unit_pattern, text, 'unit')
            or self._first_match(self.symbol_pattern, text, 'symbol')
            or self._largest_number(text)
        )

        if candidate is None or candidate.value <= 0:
            self.logger.debug(f"No positive amount in {text!r}")
            return None
        return candidate

    def _first_match(self, pattern, text: str, tier: str) -> Optional[AmountMatch]:
        match = pattern.search(text)
        if not match:
            return None
        value = self._to_decimal(match.group(1))
        if value is None:
            return None
        return AmountMatch(value=value, matched_span=match.group(0), tier=tier)

    def _largest_number(self, text: str) -> Optional[AmountMatch]:
        """Pick the largest standalone number so quantities like 3 packs lose to the price."""
        best: Optional[AmountMatch] = None
        for match in self.bare_pattern.finditer(text):
            value = self._to_decimal(match.group(1))
            if value is None:
                continue
            # Strictly greater: the first occurrence of the maximum is kept
            if best is None or value > best.value:
                best = AmountMatch(value=value, matched_span=match.group(0), tier='largest')
        return best

    @staticmethod
    def _to_decimal(raw: str) -> Optional[Decimal]:
        try:
            return Decimal(raw.replace(',', ''))
        except InvalidOperation:
            return None
