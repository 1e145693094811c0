"""Base classes for utterance parsers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ParseContext:
    """A single utterance together with the date it is interpreted against."""
    text: str
    today: date = field(default_factory=date.today)

    @property
    def is_blank(self) -> bool:
        return not self.text or not self.text.strip()


class BaseParser(ABC):
    """Base class for all utterance parsers."""

    def __init__(self, today: Optional[date] = None):
        """
        Args:
            today: Fixed reference date; the system clock is used when omitted
        """
        self.today = today
        self.logger = logging.getLogger(self.__class__.__name__)

    def build_context(self, text: str, today: Optional[date] = None) -> ParseContext:
        """Create a parse context, resolving the reference date.

        A per-call ``today`` wins over the one given to the constructor.
        """
        reference = today or self.today or date.today()
        return ParseContext(text=text or '', today=reference)

    def parse(self, text: str, today: Optional[date] = None) -> Optional[Any]:
        """
        Parse an utterance.

        Args:
            text: Raw user utterance
            today: Optional reference date for relative date words

        Returns:
            Structured result, or None if the utterance could not be parsed
        """
        context = self.build_context(text, today)
        result = self.parse_context(context)
        self._log_result(result, context)
        return result

    @abstractmethod
    def parse_context(self, context: ParseContext) -> Optional[Any]:
        """Parse the field(s) this parser is responsible for."""
        pass

    def _log_result(self, result: Optional[Any], context: ParseContext):
        """Log parsing result for debugging."""
        if result is not None:
            self.logger.info(f"Parsed: {result}")
        else:
            self.logger.warning(f"Parsing failed - no result for {context.text!r}")
