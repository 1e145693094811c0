"""Category classification using ordered keyword rules."""

import re
import yaml
import logging
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from .models import DIRECTIONS
from .textutils import keyword_pattern

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / 'rules' / 'categories.yml'
OTHER = 'other'


class CategoryClassifier:
    """Classify an utterance into a fixed category vocabulary, per direction."""

    def __init__(self, rules_path: Optional[Path] = None):
        """
        Initialize classifier with category rules.

        Args:
            rules_path: Path to categories.yml file; the packaged rules by default
        """
        self.rules_path = Path(rules_path) if rules_path else DEFAULT_RULES_PATH
        self.rules: Dict[str, List[Tuple[str, re.Pattern]]] = {}
        self.labels: Dict[str, str] = {OTHER: '其他'}
        self.load_rules()

    def load_rules(self):
        """Load category rules from YAML file."""
        try:
            with open(self.rules_path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load category rules: {e}")
            raise

        if not isinstance(raw, dict):
            raise ValueError(f"Category rules in {self.rules_path} must be a mapping")

        for direction in DIRECTIONS:
            entries = raw.get(direction)
            if not isinstance(entries, list):
                raise ValueError(f"Category rules are missing the '{direction}' list")
            self.rules[direction] = [self._load_entry(direction, entry) for entry in entries]

        total = sum(len(table) for table in self.rules.values())
        logger.info(f"Loaded {total} category rules from {self.rules_path.name}")

    def _load_entry(self, direction: str, entry) -> Tuple[str, re.Pattern]:
        if not isinstance(entry, dict) or 'category' not in entry or 'keywords' not in entry:
            raise ValueError(f"Malformed {direction} rule: {entry!r}")

        category = str(entry['category'])
        if category == OTHER:
            raise ValueError(f"'{OTHER}' is implicit and cannot have keywords")
        self.labels[category] = str(entry.get('label', category))
        keywords = entry['keywords']
        if not isinstance(keywords, list) or not keywords:
            raise ValueError(f"Rule '{category}' needs a non-empty keyword list")
        return category, keyword_pattern(str(keyword) for keyword in keywords)

    def classify(self, text: str, direction: str) -> str:
        """
        Classify an utterance.

        Args:
            text: Full utterance
            direction: 'outflow' or 'inflow'; selects the rule table

        Returns:
            The first matching category, or 'other'
        """
        for category, pattern in self.rules.get(direction, []):
            match = pattern.search(text or '')
            if match:
                logger.debug(f"Classified as '{category}' via keyword '{match.group(0)}'")
                return category

        logger.debug(f"No {direction} category match found, defaulting to '{OTHER}'")
        return OTHER

    def vocabulary(self, direction: str) -> Set[str]:
        """Return the closed set of categories for a direction."""
        return {category for category, _ in self.rules.get(direction, [])} | {OTHER}

    def label_for(self, category: str) -> str:
        """Display label for a category."""
        return self.labels.get(category, category)
