"""Order extraction from free-form conversation text."""
import logging
import re
from typing import List, Optional, Sequence, Set

from app.services.ordering.models import RawOrderLine
from app.services.ordering.numbers import QUANTITY_TOKEN_PATTERN, value_of

logger = logging.getLogger(__name__)

# Generic nouns caught even without quantity language ("I'll get a coke")
KNOWN_ITEM_NAMES = (
    "burger",
    "fries",
    "coke",
    "milkshake",
    "drink",
    "coffee",
    "soda",
    "water",
)

_TERMINATOR = r"(?:[.,?!]|\band\b|\bwith\b|$)"

# Item phrases never contain a terminator word or another quantity
_PHRASE_WORD = rf"(?!(?:and|with|{QUANTITY_TOKEN_PATTERN})\b)\w+"
_ITEM_PHRASE = rf"{_PHRASE_WORD}(?:\s+{_PHRASE_WORD})*?"

QUANTITY_FIRST = re.compile(
    rf"\b({QUANTITY_TOKEN_PATTERN})\b\s+({_ITEM_PHRASE})\s*{_TERMINATOR}",
    re.IGNORECASE,
)
QUANTITY_LAST = re.compile(
    rf"\b({_ITEM_PHRASE})\s+({QUANTITY_TOKEN_PATTERN})\b\s*{_TERMINATOR}",
    re.IGNORECASE,
)

# A modifier list ends where the next "and <quantity>" phrase starts
_MODIFIER_LIST_END = re.compile(rf"\band\s+(?:{QUANTITY_TOKEN_PATTERN})\b", re.IGNORECASE)
_MODIFIER_SEPARATOR = re.compile(r",|\band\b", re.IGNORECASE)

_NAME_PATTERNS = (
    re.compile(r"\bmy name is ([a-z]+(?: [a-z]+)?)", re.IGNORECASE),
    re.compile(r"\bthis is ([a-z]+(?: [a-z]+)?)", re.IGNORECASE),
    re.compile(r"\b([A-Z][a-z]+) speaking\b"),
    re.compile(r"\b([A-Z][a-z]+) here\b"),
)
_NAME_STOPWORDS = {"and", "i", "here", "speaking", "please", "calling", "for", "from"}


def extract_customer_name(text: str) -> Optional[str]:
    """Pick the customer's name out of phrases like "my name is Sam"."""
    if not text:
        return None
    for pattern in _NAME_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        words = match.group(1).split()
        while words and words[-1].lower() in _NAME_STOPWORDS:
            words.pop()
        if words:
            return " ".join(words)
    return None


class TextOrderExtractor:
    """
    Scans conversation text for order lines.

    Two passes run in order and their results are concatenated:
    quantity/item pairs ("two burgers", "fries 3") first, then a
    known-name pass that catches plain mentions ("I'll get a coke").
    """

    def __init__(self, known_item_names: Sequence[str] = KNOWN_ITEM_NAMES):
        self.known_item_names = tuple(name.lower() for name in known_item_names)

    def extract(self, conversation_text: str) -> List[RawOrderLine]:
        """
        Extract raw order lines from conversation text.

        Args:
            conversation_text: Full conversation or transcript text

        Returns:
            Raw order lines in order of discovery
        """
        if not conversation_text or not conversation_text.strip():
            return []

        lines = self._extract_quantity_pairs(conversation_text)
        lines.extend(self._extract_known_names(conversation_text, lines))
        logger.debug(
            f"[EXTRACTOR] Extracted {len(lines)} lines: "
            f"{[(line.name, line.quantity) for line in lines]}"
        )
        return lines

    def _extract_quantity_pairs(self, text: str) -> List[RawOrderLine]:
        lines: List[RawOrderLine] = []
        claimed: Set[int] = set()
        for pattern, quantity_first in ((QUANTITY_FIRST, True), (QUANTITY_LAST, False)):
            quantity_group = 1 if quantity_first else 2
            for match in pattern.finditer(text):
                # Each quantity token belongs to one line only
                if match.start(quantity_group) in claimed:
                    continue
                claimed.add(match.start(quantity_group))
                if quantity_first:
                    quantity_token, item_phrase = match.group(1), match.group(2)
                else:
                    item_phrase, quantity_token = match.group(1), match.group(2)
                item_phrase = " ".join(item_phrase.split())
                if not item_phrase:
                    continue
                lines.append(
                    RawOrderLine(
                        name=item_phrase,
                        quantity=value_of(quantity_token) or 1,
                        modifier_phrases=self._find_modifiers(text, item_phrase),
                    )
                )
        return lines

    def _find_modifiers(self, text: str, item_phrase: str) -> List[str]:
        phrase_pattern = r"\s+".join(re.escape(word) for word in item_phrase.split())
        clause = re.search(rf"{phrase_pattern}\s+with\s+([\w\s,]+)", text, re.IGNORECASE)
        if not clause:
            return []
        modifier_list = clause.group(1)
        end = _MODIFIER_LIST_END.search(modifier_list)
        if end:
            modifier_list = modifier_list[: end.start()]
        phrases = (" ".join(part.split()) for part in _MODIFIER_SEPARATOR.split(modifier_list))
        return [phrase for phrase in phrases if phrase]

    def _extract_known_names(
        self, text: str, found: List[RawOrderLine]
    ) -> List[RawOrderLine]:
        lowered = text.lower()
        seen = [line.name.lower() for line in found]
        lines: List[RawOrderLine] = []
        for name in self.known_item_names:
            if any(name in existing for existing in seen):
                continue
            if name in lowered:
                lines.append(RawOrderLine(name=name, quantity=1))
                seen.append(name)
        return lines
