"""
Train Extractor - Train number and name (``12951/MUMBAI RAJDHANI``)
"""
import re
from typing import Optional, Tuple

from ...config.config_manager import ExtractionConfig
from ..models.extraction_models import Candidate
from ..shared_utils.cascade import ExtractionContext, Strategy
from ..shared_utils.pattern_matcher import PatternMatcher, vocabulary_pattern
from .base import FieldExtractor

# 4-5 digit code, slash, then uppercase words. Every word must end at
# whitespace or end of line, so "DURONTO Class" stops before "Class".
INLINE_TRAIN = (
    r"(?<![\d/])(?P<no>\d{4,5})\s*/\s*"
    r"(?P<name>[A-Z][A-Z0-9.\-()']*(?:[ \t]+[A-Z0-9.\-()']+)*)(?=\s|$)"
)
TRAIN_NAME_LABEL = r'\bTrain\s*(?:No\.?|Number)?\s*(?:/|&|and)?\s*Name\b\s*[:\-]?'
LABELED_TRAIN = r"(?<!\d)(?P<value>\d{4,5}\s*/\s*[A-Za-z].*)"
TRAIN_NO_LABEL = r'\bTrain\s*(?:No\.?|Number)\s*[:\-]?'
TRAIN_NO_VALUE = r'(?<![\d\-/.:])(?P<value>\d{4,5})(?![\d\-/.:])'


def split_train_name(
    name: str,
    config: ExtractionConfig,
    pattern_matcher: PatternMatcher
) -> Tuple[Optional[str], Optional[str]]:
    """
    Cut a raw train name at the first field-boundary keyword or embedded class
    token after its first word.

    Returns:
        ``(train_name, travel_class)``; the class is the vocabulary spelling
        of the token the name was cut at, if any
    """
    first_word = re.match(r'\S+', name)
    start = first_word.end() if first_word else 0
    cut = len(name)
    travel_class = None

    boundary = pattern_matcher.compile_pattern(vocabulary_pattern(config.boundary_keywords))
    boundary_match = boundary.search(name, start)
    if boundary_match:
        cut = boundary_match.start()

    class_rx = pattern_matcher.compile_pattern(vocabulary_pattern(config.class_vocabulary))
    class_match = class_rx.search(name, start)
    if class_match and class_match.start() < cut:
        cut = class_match.start()
        travel_class = pattern_matcher.find_vocabulary(class_match.group(0), config.class_vocabulary)

    cleaned = re.sub(r'[\s\-/:,(]+$', '', name[:cut]).strip()
    if sum(1 for ch in cleaned if ch.isalpha()) < 2:
        return None, travel_class
    return cleaned, travel_class


def find_inline_train(context: ExtractionContext, pattern_matcher: PatternMatcher):
    """First ``NNNNN/NAME`` occurrence as ``(line_index, number, raw_name)``."""
    found = pattern_matcher.find_first_line(context.lines, INLINE_TRAIN, flags=0)
    if not found:
        return None
    index, match = found
    return index, match.group('no'), match.group('name')


class TrainExtractor(FieldExtractor):
    """Candidate value is ``(train_no, train_name)``; the name may be None."""

    field_name = 'train'

    def strategies(self):
        return [
            Strategy('inline_number_name', self._inline),
            Strategy('labeled_number_name', self._labeled),
            Strategy('labeled_number_only', self._number_only),
        ]

    def _inline(self, context: ExtractionContext) -> Optional[Candidate]:
        found = find_inline_train(context, self.pattern_matcher)
        if not found:
            return None
        index, number, raw_name = found
        name, _ = split_train_name(raw_name, context.config, self.pattern_matcher)
        if not name:
            return None
        return Candidate((number, name), 0, index)

    def _labeled(self, context: ExtractionContext) -> Optional[Candidate]:
        found = self.pattern_matcher.find_labeled_value(
            context.lines, TRAIN_NAME_LABEL, LABELED_TRAIN,
            lookahead=context.config.label_lookahead,
        )
        if not found:
            return None
        number, _, raw_name = found.value.partition('/')
        name, _ = split_train_name(raw_name.strip(), context.config, self.pattern_matcher)
        if not name:
            return None
        return Candidate((number.strip(), name), 1, found.line_index)

    def _number_only(self, context: ExtractionContext) -> Optional[Candidate]:
        found = self.pattern_matcher.find_labeled_value(
            context.lines, TRAIN_NO_LABEL, TRAIN_NO_VALUE,
            lookahead=context.config.label_lookahead,
        )
        if not found:
            return None
        return Candidate((found.value, None), 2, found.line_index)
