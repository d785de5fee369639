"""
Class Extractor - Travel class from a fixed vocabulary (SLEEPER, 3A, CC...)
"""
import re
from typing import Optional

from ..models.extraction_models import Candidate
from ..shared_utils.cascade import ExtractionContext, Strategy
from ..shared_utils.pattern_matcher import vocabulary_pattern
from .base import FieldExtractor
from .train_extractor import find_inline_train, split_train_name

CLASS_LABEL = r'\bClass\b\s*[:\-]?'
TRAIN_LINE = r'(?<!\d)\d{4,5}\s*/\s*[A-Za-z]'


class ClassExtractor(FieldExtractor):
    """Label-adjacent class, then the class token cut from the train name, then anywhere off the train line."""

    field_name = 'travel_class'

    def strategies(self):
        return [
            Strategy('label_adjacent', self._label_adjacent),
            Strategy('train_name_suffix', self._train_name_suffix),
            Strategy('vocabulary_scan', self._vocabulary_scan),
        ]

    def _label_adjacent(self, context: ExtractionContext) -> Optional[Candidate]:
        vocabulary = context.config.class_vocabulary
        found = self.pattern_matcher.find_labeled_value(
            context.lines, CLASS_LABEL, vocabulary_pattern(vocabulary),
            lookahead=1,
        )
        if not found:
            return None
        return Candidate(self.pattern_matcher.find_vocabulary(found.value, vocabulary), 0, found.line_index)

    def _vocabulary_scan(self, context: ExtractionContext) -> Optional[Candidate]:
        # Every line is tried for a name before any line is tried for a code;
        # codes only count in upper case ("Sl. No." is not SL)
        names = tuple(word for word in context.config.class_vocabulary if len(word) > 3)
        codes = tuple(word for word in context.config.class_vocabulary if len(word) <= 3)
        train_line = self.pattern_matcher.compile_pattern(TRAIN_LINE)

        for vocabulary, flags in ((names, re.IGNORECASE), (codes, 0)):
            if not vocabulary:
                continue
            for index, line in enumerate(context.lines):
                if train_line.search(line):
                    continue
                found = self.pattern_matcher.find_vocabulary(line, vocabulary, flags)
                if found:
                    return Candidate(found, 2, index)
        return None

    def _train_name_suffix(self, context: ExtractionContext) -> Optional[Candidate]:
        found = find_inline_train(context, self.pattern_matcher)
        if not found:
            return None
        index, _, raw_name = found
        _, travel_class = split_train_name(raw_name, context.config, self.pattern_matcher)
        if travel_class:
            return Candidate(travel_class, 1, index)
        return None
