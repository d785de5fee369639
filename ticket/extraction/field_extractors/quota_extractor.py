"""
Quota Extractor - Reservation quota (GENERAL, TATKAL, ...) or its code
"""
from typing import Optional

from ..models.extraction_models import Candidate
from ..shared_utils.cascade import ExtractionContext, Strategy
from ..shared_utils.pattern_matcher import vocabulary_pattern
from .base import FieldExtractor

QUOTA_LABEL = r'\bQuota\b\s*[:\-]?'
PARENTHESIZED_CODE = r'\((?P<code>[A-Z]{2})\)'


class QuotaExtractor(FieldExtractor):

    field_name = 'quota'

    def strategies(self):
        return [
            Strategy('label_adjacent', self._label_adjacent),
            Strategy('parenthesized_code', self._parenthesized_code),
        ]

    def _label_adjacent(self, context: ExtractionContext) -> Optional[Candidate]:
        config = context.config
        names = tuple(name for name, _ in config.quota_names)
        vocabulary = names + config.quota_codes

        found = self.pattern_matcher.find_labeled_value(
            context.lines, QUOTA_LABEL, vocabulary_pattern(vocabulary), lookahead=1
        )
        if not found:
            return None
        return Candidate(self.pattern_matcher.find_vocabulary(found.value, vocabulary), 0, found.line_index)

    def _parenthesized_code(self, context: ExtractionContext) -> Optional[Candidate]:
        codes = set(context.config.quota_codes)
        for index, line in enumerate(context.lines):
            for match in self.pattern_matcher.find_all_matches(line, PARENTHESIZED_CODE, flags=0):
                if match.group('code') in codes:
                    return Candidate(match.group('code'), 1, index)
        return None
