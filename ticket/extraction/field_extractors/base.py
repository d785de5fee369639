"""
Base class for field extractors
"""
from typing import List, Optional

from ..models.extraction_models import Candidate
from ..shared_utils.cascade import ExtractionContext, Strategy, run_cascade
from ..shared_utils.pattern_matcher import PatternMatcher
from ..shared_utils.text_cleaner import TextCleaner


class FieldExtractor:
    """
    One field, one ordered cascade of strategies.

    Subclasses name the field and list their strategies, most specific first.
    """

    field_name = ''

    def __init__(self, pattern_matcher: PatternMatcher = None, text_cleaner: TextCleaner = None):
        self.pattern_matcher = pattern_matcher or PatternMatcher()
        self.text_cleaner = text_cleaner or TextCleaner()

    def strategies(self) -> List[Strategy]:
        raise NotImplementedError

    def extract(self, context: ExtractionContext) -> Optional[Candidate]:
        return run_cascade(self.field_name, self.strategies(), context)
