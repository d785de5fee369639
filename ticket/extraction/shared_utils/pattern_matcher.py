"""
Pattern Matcher - Handles regex pattern matching for extraction
"""
import re
from typing import Iterable, List, Match, NamedTuple, Optional, Pattern, Sequence


class LabeledValue(NamedTuple):
    value: str
    line_index: int


def vocabulary_pattern(words: Iterable[str]) -> str:
    """
    Regex alternation for a vocabulary, longest entry first.

    Entries are matched as whole tokens and inner spaces accept any run of
    whitespace, so ``SECOND AC`` also matches ``SECOND  AC``.
    """
    ordered = sorted(set(words), key=lambda w: (-len(w), w))
    escaped = [re.escape(word).replace(r'\ ', r'\s+') for word in ordered]
    return r'(?<![A-Za-z0-9])(?:' + '|'.join(escaped) + r')(?![A-Za-z0-9])'


class PatternMatcher:
    """Handles regex pattern matching operations for ticket extraction."""

    def __init__(self):
        self.cache = {}  # Cache compiled patterns for performance

    def compile_pattern(self, pattern_str: str, flags: int = re.IGNORECASE) -> Pattern:
        """Compile and cache regex pattern."""
        cache_key = (pattern_str, flags)
        if cache_key not in self.cache:
            self.cache[cache_key] = re.compile(pattern_str, flags)
        return self.cache[cache_key]

    def find_all_matches(self, text: str, pattern_str: str, flags: int = re.IGNORECASE) -> List[Match]:
        """Find all matches for a pattern in text."""
        pattern = self.compile_pattern(pattern_str, flags)
        return list(pattern.finditer(text))

    def search_pattern(self, text: str, pattern_str: str, flags: int = re.IGNORECASE) -> Optional[Match]:
        """Search for pattern in text (first match)."""
        pattern = self.compile_pattern(pattern_str, flags)
        return pattern.search(text)

    def find_first_line(self, lines: Sequence[str], pattern_str: str,
                        flags: int = re.IGNORECASE, start: int = 0):
        """Return ``(index, match)`` for the first line matching the pattern."""
        pattern = self.compile_pattern(pattern_str, flags)
        for index in range(start, len(lines)):
            match = pattern.search(lines[index])
            if match:
                return index, match
        return None

    def find_vocabulary(self, text: str, words: Iterable[str], flags: int = re.IGNORECASE) -> Optional[str]:
        """
        Find the first vocabulary entry in text (case-insensitive unless flags say otherwise).

        Returns the vocabulary's own spelling, not the text's.
        """
        words = tuple(words)
        match = self.search_pattern(text, vocabulary_pattern(words), flags)
        if not match:
            return None
        found = re.sub(r'\s+', ' ', match.group(0)).upper()
        for word in words:
            if word.upper() == found:
                return word
        return found

    def find_labeled_value(
        self,
        lines: Sequence[str],
        label_pattern: str,
        value_pattern: str,
        lookahead: int = 2,
        value_flags: int = re.IGNORECASE,
        skip_line=None
    ) -> Optional[LabeledValue]:
        """
        Find a value near a label.

        For each line matching ``label_pattern`` the value is searched in the
        text after the label, then in each of the next ``lookahead`` lines.
        Renderers often split a label and its value across table cells, which
        puts the value on the following line. The value is the named group
        ``value`` when the pattern defines it, else the whole match.

        Args:
            lines: Document lines in reading order
            label_pattern: Regex for the label (case-insensitive)
            value_pattern: Regex for the value
            lookahead: Number of following lines to try
            value_flags: Regex flags for the value pattern
            skip_line: Optional predicate; label lines it accepts are ignored

        Returns:
            LabeledValue or None
        """
        label = self.compile_pattern(label_pattern)
        value = self.compile_pattern(value_pattern, value_flags)

        for index, line in enumerate(lines):
            label_match = label.search(line)
            if not label_match:
                continue
            if skip_line is not None and skip_line(line):
                continue

            value_match = value.search(line, label_match.end())
            if value_match:
                return LabeledValue(self._value_of(value_match), index)

            for offset in range(1, lookahead + 1):
                if index + offset >= len(lines):
                    break
                value_match = value.search(lines[index + offset])
                if value_match:
                    return LabeledValue(self._value_of(value_match), index + offset)
        return None

    @staticmethod
    def _value_of(match: Match) -> str:
        if 'value' in match.re.groupindex and match.group('value') is not None:
            return match.group('value').strip()
        return match.group(0).strip()
