"""
Text Cleaner - Normalizes reconstructed PDF text before extraction
"""
import re
from typing import Tuple


class TextCleaner:
    """Cleans and normalizes text for extraction."""

    def clean_text_line(self, line):
        """
        Normalize renderer artifacts: non-breaking spaces, dash variants and
        runs of whitespace.
        """
        if not line:
            return ""

        line = line.replace('\u00a0', ' ')

        # Replace all dash variants with standard dash
        line = re.sub(r"[\u2010-\u2015\u2212]", "-", line)

        # Normalize spacing
        line = re.sub(r"\s+", " ", line)

        return line.strip()

    def split_lines(self, text) -> Tuple[str, ...]:
        """Split text into cleaned, non-empty lines."""
        if not text:
            return ()
        cleaned = (self.clean_text_line(line) for line in re.split(r'\r?\n', text))
        return tuple(line for line in cleaned if line)

    def truncate_at_lowercase_word(self, text):
        """
        Keep the leading run of words that carry no lowercase letter.

        Ticket data fields are printed in capitals, so the first word with a
        lowercase letter marks where prose starts.
        """
        kept = []
        for word in text.split():
            if any(ch.islower() for ch in word):
                break
            kept.append(word)
        return " ".join(kept)

    def lowercase_ratio(self, text):
        """Share of letters in text that are lowercase (0.0 when there are none)."""
        letters = [ch for ch in text if ch.isalpha()]
        if not letters:
            return 0.0
        return sum(1 for ch in letters if ch.islower()) / len(letters)

    def strip_edge_punctuation(self, text):
        return re.sub(r'^[\s:;,|\-*]+|[\s:;,|\-*]+$', '', text)
