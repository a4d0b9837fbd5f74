# DEPENDENCIES
import re
from typing import List


class TextProcessor:
    """
    Text normalization and clause segmentation for legal text
    """
    # Fragments at or below this length are treated as noise
    MIN_CLAUSE_LENGTH  = 20

    WHITESPACE_PATTERN = re.compile(r'\s+')
    SINGLE_QUOTES      = re.compile(r'[‘’]')
    DOUBLE_QUOTES      = re.compile(r'[“”]')
    SENTENCE_BOUNDARY  = re.compile(r'[.!?]+\s+')


    @staticmethod
    def normalize_text(text: str) -> str:
        """
        Collapse whitespace runs and replace curly quotes with straight ones

        Arguments:
        ----------
            text { str } : Raw input text

        Returns:
        --------
               { str }   : Normalized text, empty for empty input
        """
        if not text:
            return ""

        text = TextProcessor.WHITESPACE_PATTERN.sub(' ', text)
        text = TextProcessor.SINGLE_QUOTES.sub("'", text)
        text = TextProcessor.DOUBLE_QUOTES.sub('"', text)

        return text.strip()


    @staticmethod
    def extract_clauses(text: str, min_length: int = None) -> List[str]:
        """
        Split normalized text into clauses on sentence-terminating punctuation

        Punctuation must be followed by whitespace to count as a boundary, so
        abbreviations and decimal numbers are not handled specially

        Arguments:
        ----------
            text       { str } : Normalized text

            min_length { int } : Fragments of this length or shorter are dropped

        Returns:
        --------
                { list }       : Clauses in source order
        """
        min_length = TextProcessor.MIN_CLAUSE_LENGTH if min_length is None else min_length

        if not text:
            return []

        fragments  = TextProcessor.SENTENCE_BOUNDARY.split(text)

        return [fragment.strip() for fragment in fragments if len(fragment.strip()) > min_length]

