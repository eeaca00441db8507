"""
Text normalization for search scoring.

Queries and candidate fields go through the same transform so that they can be
compared directly: lowercase, diacritics folded to base letters, apostrophes
dropped, other punctuation turned into spaces, whitespace collapsed.
"""

import re
import unicodedata
from functools import lru_cache
from typing import FrozenSet, Iterable, Tuple

import attrs
from aletk.utils import remove_extra_whitespace

from massiv_search.scoring.models import NormalizedQuery


ENGLISH_STOPWORDS: FrozenSet[str] = frozenset(
    {
        "a",
        "an",
        "and",
        "at",
        "by",
        "for",
        "from",
        "in",
        "of",
        "on",
        "or",
        "the",
        "to",
        "with",
    }
)

# Letters NFKD leaves intact
_LETTER_FOLDS = str.maketrans(
    {
        "ø": "o",
        "æ": "ae",
        "œ": "oe",
        "ß": "ss",
        "đ": "d",
        "ð": "d",
        "ł": "l",
        "þ": "th",
        "ı": "i",
    }
)

_APOSTROPHES = re.compile(r"['’‘`´]")
_PUNCTUATION = re.compile(r"[^\w\s]|_")


# Longer texts bypass the normalization cache
MAX_CACHED_TEXT_LENGTH = 256


def normalize_text(text: str) -> str:
    """Lowercase, fold diacritics, strip punctuation and collapse whitespace.

    Args:
        text: Any human text

    Returns:
        The comparable form; empty when the text holds only punctuation or whitespace
    """
    if not text:
        return ""
    if len(text) > MAX_CACHED_TEXT_LENGTH:
        return _normalize_text(text)

    return _normalize_text_cached(text)


def _normalize_text(text: str) -> str:
    lowered = text.lower().translate(_LETTER_FOLDS)
    decomposed = unicodedata.normalize("NFKD", lowered)
    folded = "".join(char for char in decomposed if not unicodedata.combining(char))
    no_apostrophes = _APOSTROPHES.sub("", folded)
    no_punctuation = _PUNCTUATION.sub(" ", no_apostrophes)

    return remove_extra_whitespace(no_punctuation).strip()


_normalize_text_cached = lru_cache(maxsize=4096)(_normalize_text)


def tokenize(text: str) -> Tuple[str, ...]:
    """Split text on runs of whitespace, discarding empty tokens."""
    return tuple(token for token in text.split() if token)


@attrs.define(frozen=True, slots=True)
class TextNormalizer:
    """
    Builds normalized queries and stopword-free forms of candidate text.

    Args:
        stopwords: function words removed before comparison (default: English)
    """

    stopwords: FrozenSet[str] = ENGLISH_STOPWORDS

    def remove_stopwords(self, tokens: Iterable[str]) -> Tuple[str, ...]:
        return tuple(token for token in tokens if token not in self.stopwords)

    def normalize_text_no_stopwords(self, text: str) -> str:
        """Normalize `text` and drop stopwords token by token."""
        return " ".join(self.remove_stopwords(tokenize(normalize_text(text))))

    def normalize_query(self, raw: str) -> NormalizedQuery:
        """Prepare a search term for scoring. Never raises; empty input gives an empty query."""
        normalized = normalize_text(raw or "")
        tokens_no_stop = self.remove_stopwords(tokenize(normalized))

        return NormalizedQuery(
            raw=raw or "",
            normalized=normalized,
            without_stopwords=" ".join(tokens_no_stop),
            tokens_no_stop=tokens_no_stop,
        )

    def tokenize(self, text: str) -> Tuple[str, ...]:
        return tokenize(text)
