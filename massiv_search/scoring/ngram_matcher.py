from typing import FrozenSet

import attrs


def extract_ngrams(text: str, n: int = 2) -> FrozenSet[str]:
    """Set of overlapping character n-grams; empty for text shorter than n."""
    if n < 1 or len(text) < n:
        return frozenset()

    return frozenset(text[i : i + n] for i in range(len(text) - n + 1))


def ngram_similarity(a: str, b: str, n: int = 2) -> float:
    """Dice coefficient 2|A & B| / (|A| + |B|) over the n-gram sets of a and b."""
    grams_a = extract_ngrams(a, n)
    grams_b = extract_ngrams(b, n)
    if not grams_a or not grams_b:
        return 0.0

    return 2 * len(grams_a & grams_b) / (len(grams_a) + len(grams_b))


@attrs.define(frozen=True, slots=True)
class NgramMatcher:
    """
    Character n-gram overlap, for partial matches the exact and fuzzy tiers miss.

    Args:
        n: n-gram size used by `similarity` (default: bigrams)
    """

    n: int = 2

    def similarity(self, a: str, b: str) -> float:
        return ngram_similarity(a, b, self.n)

    def bigram_similarity(self, a: str, b: str) -> float:
        return ngram_similarity(a, b, 2)
