"""
Typo-tolerant string similarity.

Jaro-Winkler similarity rewards a shared prefix (up to four characters), so
`similarity(a, b)` and `similarity(b, a)` agree but two strings that differ only
in their endings score higher than two that differ at the start.
"""

from typing import Sequence

import attrs
from rapidfuzz.distance import JaroWinkler


DEFAULT_PREFIX_WEIGHT = 0.1


@attrs.define(frozen=True, slots=True)
class FuzzyMatcher:
    """
    Args:
        prefix_weight: Winkler prefix scaling factor, at most 0.25
    """

    prefix_weight: float = DEFAULT_PREFIX_WEIGHT

    def similarity(self, a: str, b: str) -> float:
        """Jaro-Winkler similarity in [0, 1]. Empty operands carry no signal and score 0."""
        if not a or not b:
            return 0.0
        if a == b:
            return 1.0

        score = JaroWinkler.normalized_similarity(a, b, prefix_weight=self.prefix_weight)

        return min(1.0, max(0.0, score))

    def best_token_match(self, query_tokens: Sequence[str], candidate_tokens: Sequence[str]) -> float:
        """Highest pairwise similarity across query tokens x candidate tokens; 0 if either side is empty."""
        best = 0.0
        for query_token in query_tokens:
            for candidate_token in candidate_tokens:
                score = self.similarity(query_token, candidate_token)
                if score > best:
                    best = score
                    if best == 1.0:
                        return best

        return best
