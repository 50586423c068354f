"""Word-set similarity between documents."""

import re
from typing import Dict, Hashable, List, Set, Tuple

MIN_WORD_LENGTH = 4


def get_words(text: str) -> List[str]:
    """Lowercase words longer than three characters, punctuation removed.

    Characters outside ASCII letters, digits and underscore are dropped.
    """
    cleaned = re.sub(r'[^A-Za-z0-9_\s]', '', text.lower())
    return [w for w in cleaned.split() if len(w) >= MIN_WORD_LENGTH]


def jaccard(first: Set[str], second: Set[str]) -> float:
    """Intersection over union; 0.0 when both sets are empty."""
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


def compute_similarity(text1: str, text2: str) -> float:
    """Jaccard similarity of the word sets of two texts, in [0, 1]."""
    return jaccard(set(get_words(text1)), set(get_words(text2)))


def rank_similar(
    reference: str,
    documents: Dict[Hashable, str],
    threshold: float = 0.3,
) -> List[Tuple[Hashable, float]]:
    """Score documents against a reference text.

    Args:
        reference: Text to compare against
        documents: Mapping of key (e.g. page id) to text
        threshold: Minimum score kept

    Returns:
        (key, score) pairs with score >= threshold, highest first
    """
    reference_words = set(get_words(reference))
    scored = [
        (key, jaccard(reference_words, set(get_words(text))))
        for key, text in documents.items()
    ]
    return sorted(
        (pair for pair in scored if pair[1] >= threshold),
        key=lambda pair: pair[1],
        reverse=True,
    )
