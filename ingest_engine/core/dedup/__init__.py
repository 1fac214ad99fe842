"""
Duplicate detection (exact and weighted fuzzy matching).
"""

from .duplicate_detector import (
    DEFAULT_FUZZY_THRESHOLD,
    DuplicateDetector,
    SimilarityWeights,
    cluster_matches,
    detect_duplicates,
    title_prefix_key,
    unique_indices,
)
from .similarity import date_similarity, levenshtein_distance, string_similarity

__all__ = [
    "DuplicateDetector",
    "SimilarityWeights",
    "DEFAULT_FUZZY_THRESHOLD",
    "detect_duplicates",
    "cluster_matches",
    "unique_indices",
    "title_prefix_key",
    "levenshtein_distance",
    "string_similarity",
    "date_similarity",
]
