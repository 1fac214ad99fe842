"""
Exact and fuzzy duplicate detection over a batch of records.

Every unordered pair (i, j), i < j, is compared. Identical records are exact
matches. Other pairs get a weighted similarity over the fields both records
carry (title, description, publication date, source); weights are
renormalized to those comparable fields and a pair is reported when the
score exceeds the threshold.

Comparing all pairs is quadratic in the batch size, which suits batches in
the hundreds to low thousands. For larger batches pass a blocking key
(e.g. title_prefix_key) so that only records sharing a block are compared.
"""

from collections import defaultdict
from collections.abc import Callable, Hashable, Iterator, Sequence
from typing import Any

from pydantic import BaseModel, Field

from ingest_engine.core.models import DuplicateMatch, RecordView
from ingest_engine.observability.logger import get_logger
from ingest_engine.utils.dates import DATE_FIELDS

from .similarity import date_similarity, exact_similarity, string_similarity

logger = get_logger(__name__)

DEFAULT_FUZZY_THRESHOLD = 0.85

BlockingKey = Callable[[Any], Hashable]


class SimilarityWeights(BaseModel):
    """Relative weight of each compared field."""

    title: float = Field(40, ge=0)
    description: float = Field(30, ge=0)
    published_at: float = Field(20, ge=0)
    source: float = Field(10, ge=0)


def title_prefix_key(length: int = 8) -> BlockingKey:
    """Blocking key grouping records by the normalized start of their title."""

    def key(record: Any) -> Hashable:
        title = RecordView(record).get_string("title") or ""
        return " ".join(title.lower().split())[:length]

    return key


class DuplicateDetector:
    """
    Finds exact and near-duplicate pairs within a batch.

    Args:
        threshold: Fuzzy matches need a similarity strictly above this value
        weights: Per-field weights
        blocking_key: Optional function mapping a record to a block; when set,
            only records in the same block are compared
    """

    def __init__(
        self,
        threshold: float = DEFAULT_FUZZY_THRESHOLD,
        weights: SimilarityWeights | None = None,
        blocking_key: BlockingKey | None = None,
    ):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold
        self.weights = weights or SimilarityWeights()
        self.blocking_key = blocking_key

    def detect_duplicates(self, records: Sequence[Any]) -> list[DuplicateMatch]:
        """
        Detect duplicate pairs.

        Args:
            records: Batch of records; match indices refer to this order

        Returns:
            Matches ordered by (i, j)
        """
        matches: list[DuplicateMatch] = []
        views = [RecordView(record) for record in records]

        for i, j in self._candidate_pairs(records):
            if records[i] == records[j]:
                matches.append(DuplicateMatch(indices=(i, j), similarity=1.0, type="exact"))
                continue

            similarity = self.similarity(views[i], views[j])
            if similarity is not None and similarity > self.threshold:
                matches.append(DuplicateMatch(indices=(i, j), similarity=similarity, type="fuzzy"))

        logger.debug(
            "Duplicate detection finished",
            extra={"record_count": len(records), "match_count": len(matches)}
        )
        return matches

    def _candidate_pairs(self, records: Sequence[Any]) -> Iterator[tuple[int, int]]:
        if self.blocking_key is None:
            for i in range(len(records)):
                for j in range(i + 1, len(records)):
                    yield i, j
            return

        blocks: dict[Hashable, list[int]] = defaultdict(list)
        for index, record in enumerate(records):
            blocks[self.blocking_key(record)].append(index)

        pairs = [
            (members[a], members[b])
            for members in blocks.values()
            for a in range(len(members))
            for b in range(a + 1, len(members))
        ]
        yield from sorted(pairs)

    def similarity(self, a: RecordView, b: RecordView) -> float | None:
        """
        Weighted similarity of two records over their comparable fields.

        Returns:
            Similarity in [0, 1], or None when the records share no comparable field
        """
        total_weight = 0.0
        matched_weight = 0.0

        for weight, score in self._field_scores(a, b):
            total_weight += weight
            matched_weight += weight * score

        if total_weight == 0:
            return None
        return min(1.0, matched_weight / total_weight)

    def _field_scores(self, a: RecordView, b: RecordView) -> Iterator[tuple[float, float]]:
        w = self.weights

        title_a, title_b = _shared_strings(a, b, "title")
        if title_a is not None:
            yield w.title, string_similarity(title_a, title_b)

        body_field = _shared_field(a, b, "description", "content")
        if body_field is not None:
            body_a, body_b = _shared_strings(a, b, body_field)
            if body_a is not None:
                yield w.description, string_similarity(body_a, body_b)

        date_field = _shared_field(a, b, *DATE_FIELDS)
        if date_field is not None:
            yield w.published_at, date_similarity(a.get_date(date_field), b.get_date(date_field))

        source_a, source_b = _shared_strings(a, b, "source")
        if source_a is not None:
            yield w.source, exact_similarity(source_a, source_b)


def _shared_field(a: RecordView, b: RecordView, *fields: str) -> str | None:
    """First of `fields` present on both records."""
    for field in fields:
        if a.has(field) and b.has(field):
            return field
    return None


def _shared_strings(a: RecordView, b: RecordView, field: str) -> tuple[str | None, str | None]:
    if not (a.has(field) and b.has(field)):
        return None, None
    value_a, value_b = a.get_string(field), b.get_string(field)
    if value_a is None or value_b is None:
        return None, None
    return value_a, value_b


def detect_duplicates(records: Sequence[Any], threshold: float = DEFAULT_FUZZY_THRESHOLD,
                      weights: SimilarityWeights | None = None) -> list[DuplicateMatch]:
    return DuplicateDetector(threshold, weights).detect_duplicates(records)


def unique_indices(matches: Sequence[DuplicateMatch]) -> set[int]:
    """Distinct batch positions involved in any match."""
    return {index for match in matches for index in match.indices}


def cluster_matches(matches: Sequence[DuplicateMatch]) -> list[list[int]]:
    """
    Group pairwise matches into connected components.

    Detection never merges clusters itself; this is for callers that want
    transitive grouping. Clusters are sorted, and ordered by smallest index.
    """
    parent: dict[int, int] = {}

    def find(x: int) -> int:
        parent.setdefault(x, x)
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    for match in matches:
        root_a, root_b = find(match.indices[0]), find(match.indices[1])
        if root_a != root_b:
            parent[max(root_a, root_b)] = min(root_a, root_b)

    clusters: dict[int, list[int]] = defaultdict(list)
    for index in parent:
        clusters[find(index)].append(index)
    return sorted(sorted(members) for members in clusters.values())
