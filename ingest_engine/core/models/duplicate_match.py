"""
DuplicateMatch model representing one pair of records judged to be duplicates.
"""

from typing import Literal, Tuple

from pydantic import BaseModel, Field, field_validator


class DuplicateMatch(BaseModel):
    """
    A pairwise duplicate finding.

    Matches are reported independently per pair; a record can take part in
    several matches and clusters are never merged automatically.

    Attributes:
        indices: Positions (i, j) of the pair in the input batch, i < j
        similarity: Similarity in [0, 1] (1.0 for exact matches)
        type: "exact" (deep equality) or "fuzzy" (weighted similarity)
    """

    indices: Tuple[int, int]
    similarity: float = Field(..., ge=0.0, le=1.0)
    type: Literal["exact", "fuzzy"]

    @field_validator("indices")
    @classmethod
    def check_ordered(cls, v):
        if v[0] < 0 or v[0] >= v[1]:
            raise ValueError(f"indices must satisfy 0 <= i < j, got {v}")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "indices": [0, 3],
                "similarity": 0.96,
                "type": "fuzzy",
            }
        }
