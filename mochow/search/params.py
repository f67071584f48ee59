"""Search tuning parameters."""

import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mochow.exceptions import ErrorCode, ValidationError


class VectorSearchConfig(BaseModel):
    """Index-specific search tuning.

    Which fields the server honours depends on the index type:

    - HNSW, HNSWPQ: ``ef``, ``pruning``
    - PUCK: ``search_coarse_count``
    - FLAT: none

    Unset fields are left out of the request so the server applies its
    own defaults.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    ef: int | None = Field(
        default=None,
        ge=1,
        description="Size of the dynamic candidate list (HNSW, HNSWPQ)",
    )
    pruning: bool | None = Field(
        default=None,
        description="Enable search-time pruning (HNSW, HNSWPQ)",
    )
    search_coarse_count: int | None = Field(
        default=None,
        ge=1,
        alias="searchCoarseCount",
        description="Number of coarse clusters to probe (PUCK)",
    )

    def to_params(self) -> dict[str, Any]:
        """Render the set fields under their wire names."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class DistanceRange:
    """Distance interval of a range search.

    ``min`` is sent as ``distanceNear`` and ``max`` as ``distanceFar``.
    Ordering is not checked: for similarity metrics (IP, COSINE) the near
    bound is the larger value.
    """

    min: float
    max: float

    def __post_init__(self) -> None:
        for name in ("min", "max"):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, int | float)
                or not math.isfinite(value)
            ):
                raise ValidationError(
                    f"DistanceRange.{name} must be a finite number, got {value!r}",
                    code=ErrorCode.INVALID_REQUEST,
                    details={name: value},
                )
