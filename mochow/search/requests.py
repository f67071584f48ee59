"""Search request variants.

Every request carries a set of common optional fields (partition key,
projections, read consistency, limit, filter) plus variant-specific
parameters. Optional fields can be passed as keyword arguments in one
call or set afterwards with the chainable ``set_*`` methods; either way
the field is marked in the request's FieldPresence and only marked
fields reach the wire payload.

``to_dict()`` renders a fresh payload on every call. The dispatcher adds
``database`` and ``table``.
"""

import copy
import math
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Self

from pydantic import ValidationError as PydanticValidationError

from mochow.entities.enums import ReadConsistency
from mochow.exceptions import ErrorCode, ValidationError
from mochow.search.params import DistanceRange, VectorSearchConfig
from mochow.search.presence import FieldPresence
from mochow.search.vectors import Vector

# Common fields that vector requests render inside "anns" instead of the outer object.
_ANNS_FIELDS = ("filter", "limit")


def _require_positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(
            f"'{name}' must be a positive integer, got {value!r}",
            code=ErrorCode.INVALID_REQUEST,
            details={name: value},
        )
    return value


def _require_weight(name: str, value: Any) -> float:
    if (
        isinstance(value, bool)
        or not isinstance(value, int | float)
        or not math.isfinite(value)
        or value < 0
    ):
        raise ValidationError(
            f"'{name}' must be a finite non-negative number, got {value!r}",
            code=ErrorCode.INVALID_REQUEST,
            details={name: value},
        )
    return float(value)


def _require_vector(value: Any) -> Vector:
    if not isinstance(value, Vector):
        raise ValidationError(
            f"Expected a query vector, got {type(value).__name__}",
            code=ErrorCode.INVALID_VECTOR,
        )
    return value


def _require_field_name(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(
            f"'{name}' must be a non-empty string",
            code=ErrorCode.INVALID_REQUEST,
            details={name: value},
        )
    return value


class SearchRequest(ABC):
    """Base class of all search request variants."""

    request_type: ClassVar[str] = "search"
    is_batch: ClassVar[bool] = False

    def __init__(self) -> None:
        self._presence = FieldPresence()
        self._partition_key: dict[str, Any] | None = None
        self._projections: list[str] | None = None
        self._read_consistency: ReadConsistency | None = None
        self._limit: int | None = None
        self._filter: str | None = None

    def _apply_options(self, **options: Any) -> None:
        for name, value in options.items():
            if value is not None:
                getattr(self, f"set_{name}")(value)

    @property
    def presence(self) -> FieldPresence:
        """Fields explicitly set on this request."""
        return self._presence

    @property
    def partition_key(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._partition_key)

    @property
    def projections(self) -> list[str] | None:
        return list(self._projections) if self._projections is not None else None

    @property
    def read_consistency(self) -> ReadConsistency | None:
        return self._read_consistency

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def filter(self) -> str | None:
        return self._filter

    def set_partition_key(self, partition_key: Mapping[str, Any]) -> Self:
        """Restrict the search to one partition."""
        if not isinstance(partition_key, Mapping):
            raise ValidationError(
                f"'partition_key' must be a mapping, got {type(partition_key).__name__}",
                code=ErrorCode.INVALID_REQUEST,
            )
        self._presence.mark("partitionKey")
        self._partition_key = dict(partition_key)
        return self

    def set_projections(self, projections: Sequence[str]) -> Self:
        """Columns to return for each row."""
        if isinstance(projections, str) or not isinstance(projections, Sequence):
            raise ValidationError(
                "'projections' must be a sequence of column names",
                code=ErrorCode.INVALID_REQUEST,
            )
        self._presence.mark("projections")
        self._projections = list(projections)
        return self

    def set_read_consistency(self, read_consistency: ReadConsistency | str) -> Self:
        """EVENTUAL or STRONG."""
        try:
            consistency = ReadConsistency(read_consistency)
        except ValueError as e:
            raise ValidationError(
                f"Unknown read consistency: {read_consistency!r}",
                code=ErrorCode.INVALID_REQUEST,
            ) from e
        self._presence.mark("readConsistency")
        self._read_consistency = consistency
        return self

    def set_limit(self, limit: int) -> Self:
        """Maximum number of rows to return."""
        self._limit = _require_positive_int("limit", limit)
        self._presence.mark("limit")
        return self

    def set_filter(self, filter: str) -> Self:
        """Server-side scalar predicate, e.g. ``bookName='Three Kingdoms'``."""
        if not isinstance(filter, str):
            raise ValidationError(
                f"'filter' must be a string, got {type(filter).__name__}",
                code=ErrorCode.INVALID_REQUEST,
            )
        self._presence.mark("filter")
        self._filter = filter
        return self

    def _common_fields(self, exclude: Sequence[str] = ()) -> dict[str, Any]:
        values = {
            "partitionKey": self._partition_key,
            "projections": self._projections,
            "readConsistency": (
                self._read_consistency.value if self._read_consistency is not None else None
            ),
            "filter": self._filter,
            "limit": self._limit,
        }
        return {
            key: copy.deepcopy(value)
            for key, value in values.items()
            if key not in exclude and self._presence.is_marked(key)
        }

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Render the wire payload."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}:{self.to_dict()}"


class _VectorSearchRequest(SearchRequest):
    """Shared rendering of requests carrying an ``anns`` block."""

    def __init__(self, vector_field: str) -> None:
        super().__init__()
        self._vector_field = _require_field_name("vector_field", vector_field)
        self._presence.mark("vectorField")
        self._config: VectorSearchConfig | None = None
        self._distance_range: DistanceRange | None = None

    @property
    def vector_field(self) -> str:
        return self._vector_field

    @property
    def config(self) -> VectorSearchConfig | None:
        return self._config

    def set_config(self, config: VectorSearchConfig | Mapping[str, Any]) -> Self:
        """Index-specific tuning such as ``ef`` or ``search_coarse_count``."""
        if not isinstance(config, VectorSearchConfig):
            try:
                config = VectorSearchConfig.model_validate(config)
            except PydanticValidationError as e:
                raise ValidationError(
                    f"Invalid search config: {e.error_count()} error(s)",
                    code=ErrorCode.INVALID_REQUEST,
                    details={"errors": e.errors(include_url=False)},
                ) from e
        self._presence.mark("config")
        self._config = config
        return self

    def _set_distance_range(self, distance_range: DistanceRange) -> None:
        if not isinstance(distance_range, DistanceRange):
            raise ValidationError(
                "'distance_range' must be a DistanceRange",
                code=ErrorCode.INVALID_REQUEST,
            )
        self._presence.mark("distanceNear")
        self._presence.mark("distanceFar")
        self._distance_range = distance_range

    def _vector_payload(self) -> dict[str, Any]:
        return {}

    def _search_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self._presence.is_marked("config") and self._config is not None:
            params.update(self._config.to_params())
        if self._distance_range is not None:
            if self._presence.is_marked("distanceNear"):
                params["distanceNear"] = self._distance_range.min
            if self._presence.is_marked("distanceFar"):
                params["distanceFar"] = self._distance_range.max
        if self._presence.is_marked("limit"):
            params["limit"] = self._limit
        return params

    def anns(self) -> dict[str, Any]:
        """Render the ``anns`` block of this request."""
        anns: dict[str, Any] = {"vectorField": self._vector_field}
        anns.update(self._vector_payload())
        if self._presence.is_marked("filter"):
            anns["filter"] = self._filter

        params = self._search_params()
        if params:
            anns["params"] = params
        return anns

    def to_dict(self) -> dict[str, Any]:
        fields: dict[str, Any] = {"anns": self.anns()}
        fields.update(self._common_fields(exclude=_ANNS_FIELDS))
        return fields


class VectorTopkSearchRequest(_VectorSearchRequest):
    """Retrieve the ``limit`` nearest rows to a query vector."""

    def __init__(
        self,
        vector_field: str,
        vector: Vector,
        limit: int,
        *,
        filter: str | None = None,
        partition_key: Mapping[str, Any] | None = None,
        projections: Sequence[str] | None = None,
        read_consistency: ReadConsistency | str | None = None,
        config: VectorSearchConfig | Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(vector_field)
        self._vector = _require_vector(vector)
        self._presence.mark("vector")
        self._iterated_ids: str | None = None
        self.set_limit(limit)
        self._apply_options(
            filter=filter,
            partition_key=partition_key,
            projections=projections,
            read_consistency=read_consistency,
            config=config,
        )

    @property
    def vector(self) -> Vector:
        return self._vector

    @property
    def iterated_ids(self) -> str | None:
        return self._iterated_ids

    def set_iterated_ids(self, iterated_ids: str) -> Self:
        """Continuation token of a paginated search."""
        self._presence.mark("iteratedIds")
        self._iterated_ids = iterated_ids
        return self

    def _vector_payload(self) -> dict[str, Any]:
        return {self._vector.wire_name: self._vector.encode()}

    def _search_params(self) -> dict[str, Any]:
        params = super()._search_params()
        if self._presence.is_marked("iteratedIds"):
            params["iteratedIds"] = self._iterated_ids
        return params


class VectorRangeSearchRequest(_VectorSearchRequest):
    """Retrieve rows whose distance to a query vector falls in a range."""

    def __init__(
        self,
        vector_field: str,
        vector: Vector,
        distance_range: DistanceRange,
        *,
        limit: int | None = None,
        filter: str | None = None,
        partition_key: Mapping[str, Any] | None = None,
        projections: Sequence[str] | None = None,
        read_consistency: ReadConsistency | str | None = None,
        config: VectorSearchConfig | Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(vector_field)
        self._vector = _require_vector(vector)
        self._presence.mark("vector")
        self._set_distance_range(distance_range)
        self._apply_options(
            limit=limit,
            filter=filter,
            partition_key=partition_key,
            projections=projections,
            read_consistency=read_consistency,
            config=config,
        )

    @property
    def vector(self) -> Vector:
        return self._vector

    @property
    def distance_range(self) -> DistanceRange:
        assert self._distance_range is not None
        return self._distance_range

    def _vector_payload(self) -> dict[str, Any]:
        return {self._vector.wire_name: self._vector.encode()}


class VectorBatchSearchRequest(_VectorSearchRequest):
    """Search several query vectors of one kind in a single call.

    Produces one result set per query vector, in input order.
    """

    request_type: ClassVar[str] = "batchSearch"
    is_batch: ClassVar[bool] = True

    def __init__(
        self,
        vector_field: str,
        vectors: Sequence[Vector],
        *,
        limit: int | None = None,
        distance_range: DistanceRange | None = None,
        filter: str | None = None,
        partition_key: Mapping[str, Any] | None = None,
        projections: Sequence[str] | None = None,
        read_consistency: ReadConsistency | str | None = None,
        config: VectorSearchConfig | Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(vector_field)
        self._vectors = self._validate_vectors(vectors)
        self._presence.mark("vectors")
        self._apply_options(
            limit=limit,
            distance_range=distance_range,
            filter=filter,
            partition_key=partition_key,
            projections=projections,
            read_consistency=read_consistency,
            config=config,
        )

    @staticmethod
    def _validate_vectors(vectors: Sequence[Vector]) -> tuple[Vector, ...]:
        checked = tuple(_require_vector(v) for v in vectors)
        if not checked:
            raise ValidationError(
                "Batch search needs at least one query vector",
                code=ErrorCode.INVALID_VECTOR,
            )
        kinds = {type(v) for v in checked}
        if len(kinds) > 1:
            raise ValidationError(
                "All query vectors of a batch search must be of the same kind",
                code=ErrorCode.INVALID_VECTOR,
                details={"kinds": sorted(kind.__name__ for kind in kinds)},
            )
        return checked

    @property
    def vectors(self) -> list[Vector]:
        return list(self._vectors)

    @property
    def distance_range(self) -> DistanceRange | None:
        return self._distance_range

    def set_distance_range(self, distance_range: DistanceRange) -> Self:
        """Only return rows inside this distance interval."""
        self._set_distance_range(distance_range)
        return self

    def _vector_payload(self) -> dict[str, Any]:
        wire_name = self._vectors[0].wire_name
        return {wire_name: [v.encode() for v in self._vectors]}


class BM25SearchRequest(SearchRequest):
    """Full-text relevance search over an inverted index."""

    def __init__(
        self,
        index_name: str,
        search_text: str,
        *,
        limit: int | None = None,
        filter: str | None = None,
        partition_key: Mapping[str, Any] | None = None,
        projections: Sequence[str] | None = None,
        read_consistency: ReadConsistency | str | None = None,
    ) -> None:
        super().__init__()
        self._index_name = _require_field_name("index_name", index_name)
        self._search_text = search_text
        self._apply_options(
            limit=limit,
            filter=filter,
            partition_key=partition_key,
            projections=projections,
            read_consistency=read_consistency,
        )

    @property
    def index_name(self) -> str:
        return self._index_name

    @property
    def search_text(self) -> str:
        return self._search_text

    def bm25_params(self) -> dict[str, Any]:
        """Render the ``BM25SearchParams`` block of this request."""
        return {"indexName": self._index_name, "searchText": self._search_text}

    def to_dict(self) -> dict[str, Any]:
        fields = self._common_fields()
        fields["BM25SearchParams"] = self.bm25_params()
        return fields


SingleVectorSearchRequest = VectorTopkSearchRequest | VectorRangeSearchRequest


class HybridSearchRequest(SearchRequest):
    """Weighted combination of one vector search and one BM25 search.

    ``limit`` and ``filter`` set on the hybrid request are global: they
    replace whatever limit or filter the sub-requests carry. The weights
    scale each sub-score; the server combines them and they need not sum
    to one.
    """

    def __init__(
        self,
        vector_request: SingleVectorSearchRequest,
        bm25_request: BM25SearchRequest,
        vector_weight: float,
        bm25_weight: float,
        *,
        limit: int | None = None,
        filter: str | None = None,
        partition_key: Mapping[str, Any] | None = None,
        projections: Sequence[str] | None = None,
        read_consistency: ReadConsistency | str | None = None,
    ) -> None:
        super().__init__()
        if not isinstance(vector_request, VectorTopkSearchRequest | VectorRangeSearchRequest):
            raise ValidationError(
                "Hybrid search needs a top-k or range vector request, "
                f"got {type(vector_request).__name__}",
                code=ErrorCode.UNSUPPORTED_REQUEST_TYPE,
            )
        if not isinstance(bm25_request, BM25SearchRequest):
            raise ValidationError(
                f"Hybrid search needs a BM25SearchRequest, got {type(bm25_request).__name__}",
                code=ErrorCode.UNSUPPORTED_REQUEST_TYPE,
            )
        self._vector_request = copy.deepcopy(vector_request)
        self._bm25_request = copy.deepcopy(bm25_request)
        self._vector_weight = _require_weight("vector_weight", vector_weight)
        self._bm25_weight = _require_weight("bm25_weight", bm25_weight)
        self._apply_options(
            limit=limit,
            filter=filter,
            partition_key=partition_key,
            projections=projections,
            read_consistency=read_consistency,
        )

    @property
    def vector_request(self) -> SingleVectorSearchRequest:
        return self._vector_request

    @property
    def bm25_request(self) -> BM25SearchRequest:
        return self._bm25_request

    @property
    def vector_weight(self) -> float:
        return self._vector_weight

    @property
    def bm25_weight(self) -> float:
        return self._bm25_weight

    def to_dict(self) -> dict[str, Any]:
        fields = self._bm25_request.to_dict()
        fields.update(self._vector_request.to_dict())

        common = self._common_fields()
        anns: dict[str, Any] = fields["anns"]
        if "filter" in common:
            anns.pop("filter", None)
        if "limit" in common and "params" in anns:
            anns["params"].pop("limit", None)
        fields.update(common)

        anns.setdefault("params", {})["weight"] = self._vector_weight
        fields["BM25SearchParams"]["weight"] = self._bm25_weight
        return fields


class WeightedRank:
    """Weighted-sum ranking over the sub-requests of a multi-vector search.

    One weight per sub-request, in the same order.
    """

    strategy: ClassVar[str] = "ws"

    def __init__(self, weights: Sequence[float]) -> None:
        if isinstance(weights, str) or not weights:
            raise ValidationError(
                "WeightedRank needs at least one weight",
                code=ErrorCode.INVALID_REQUEST,
            )
        self._weights = tuple(_require_weight("weight", w) for w in weights)

    @property
    def weights(self) -> list[float]:
        return list(self._weights)

    def to_dict(self) -> dict[str, Any]:
        return {"strategy": self.strategy, "params": {"weights": list(self._weights)}}

    def __len__(self) -> int:
        return len(self._weights)

    def __repr__(self) -> str:
        return f"WeightedRank({list(self._weights)!r})"


class MultivectorSearchRequest(SearchRequest):
    """Search several vector fields at once and rank the merged results.

    Each sub-request contributes its own ``anns`` block; limit, filter and
    the other common fields set here apply to the merged result.
    """

    def __init__(
        self,
        requests: Sequence[SingleVectorSearchRequest],
        ranking: WeightedRank,
        *,
        limit: int | None = None,
        filter: str | None = None,
        partition_key: Mapping[str, Any] | None = None,
        projections: Sequence[str] | None = None,
        read_consistency: ReadConsistency | str | None = None,
    ) -> None:
        super().__init__()
        if not requests:
            raise ValidationError(
                "Multi-vector search needs at least one sub-request",
                code=ErrorCode.INVALID_REQUEST,
            )
        for request in requests:
            if not isinstance(request, VectorTopkSearchRequest | VectorRangeSearchRequest):
                raise ValidationError(
                    "Multi-vector sub-requests must be top-k or range vector requests, "
                    f"got {type(request).__name__}",
                    code=ErrorCode.UNSUPPORTED_REQUEST_TYPE,
                )
        if not isinstance(ranking, WeightedRank):
            raise ValidationError(
                f"Unsupported ranking strategy: {type(ranking).__name__}",
                code=ErrorCode.INVALID_REQUEST,
            )
        if len(ranking) != len(requests):
            raise ValidationError(
                f"Ranking has {len(ranking)} weight(s) for {len(requests)} sub-request(s)",
                code=ErrorCode.RANK_WEIGHT_MISMATCH,
                details={"weights": len(ranking), "requests": len(requests)},
            )

        self._requests = [copy.deepcopy(r) for r in requests]
        self._ranking = ranking
        self._iterated_ids: str | None = None
        self._apply_options(
            limit=limit,
            filter=filter,
            partition_key=partition_key,
            projections=projections,
            read_consistency=read_consistency,
        )

    @property
    def requests(self) -> list[SingleVectorSearchRequest]:
        return list(self._requests)

    @property
    def ranking(self) -> WeightedRank:
        return self._ranking

    @property
    def iterated_ids(self) -> str | None:
        return self._iterated_ids

    def set_iterated_ids(self, iterated_ids: str) -> Self:
        """Continuation token of a paginated search."""
        self._presence.mark("iteratedIds")
        self._iterated_ids = iterated_ids
        return self

    def to_dict(self) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "searchRequests": [r.anns() for r in self._requests],
            "rank": self._ranking.to_dict(),
        }
        fields.update(self._common_fields())
        if self._presence.is_marked("iteratedIds"):
            fields["iteratedIds"] = self._iterated_ids
        return fields


VectorSearchRequest = VectorTopkSearchRequest | VectorRangeSearchRequest | VectorBatchSearchRequest
IterableSearchRequest = VectorTopkSearchRequest | MultivectorSearchRequest
