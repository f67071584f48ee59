"""Search argument envelopes and result models."""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ModelWrapValidatorHandler,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from mochow.entities.enums import ReadConsistency
from mochow.exceptions import ErrorCode, ValidationError
from mochow.search.requests import (
    BM25SearchRequest,
    HybridSearchRequest,
    IterableSearchRequest,
    MultivectorSearchRequest,
    VectorBatchSearchRequest,
    VectorRangeSearchRequest,
    VectorSearchRequest,
    VectorTopkSearchRequest,
)


class RowResult(BaseModel):
    """One matched row.

    Attributes:
        row: Column values of the row.
        distance: Distance to the query vector (vector searches).
        score: Relevance score (BM25, hybrid and multi-vector searches).
    """

    model_config = ConfigDict(populate_by_name=True)

    row: dict[str, Any] = Field(default_factory=dict, description="Column values")
    distance: float = Field(default=0.0, description="Distance to the query vector")
    score: float = Field(default=0.0, description="Relevance score")


class SearchRowResult(BaseModel):
    """Result set of a single search.

    Attributes:
        rows: Matched rows in server ranking order.
        iterated_ids: Continuation token, present when iterating.
        search_vector_floats: Query vector echoed by the server, if any.
    """

    model_config = ConfigDict(populate_by_name=True)

    rows: list[RowResult] = Field(default_factory=list, description="Matched rows")
    iterated_ids: str | None = Field(
        default=None,
        alias="iteratedIds",
        description="Continuation token",
    )
    search_vector_floats: list[float] | None = Field(
        default=None,
        alias="searchVectorFloats",
        description="Query vector echoed by the server",
    )


class BatchSearchRowResult(BaseModel):
    """Result of a batch search: one result set per query vector, in input order."""

    model_config = ConfigDict(populate_by_name=True)

    results: list[SearchRowResult] = Field(
        default_factory=list,
        description="Per-vector result sets",
    )


class SearchResult(BaseModel):
    """Classified outcome of a dispatched search.

    Exactly one of ``rows`` and ``batch_rows`` is populated, depending on
    ``is_batch``.

    Attributes:
        is_batch: Whether the request was a batch search.
        rows: Rows of a non-batch search.
        batch_rows: Per-vector result sets of a batch search.
        iterated_ids: Continuation token of a non-batch search, if the
            server sent one.
    """

    is_batch: bool = Field(default=False, description="Batch search result")
    rows: list[RowResult] = Field(default_factory=list, description="Non-batch rows")
    batch_rows: list[SearchRowResult] = Field(
        default_factory=list,
        description="Per-vector result sets",
    )
    iterated_ids: str | None = Field(default=None, description="Continuation token")

    @classmethod
    def from_rows(cls, result: SearchRowResult) -> "SearchResult":
        return cls(is_batch=False, rows=result.rows, iterated_ids=result.iterated_ids)

    @classmethod
    def from_batch(cls, result: BatchSearchRowResult) -> "SearchResult":
        return cls(is_batch=True, batch_rows=result.results)


def _check_request(value: Any, accepted: tuple[type, ...], envelope: str) -> Any:
    if not isinstance(value, accepted):
        names = ", ".join(t.__name__ for t in accepted)
        raise ValidationError(
            f"{envelope} does not accept {type(value).__name__}; expected one of: {names}",
            code=ErrorCode.UNSUPPORTED_REQUEST_TYPE,
            details={"request_type": type(value).__name__},
        )
    return value


class _SearchArgs(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    database: str = Field(min_length=1, description="Database name")
    table: str = Field(min_length=1, description="Table name")

    @model_validator(mode="wrap")
    @classmethod
    def _as_client_error(cls, data: Any, handler: ModelWrapValidatorHandler[Any]) -> Any:
        try:
            return handler(data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid {cls.__name__}: {e.error_count()} error(s)",
                code=ErrorCode.INVALID_REQUEST,
                details={"errors": e.errors(include_url=False)},
            ) from e


class VectorSearchArgs(_SearchArgs):
    """Arguments of a top-k, range or batch vector search."""

    request: VectorSearchRequest

    @field_validator("request", mode="before")
    @classmethod
    def _accept_vector_requests(cls, value: Any) -> Any:
        return _check_request(
            value,
            (VectorTopkSearchRequest, VectorRangeSearchRequest, VectorBatchSearchRequest),
            cls.__name__,
        )


class BM25SearchArgs(_SearchArgs):
    """Arguments of a full-text search."""

    request: BM25SearchRequest

    @field_validator("request", mode="before")
    @classmethod
    def _accept_bm25_requests(cls, value: Any) -> Any:
        return _check_request(value, (BM25SearchRequest,), cls.__name__)


class HybridSearchArgs(_SearchArgs):
    """Arguments of a hybrid search."""

    request: HybridSearchRequest

    @field_validator("request", mode="before")
    @classmethod
    def _accept_hybrid_requests(cls, value: Any) -> Any:
        return _check_request(value, (HybridSearchRequest,), cls.__name__)


class MultivectorSearchArgs(_SearchArgs):
    """Arguments of a multi-vector search."""

    request: MultivectorSearchRequest

    @field_validator("request", mode="before")
    @classmethod
    def _accept_multivector_requests(cls, value: Any) -> Any:
        return _check_request(value, (MultivectorSearchRequest,), cls.__name__)


class SearchIteratorArgs(_SearchArgs):
    """Arguments of a search iterator.

    Attributes:
        request: Top-k or multi-vector request to page through.
        batch_size: Rows fetched per call. A top-k request's limit must
            equal it, as must a multi-vector request's limit when set.
        total_size: Cap on the total number of rows returned.
        partition_key: Overrides the request's partition key.
        projections: Overrides the request's projections.
        read_consistency: Overrides the request's read consistency.
    """

    request: IterableSearchRequest
    batch_size: int
    total_size: int
    partition_key: dict[str, Any] | None = None
    projections: list[str] | None = None
    read_consistency: ReadConsistency | None = None

    @field_validator("request", mode="before")
    @classmethod
    def _accept_iterable_requests(cls, value: Any) -> Any:
        return _check_request(
            value,
            (VectorTopkSearchRequest, MultivectorSearchRequest),
            "SearchIterator",
        )

    @field_validator("batch_size", "total_size", mode="before")
    @classmethod
    def _positive_size(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError(
                f"'{info.field_name}' must be a positive integer, got {value!r}",
                code=ErrorCode.INVALID_ITERATOR_CONFIG,
                details={info.field_name: value},
            )
        return value

    @field_validator("read_consistency", mode="before")
    @classmethod
    def _known_consistency(cls, value: Any) -> Any:
        if value is None or isinstance(value, ReadConsistency):
            return value
        try:
            return ReadConsistency(value)
        except ValueError as e:
            raise ValidationError(
                f"Unknown read consistency: {value!r}",
                code=ErrorCode.INVALID_REQUEST,
            ) from e

    @model_validator(mode="after")
    def _check_sizes(self) -> "SearchIteratorArgs":
        if self.total_size < self.batch_size:
            raise ValidationError(
                "'total_size' should not be less than 'batch_size'",
                code=ErrorCode.INVALID_ITERATOR_CONFIG,
                details={"batch_size": self.batch_size, "total_size": self.total_size},
            )

        request = self.request
        limit_checked = isinstance(request, VectorTopkSearchRequest) or request.presence.is_marked(
            "limit"
        )
        if limit_checked and request.limit != self.batch_size:
            raise ValidationError(
                "'request.limit' should be equal to 'batch_size'",
                code=ErrorCode.INVALID_ITERATOR_CONFIG,
                details={"limit": request.limit, "batch_size": self.batch_size},
            )
        return self
