"""Search request composition, dispatch and iteration."""

from mochow.search.iterator import SearchIterator
from mochow.search.models import (
    BatchSearchRowResult,
    BM25SearchArgs,
    HybridSearchArgs,
    MultivectorSearchArgs,
    RowResult,
    SearchIteratorArgs,
    SearchResult,
    SearchRowResult,
    VectorSearchArgs,
)
from mochow.search.params import DistanceRange, VectorSearchConfig
from mochow.search.presence import FieldPresence
from mochow.search.requests import (
    BM25SearchRequest,
    HybridSearchRequest,
    MultivectorSearchRequest,
    SearchRequest,
    VectorBatchSearchRequest,
    VectorRangeSearchRequest,
    VectorTopkSearchRequest,
    WeightedRank,
)
from mochow.search.service import (
    bm25_search,
    hybrid_search,
    multivector_search,
    search,
    vector_search,
)
from mochow.search.vectors import BinaryVector, FloatVector, SparseFloatVector, Vector

__all__ = [
    "BatchSearchRowResult",
    "BinaryVector",
    "BM25SearchArgs",
    "BM25SearchRequest",
    "DistanceRange",
    "FieldPresence",
    "FloatVector",
    "HybridSearchArgs",
    "HybridSearchRequest",
    "MultivectorSearchArgs",
    "MultivectorSearchRequest",
    "RowResult",
    "SearchIterator",
    "SearchIteratorArgs",
    "SearchRequest",
    "SearchResult",
    "SearchRowResult",
    "SparseFloatVector",
    "Vector",
    "VectorBatchSearchRequest",
    "VectorRangeSearchRequest",
    "VectorSearchArgs",
    "VectorSearchConfig",
    "VectorTopkSearchRequest",
    "WeightedRank",
    "bm25_search",
    "hybrid_search",
    "multivector_search",
    "search",
    "vector_search",
]
