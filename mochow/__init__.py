"""Python client for the Mochow vector database."""

from mochow.client import MochowClient
from mochow.config import MochowSettings, Settings, get_settings
from mochow.exceptions import (
    ConfigurationError,
    DecodeError,
    ErrorCode,
    MochowError,
    ServerErrorCode,
    ServiceError,
    TransportError,
    UnsupportedFeatureError,
    ValidationError,
)
from mochow.search import (
    BinaryVector,
    BM25SearchArgs,
    BM25SearchRequest,
    DistanceRange,
    FloatVector,
    HybridSearchArgs,
    HybridSearchRequest,
    MultivectorSearchArgs,
    MultivectorSearchRequest,
    SearchIterator,
    SearchIteratorArgs,
    SearchResult,
    SparseFloatVector,
    VectorBatchSearchRequest,
    VectorRangeSearchRequest,
    VectorSearchArgs,
    VectorSearchConfig,
    VectorTopkSearchRequest,
    WeightedRank,
)

__version__ = "0.1.0"

__all__ = [
    "BinaryVector",
    "BM25SearchArgs",
    "BM25SearchRequest",
    "ConfigurationError",
    "DecodeError",
    "DistanceRange",
    "ErrorCode",
    "FloatVector",
    "HybridSearchArgs",
    "HybridSearchRequest",
    "MochowClient",
    "MochowError",
    "MochowSettings",
    "MultivectorSearchArgs",
    "MultivectorSearchRequest",
    "SearchIterator",
    "SearchIteratorArgs",
    "SearchResult",
    "ServerErrorCode",
    "ServiceError",
    "Settings",
    "SparseFloatVector",
    "TransportError",
    "UnsupportedFeatureError",
    "ValidationError",
    "VectorBatchSearchRequest",
    "VectorRangeSearchRequest",
    "VectorSearchArgs",
    "VectorSearchConfig",
    "VectorTopkSearchRequest",
    "WeightedRank",
    "__version__",
]
