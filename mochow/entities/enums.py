"""Enumerations shared by Mochow requests and schemas."""

from enum import Enum


class MetricType(str, Enum):
    """Distance metric of a vector index."""

    L2 = "L2"
    IP = "IP"
    COSINE = "COSINE"


class IndexType(str, Enum):
    """Index algorithm."""

    # vector index types
    HNSW = "HNSW"
    FLAT = "FLAT"
    PUCK = "PUCK"
    HNSWPQ = "HNSWPQ"

    # scalar index types
    SECONDARY = "SECONDARY"
    FILTERING = "FILTERING"
    INVERTED = "INVERTED"


class InvertedIndexAnalyzer(str, Enum):
    """Tokenizer of an inverted index."""

    ENGLISH_ANALYZER = "ENGLISH_ANALYZER"
    CHINESE_ANALYZER = "CHINESE_ANALYZER"
    DEFAULT_ANALYZER = "DEFAULT_ANALYZER"


class InvertedIndexParseMode(str, Enum):
    """Granularity of inverted index tokenization."""

    COARSE_MODE = "COARSE_MODE"
    FINE_MODE = "FINE_MODE"


class InvertedIndexFieldAttribute(str, Enum):
    """Whether an inverted index field is analyzed."""

    NOT_ANALYZED = "ATTRIBUTE_NOT_ANALYZED"
    ANALYZED = "ATTRIBUTE_ANALYZED"


class FieldType(str, Enum):
    """Column type."""

    BOOL = "BOOL"
    INT8 = "INT8"
    UINT8 = "UINT8"
    INT16 = "INT16"
    UINT16 = "UINT16"
    INT32 = "INT32"
    UINT32 = "UINT32"
    INT64 = "INT64"
    UINT64 = "UINT64"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIMESTAMP = "TIMESTAMP"
    STRING = "STRING"
    BINARY = "BINARY"
    UUID = "UUID"
    TEXT = "TEXT"
    TEXT_GBK = "TEXT_GBK"
    TEXT_GB18030 = "TEXT_GB18030"
    FLOAT_VECTOR = "FLOAT_VECTOR"
    ARRAY = "ARRAY"


class ElementType(str, Enum):
    """Element type of an ARRAY column."""

    BOOL = "BOOL"
    INT8 = "INT8"
    UINT8 = "UINT8"
    INT16 = "INT16"
    UINT16 = "UINT16"
    INT32 = "INT32"
    UINT32 = "UINT32"
    INT64 = "INT64"
    UINT64 = "UINT64"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIMESTAMP = "TIMESTAMP"
    STRING = "STRING"
    BINARY = "BINARY"
    UUID = "UUID"
    TEXT = "TEXT"
    TEXT_GBK = "TEXT_GBK"
    TEXT_GB18030 = "TEXT_GB18030"


class AutoBuildPolicyType(str, Enum):
    """Trigger of automatic index rebuilds."""

    TIMING = "TIMING"
    PERIODICAL = "PERIODICAL"
    ROW_COUNT_INCREMENT = "ROW_COUNT_INCREMENT"


class PartitionType(str, Enum):
    """Table partitioning scheme."""

    HASH = "HASH"


class ReadConsistency(str, Enum):
    """Whether a read may observe a stale replica."""

    EVENTUAL = "EVENTUAL"
    STRONG = "STRONG"


class TableState(str, Enum):
    """Lifecycle state of a table."""

    CREATING = "CREATING"
    NORMAL = "NORMAL"
    DELETING = "DELETING"


class IndexState(str, Enum):
    """Lifecycle state of an index."""

    INVALID = "INVALID"
    BUILDING = "BUILDING"
    NORMAL = "NORMAL"


class IndexStructureType(str, Enum):
    """Structure of a filtering index field."""

    DEFAULT = "DEFAULT"
    BITMAP = "BITMAP"
