"""Tests for single-search request rendering."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from mochow.entities import ReadConsistency
from mochow.exceptions import ErrorCode, ValidationError
from mochow.search import (
    BinaryVector,
    BM25SearchRequest,
    DistanceRange,
    FloatVector,
    SparseFloatVector,
    VectorBatchSearchRequest,
    VectorRangeSearchRequest,
    VectorSearchConfig,
    VectorTopkSearchRequest,
)


def topk(limit: int = 10, **options: object) -> VectorTopkSearchRequest:
    return VectorTopkSearchRequest("vector", FloatVector([0.3123, 0.43, 0.213]), limit, **options)


class TestVectorTopkSearchRequest:
    """Tests for top-k search rendering."""

    def test_minimal_payload(self) -> None:
        """Only mandatory fields are rendered."""
        assert topk(5).to_dict() == {
            "anns": {
                "vectorField": "vector",
                "vectorFloats": [0.3123, 0.43, 0.213],
                "params": {"limit": 5},
            }
        }

    def test_unset_filter_absent(self) -> None:
        """No filter key is rendered when no filter was set."""
        payload = topk().to_dict()
        assert "filter" not in payload["anns"]
        assert "filter" not in payload

    def test_full_payload_with_keywords(self) -> None:
        """Keyword options render the same as chained setters."""
        request = topk(
            10,
            filter="bookName='三国演义'",
            partition_key={"id": "0001"},
            projections=["id", "bookName"],
            read_consistency=ReadConsistency.STRONG,
            config=VectorSearchConfig(ef=200, pruning=False),
        )

        assert request.to_dict() == {
            "anns": {
                "vectorField": "vector",
                "vectorFloats": [0.3123, 0.43, 0.213],
                "filter": "bookName='三国演义'",
                "params": {"ef": 200, "pruning": False, "limit": 10},
            },
            "partitionKey": {"id": "0001"},
            "projections": ["id", "bookName"],
            "readConsistency": "STRONG",
        }

    def test_chained_setters_equal_keywords(self) -> None:
        """Chained configuration yields the same payload as keywords."""
        chained = (
            topk(10)
            .set_filter("page > 10")
            .set_projections(["id"])
            .set_read_consistency("EVENTUAL")
            .set_config({"ef": 64})
        )
        keywords = topk(
            10,
            filter="page > 10",
            projections=["id"],
            read_consistency="EVENTUAL",
            config=VectorSearchConfig(ef=64),
        )
        assert chained.to_dict() == keywords.to_dict()

    def test_rendering_is_deterministic(self) -> None:
        """Rendering twice yields identical payloads."""
        request = topk(10, filter="page > 10", config={"ef": 64})
        assert request.to_dict() == request.to_dict()

    def test_rendered_payload_is_a_fresh_copy(self) -> None:
        """Mutating a rendered payload does not affect the request."""
        request = topk(10, projections=["id"])
        payload = request.to_dict()
        payload["projections"].append("page")
        payload["anns"]["params"]["limit"] = 99

        assert request.to_dict()["projections"] == ["id"]
        assert request.to_dict()["anns"]["params"]["limit"] == 10

    def test_iterated_ids_in_params(self) -> None:
        """The continuation token is rendered inside anns.params."""
        payload = topk(10).set_iterated_ids("abc").to_dict()
        assert payload["anns"]["params"]["iteratedIds"] == "abc"

    def test_puck_config(self) -> None:
        """PUCK tuning renders under its camelCase wire name."""
        payload = topk(10, config=VectorSearchConfig(search_coarse_count=5)).to_dict()
        assert payload["anns"]["params"] == {"searchCoarseCount": 5, "limit": 10}

    def test_sparse_vector_payload(self) -> None:
        """Sparse vectors render under the vector key."""
        request = VectorTopkSearchRequest("sparse", SparseFloatVector({"0": 0.1, "100": 0.2}), 3)
        assert request.to_dict()["anns"]["vector"] == {"0": 0.1, "100": 0.2}
        assert "vectorFloats" not in request.to_dict()["anns"]

    def test_binary_vector_payload(self) -> None:
        """Binary vectors render as base64 under the vector key."""
        request = VectorTopkSearchRequest("bits", BinaryVector(b"\x01\x00"), 3)
        assert request.to_dict()["anns"]["vector"] == "AQA="

    def test_request_type(self) -> None:
        """Top-k requests dispatch as non-batch searches."""
        assert topk().request_type == "search"
        assert topk().is_batch is False

    def test_properties(self) -> None:
        """Configured values are exposed as properties."""
        request = topk(7, filter="x > 1", read_consistency="STRONG")
        assert request.limit == 7
        assert request.filter == "x > 1"
        assert request.read_consistency is ReadConsistency.STRONG
        assert request.vector_field == "vector"
        assert request.partition_key is None

    def test_repr_shows_payload(self) -> None:
        """The repr names the variant and shows the payload."""
        assert repr(topk(3)).startswith("VectorTopkSearchRequest:{'anns'")


class TestRequestValidation:
    """Tests for eager construction errors."""

    @pytest.mark.parametrize("limit", [0, -1, True, 2.5])
    def test_invalid_limit(self, limit: object) -> None:
        """Limits must be positive integers."""
        with pytest.raises(ValidationError) as exc_info:
            topk(limit)  # type: ignore[arg-type]
        assert exc_info.value.code == ErrorCode.INVALID_REQUEST

    def test_non_vector_rejected(self) -> None:
        """The query vector must be a Vector."""
        with pytest.raises(ValidationError) as exc_info:
            VectorTopkSearchRequest("vector", [0.1, 0.2], 5)  # type: ignore[arg-type]
        assert exc_info.value.code == ErrorCode.INVALID_VECTOR

    def test_empty_vector_field_rejected(self) -> None:
        """The vector field name is mandatory."""
        with pytest.raises(ValidationError):
            VectorTopkSearchRequest("", FloatVector([0.1]), 5)

    def test_unknown_read_consistency(self) -> None:
        """Read consistency must be EVENTUAL or STRONG."""
        with pytest.raises(ValidationError):
            topk(read_consistency="SOMETIMES")

    def test_projections_string_rejected(self) -> None:
        """A bare string is not a projection list."""
        with pytest.raises(ValidationError):
            topk().set_projections("id")

    @pytest.mark.parametrize("value", [None, 5])
    def test_non_string_filter_rejected(self, value: object) -> None:
        """Filters must be strings."""
        request = topk()
        with pytest.raises(ValidationError) as exc_info:
            request.set_filter(value)  # type: ignore[arg-type]

        assert exc_info.value.code == ErrorCode.INVALID_REQUEST
        assert "filter" not in request.to_dict()["anns"]

    def test_none_partition_key_rejected(self) -> None:
        """The partition key must be a mapping."""
        with pytest.raises(ValidationError) as exc_info:
            topk().set_partition_key(None)  # type: ignore[arg-type]
        assert exc_info.value.code == ErrorCode.INVALID_REQUEST

    def test_none_projections_rejected(self) -> None:
        """Projections must be a sequence."""
        with pytest.raises(ValidationError) as exc_info:
            topk().set_projections(None)  # type: ignore[arg-type]
        assert exc_info.value.code == ErrorCode.INVALID_REQUEST

    def test_invalid_config_mapping(self) -> None:
        """Config mappings are validated at configuration time."""
        with pytest.raises(ValidationError) as exc_info:
            topk().set_config({"ef": 0})
        assert exc_info.value.details["errors"]

    def test_unknown_config_key(self) -> None:
        """Unknown tuning keys are rejected."""
        with pytest.raises(ValidationError):
            topk().set_config({"nprobe": 4})

    def test_invalid_config_model(self) -> None:
        """VectorSearchConfig validates its own fields."""
        with pytest.raises(PydanticValidationError):
            VectorSearchConfig(ef=0)


class TestVectorRangeSearchRequest:
    """Tests for range search rendering."""

    def test_distance_bounds_rendered(self) -> None:
        """min=0, max=20 render as distanceNear=0 and distanceFar=20."""
        request = VectorRangeSearchRequest("vector", FloatVector([0.1]), DistanceRange(0, 20))
        params = request.to_dict()["anns"]["params"]

        assert params["distanceNear"] == 0
        assert params["distanceFar"] == 20
        assert "limit" not in params

    def test_bounds_independent_of_configuration_order(self) -> None:
        """Bounds render the same whatever else is configured first."""
        first = VectorRangeSearchRequest(
            "vector", FloatVector([0.1]), DistanceRange(0, 20), limit=5
        ).set_config({"ef": 100})
        second = VectorRangeSearchRequest(
            "vector", FloatVector([0.1]), DistanceRange(0, 20)
        ).set_config({"ef": 100}).set_limit(5)

        assert first.to_dict() == second.to_dict()
        assert first.to_dict()["anns"]["params"] == {
            "ef": 100,
            "distanceNear": 0,
            "distanceFar": 20,
            "limit": 5,
        }

    def test_distance_range_required(self) -> None:
        """A DistanceRange is mandatory."""
        with pytest.raises(ValidationError):
            VectorRangeSearchRequest("vector", FloatVector([0.1]), (0, 20))  # type: ignore[arg-type]

    @pytest.mark.parametrize("bound", [float("nan"), float("inf"), "20"])
    def test_distance_bounds_must_be_finite(self, bound: object) -> None:
        """NaN, infinite and non-numeric bounds are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            DistanceRange(0, bound)  # type: ignore[arg-type]
        assert exc_info.value.code == ErrorCode.INVALID_REQUEST

    def test_common_fields_outside_anns(self) -> None:
        """Partition key and projections render at the outer level."""
        request = VectorRangeSearchRequest(
            "vector",
            FloatVector([0.1]),
            DistanceRange(0.5, 1.0),
            filter="page > 1",
            projections=["id"],
        )
        payload = request.to_dict()

        assert payload["anns"]["filter"] == "page > 1"
        assert payload["projections"] == ["id"]
        assert "filter" not in payload


class TestVectorBatchSearchRequest:
    """Tests for batch search rendering."""

    def test_vectors_rendered_as_list(self) -> None:
        """All query vectors are rendered under one wire name."""
        request = VectorBatchSearchRequest(
            "vector",
            [FloatVector([0.1, 0.2]), FloatVector([0.3, 0.4])],
            limit=5,
        )
        anns = request.to_dict()["anns"]

        assert anns["vectorFloats"] == [[0.1, 0.2], [0.3, 0.4]]
        assert anns["params"] == {"limit": 5}

    def test_request_type(self) -> None:
        """Batch requests dispatch as batchSearch."""
        request = VectorBatchSearchRequest("vector", [FloatVector([0.1])])
        assert request.request_type == "batchSearch"
        assert request.is_batch is True

    def test_optional_distance_range(self) -> None:
        """Distance bounds are rendered only when set."""
        request = VectorBatchSearchRequest("vector", [FloatVector([0.1])])
        assert "params" not in request.to_dict()["anns"]

        request.set_distance_range(DistanceRange(0, 2))
        assert request.to_dict()["anns"]["params"] == {"distanceNear": 0, "distanceFar": 2}

    def test_mixed_vector_kinds_rejected(self) -> None:
        """Mixing vector kinds in one batch fails fast."""
        with pytest.raises(ValidationError) as exc_info:
            VectorBatchSearchRequest(
                "vector",
                [FloatVector([0.1]), SparseFloatVector({"1": 0.5})],
            )
        assert exc_info.value.code == ErrorCode.INVALID_VECTOR
        assert exc_info.value.details["kinds"] == ["FloatVector", "SparseFloatVector"]

    def test_empty_batch_rejected(self) -> None:
        """A batch needs at least one vector."""
        with pytest.raises(ValidationError):
            VectorBatchSearchRequest("vector", [])

    def test_sparse_batch(self) -> None:
        """Sparse batches render a list of objects under vector."""
        request = VectorBatchSearchRequest(
            "sparse",
            [SparseFloatVector({"1": 0.5}), SparseFloatVector({"7": 0.1})],
        )
        assert request.to_dict()["anns"]["vector"] == [{"1": 0.5}, {"7": 0.1}]


class TestBM25SearchRequest:
    """Tests for full-text search rendering."""

    def test_minimal_payload(self) -> None:
        """Index name and text render in BM25SearchParams."""
        request = BM25SearchRequest("book_segment_inverted_idx", "吕布")
        assert request.to_dict() == {
            "BM25SearchParams": {"indexName": "book_segment_inverted_idx", "searchText": "吕布"}
        }

    def test_common_fields_at_outer_level(self) -> None:
        """Limit and filter are outer fields for full-text search."""
        request = BM25SearchRequest(
            "idx",
            "hello",
            limit=12,
            filter="page > 1",
            read_consistency="STRONG",
        )
        payload = request.to_dict()

        assert payload["limit"] == 12
        assert payload["filter"] == "page > 1"
        assert payload["readConsistency"] == "STRONG"
        assert "anns" not in payload

    def test_index_name_required(self) -> None:
        """The inverted index name is mandatory."""
        with pytest.raises(ValidationError):
            BM25SearchRequest("", "hello")
