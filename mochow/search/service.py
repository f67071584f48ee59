"""Search dispatch.

Renders a request, sends it as one RPC and classifies the response by
request variant. Transport errors propagate unchanged; a failed response
becomes a ServiceError and a malformed body a DecodeError.
"""

from mochow.logging_config import get_logger
from mochow.search.models import (
    BatchSearchRowResult,
    BM25SearchArgs,
    HybridSearchArgs,
    MultivectorSearchArgs,
    SearchResult,
    SearchRowResult,
    VectorSearchArgs,
)
from mochow.search.requests import SearchRequest
from mochow.transport import ApiRequest, Transport
from mochow.transport.models import ROW_URI

logger = get_logger(__name__)


def search(
    transport: Transport,
    database: str,
    table: str,
    request: SearchRequest,
) -> SearchResult:
    """Dispatch any search request.

    Args:
        transport: Transport to send through.
        database: Database name.
        table: Table name.
        request: Request to render and send.

    Returns:
        Batch or non-batch result, depending on the request variant.

    Raises:
        TransportError: If the service could not be reached.
        ServiceError: If the service reported a failure.
        DecodeError: If the response body is malformed.
    """
    body = request.to_dict()
    body["database"] = database
    body["table"] = table

    response = transport.send(
        ApiRequest(uri=ROW_URI, operation=request.request_type, body=body)
    )
    if response.is_failure():
        raise response.service_error()

    if request.is_batch:
        result = SearchResult.from_batch(response.decode_body_as(BatchSearchRowResult))
        logger.debug(
            f"{type(request).__name__} returned {len(result.batch_rows)} result sets",
            extra={"database": database, "table": table},
        )
        return result

    result = SearchResult.from_rows(response.decode_body_as(SearchRowResult))
    logger.debug(
        f"{type(request).__name__} returned {len(result.rows)} rows",
        extra={"database": database, "table": table},
    )
    return result


def vector_search(transport: Transport, args: VectorSearchArgs) -> SearchResult:
    """Top-k, range or batch vector search."""
    return search(transport, args.database, args.table, args.request)


def bm25_search(transport: Transport, args: BM25SearchArgs) -> SearchResult:
    """Full-text search."""
    return search(transport, args.database, args.table, args.request)


def hybrid_search(transport: Transport, args: HybridSearchArgs) -> SearchResult:
    """Weighted vector plus full-text search."""
    return search(transport, args.database, args.table, args.request)


def multivector_search(transport: Transport, args: MultivectorSearchArgs) -> SearchResult:
    """Search across several vector fields with a ranking strategy."""
    return search(transport, args.database, args.table, args.request)
