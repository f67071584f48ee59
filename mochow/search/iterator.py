"""Pull-based pagination over a server search cursor."""

import copy
from collections.abc import Iterator
from types import TracebackType

from mochow.exceptions import UnsupportedFeatureError
from mochow.logging_config import get_logger
from mochow.observability.metrics import track_iterator_rows
from mochow.search.models import RowResult, SearchIteratorArgs
from mochow.search.requests import IterableSearchRequest
from mochow.search.service import search
from mochow.transport import Transport

logger = get_logger(__name__)


class SearchIterator:
    """Turns a paginated top-k or multi-vector search into batches of rows.

    Each ``next_batch()`` call performs one search carrying the last
    continuation token and returns up to ``batch_size`` rows, never more
    than ``total_size`` in total. An empty list means the sequence has
    ended.

    End of sequence is signalled when the cap is reached or when the
    server returns zero rows, whatever token accompanies them. A response
    with rows but no continuation token means the server does not
    support iteration and raises UnsupportedFeatureError. A failed call
    leaves the iterator unchanged, so the same call may be retried.

    The iterator is not restartable and not safe for concurrent use.
    """

    def __init__(self, transport: Transport, args: SearchIteratorArgs) -> None:
        """Initialize the iterator.

        Args:
            transport: Transport to send through.
            args: Validated iterator arguments. The request is copied, so
                later changes to the caller's request have no effect.
        """
        self._transport = transport
        self._database = args.database
        self._table = args.table
        self._batch_size = args.batch_size
        self._total_size = args.total_size

        self._request: IterableSearchRequest = copy.deepcopy(args.request)
        if args.partition_key is not None:
            self._request.set_partition_key(args.partition_key)
        if args.projections is not None:
            self._request.set_projections(args.projections)
        if args.read_consistency is not None:
            self._request.set_read_consistency(args.read_consistency)

        self._iterated_ids = ""
        self._returned_count = 0
        self._exhausted = False

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def total_size(self) -> int:
        return self._total_size

    @property
    def returned_count(self) -> int:
        """Rows returned so far."""
        return self._returned_count

    @property
    def iterated_ids(self) -> str:
        """Last continuation token received, empty before the first fetch."""
        return self._iterated_ids

    @property
    def exhausted(self) -> bool:
        """Whether the end of the sequence has been reached."""
        return self._exhausted or self._returned_count >= self._total_size

    def next_batch(self) -> list[RowResult]:
        """Fetch the next batch of rows.

        Returns:
            The next rows, or an empty list once the sequence has ended.

        Raises:
            UnsupportedFeatureError: If the server returned rows without a
                continuation token.
            TransportError: If the service could not be reached.
            ServiceError: If the service reported a failure.
            DecodeError: If the response body is malformed.
        """
        if self.exhausted:
            return []

        self._request.set_iterated_ids(self._iterated_ids)
        result = search(self._transport, self._database, self._table, self._request)

        if not result.rows:
            self._exhausted = True
            logger.debug(
                "Search iterator reached the end of results",
                extra={"returned_count": self._returned_count},
            )
            return []

        if not result.iterated_ids:
            raise UnsupportedFeatureError(
                "Search iterator is not supported by the server",
                details={"database": self._database, "table": self._table},
            )

        remaining = self._total_size - self._returned_count
        rows = result.rows[:remaining]
        self._iterated_ids = result.iterated_ids
        self._returned_count += len(rows)
        track_iterator_rows(len(rows))

        logger.debug(
            f"Search iterator fetched {len(rows)} rows",
            extra={
                "received": len(result.rows),
                "returned_count": self._returned_count,
                "total_size": self._total_size,
            },
        )
        return rows

    def close(self) -> None:
        """Release the iterator. Safe to call more than once."""

    def __iter__(self) -> Iterator[list[RowResult]]:
        return self

    def __next__(self) -> list[RowResult]:
        rows = self.next_batch()
        if not rows:
            raise StopIteration
        return rows

    def __enter__(self) -> "SearchIterator":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
