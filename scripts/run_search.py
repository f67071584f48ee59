#!/usr/bin/env python
"""Run a top-k vector search against a Mochow server.

Usage:
    python -m scripts.run_search --database book --table segments \
        --field vector --vector 0.3123,0.43,0.213 --limit 5

    python -m scripts.run_search --database book --table segments \
        --field vector --vector 0.3123,0.43,0.213 --limit 100 --iterate --total 1000

Connection settings come from MOCHOW_* environment variables. Matched
rows are printed to stdout as JSON lines.
"""

import argparse
import json
import sys

from mochow.client import MochowClient
from mochow.exceptions import MochowError
from mochow.logging_config import get_logger, setup_logging
from mochow.search import (
    FloatVector,
    RowResult,
    SearchIteratorArgs,
    VectorSearchArgs,
    VectorSearchConfig,
    VectorTopkSearchRequest,
)

logger = get_logger(__name__)


def parse_vector(text: str) -> FloatVector:
    """Parse a comma-separated list of floats."""
    return FloatVector(float(v) for v in text.split(",") if v.strip())


def print_rows(rows: list[RowResult]) -> None:
    for row in rows:
        print(json.dumps(row.model_dump(), ensure_ascii=False, default=str))


def run_search(args: argparse.Namespace) -> int:
    """Run the search described by the command line.

    Returns:
        Number of rows printed.
    """
    request = VectorTopkSearchRequest(
        args.field,
        parse_vector(args.vector),
        args.limit,
        filter=args.filter,
        projections=args.projections.split(",") if args.projections else None,
        config=VectorSearchConfig(ef=args.ef) if args.ef else None,
    )

    with MochowClient() as client:
        if not args.iterate:
            result = client.vector_search(
                VectorSearchArgs(database=args.database, table=args.table, request=request)
            )
            print_rows(result.rows)
            return len(result.rows)

        iterator_args = SearchIteratorArgs(
            database=args.database,
            table=args.table,
            request=request,
            batch_size=args.limit,
            total_size=args.total or args.limit,
        )
        printed = 0
        with client.search_iterator(iterator_args) as iterator:
            for batch in iterator:
                print_rows(batch)
                printed += len(batch)
        return printed


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run a top-k vector search against a Mochow server",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--database", required=True, help="Database name")
    parser.add_argument("--table", required=True, help="Table name")
    parser.add_argument("--field", required=True, help="Vector column to search")
    parser.add_argument(
        "--vector",
        required=True,
        help="Query vector as comma-separated floats",
    )
    parser.add_argument("--limit", type=int, default=10, help="Rows per search")
    parser.add_argument("--filter", default=None, help="Scalar filter expression")
    parser.add_argument(
        "--projections",
        default=None,
        help="Comma-separated columns to return",
    )
    parser.add_argument("--ef", type=int, default=None, help="HNSW search candidate list size")
    parser.add_argument(
        "--iterate",
        action="store_true",
        help="Page through results with a search iterator",
    )
    parser.add_argument(
        "--total",
        type=int,
        default=None,
        help="Total rows to fetch when iterating",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level")

    args = parser.parse_args()
    setup_logging(level=args.log_level)

    try:
        printed = run_search(args)
    except MochowError as e:
        logger.error(f"Search failed: {e}", extra={"code": e.code.value})
        print(json.dumps(e.to_dict()), file=sys.stderr)
        sys.exit(1)

    logger.info(f"Printed {printed} rows")
    sys.exit(0)


if __name__ == "__main__":
    main()
