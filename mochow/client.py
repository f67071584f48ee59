"""Mochow client facade.

One method per service operation. Each call is a single blocking RPC
through the transport; failures surface as TransportError, ServiceError
or DecodeError.
"""

from types import TracebackType
from typing import Any, TypeVar

from pydantic import BaseModel

from mochow.config import MochowSettings
from mochow.entities.models import (
    AddFieldArgs,
    BatchQueryRowArgs,
    BatchQueryRowResult,
    CreateIndexArgs,
    CreateTableArgs,
    DeleteRowArgs,
    DescIndexResult,
    DescTableResult,
    GrantRolePrivilegesArgs,
    GrantUserPrivilegesArgs,
    GrantUserRolesArgs,
    InsertRowArgs,
    InsertRowResult,
    ListDatabaseResult,
    ListTableResult,
    ModifyIndexArgs,
    QueryRowArgs,
    QueryRowResult,
    RevokeRolePrivilegesArgs,
    RevokeUserPrivilegesArgs,
    RevokeUserRolesArgs,
    SelectRoleArgs,
    SelectRoleResult,
    SelectRowArgs,
    SelectRowResult,
    SelectUserArgs,
    SelectUserResult,
    ShowRolePrivilegesResult,
    ShowTableStatsResult,
    ShowUserPrivilegesResult,
    UpdateRowArgs,
    UpsertRowArgs,
    UpsertRowResult,
    WireModel,
)
from mochow.logging_config import get_logger
from mochow.search import service as search_service
from mochow.search.iterator import SearchIterator
from mochow.search.models import (
    BM25SearchArgs,
    HybridSearchArgs,
    MultivectorSearchArgs,
    SearchIteratorArgs,
    SearchResult,
    VectorSearchArgs,
)
from mochow.transport import ApiRequest, ApiResponse, HTTPTransport, Transport
from mochow.transport.models import (
    DATABASE_URI,
    INDEX_URI,
    ROLE_URI,
    ROW_URI,
    TABLE_URI,
    USER_URI,
)

logger = get_logger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


class MochowClient:
    """Client for a Mochow vector database.

    Example:
        >>> with MochowClient() as client:
        ...     request = VectorTopkSearchRequest("vector", FloatVector([0.1, 0.2]), 10)
        ...     result = client.vector_search(
        ...         VectorSearchArgs(database="book", table="segments", request=request)
        ...     )
    """

    def __init__(
        self,
        settings: MochowSettings | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Connection configuration. Ignored when a transport
                is given.
            transport: Existing transport (for testing).

        Raises:
            ConfigurationError: If the settings are invalid.
        """
        self._transport = transport if transport is not None else HTTPTransport(settings)
        self._owns_transport = transport is None

    @property
    def transport(self) -> Transport:
        return self._transport

    def close(self) -> None:
        """Close the transport if we own it."""
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> "MochowClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _send(self, request: ApiRequest) -> ApiResponse:
        response = self._transport.send(request)
        if response.is_failure():
            raise response.service_error()
        return response

    def _call(
        self,
        uri: str,
        operation: str,
        body: dict[str, Any] | WireModel,
        result_model: type[ResultT],
    ) -> ResultT:
        response = self._post(uri, operation, body)
        return response.decode_body_as(result_model)

    def _post(
        self,
        uri: str,
        operation: str,
        body: dict[str, Any] | WireModel,
    ) -> ApiResponse:
        if isinstance(body, WireModel):
            body = body.to_dict()
        return self._send(ApiRequest(uri=uri, operation=operation, body=body))

    def _delete(self, uri: str, params: dict[str, str]) -> None:
        self._send(ApiRequest(uri=uri, method="DELETE", params=params))

    # Databases

    def create_database(self, database: str) -> None:
        """Create a database."""
        self._post(DATABASE_URI, "create", {"database": database})
        logger.info(f"Created database: {database}")

    def drop_database(self, database: str) -> None:
        """Drop an empty database."""
        self._delete(DATABASE_URI, {"database": database})
        logger.info(f"Dropped database: {database}")

    def list_database(self) -> ListDatabaseResult:
        """List database names."""
        return self._call(DATABASE_URI, "list", {}, ListDatabaseResult)

    def has_database(self, database: str) -> bool:
        """Check if a database exists."""
        return database in self.list_database().databases

    # Tables

    def create_table(self, args: CreateTableArgs) -> None:
        """Create a table. The table is usable once its state is NORMAL."""
        self._post(TABLE_URI, "create", args)
        logger.info(
            f"Created table: {args.database}.{args.table}",
            extra={"replication": args.replication},
        )

    def drop_table(self, database: str, table: str) -> None:
        """Drop a table."""
        self._delete(TABLE_URI, {"database": database, "table": table})
        logger.info(f"Dropped table: {database}.{table}")

    def list_table(self, database: str) -> ListTableResult:
        """List table names of a database."""
        return self._call(TABLE_URI, "list", {"database": database}, ListTableResult)

    def has_table(self, database: str, table: str) -> bool:
        """Check if a table exists."""
        return table in self.list_table(database).tables

    def desc_table(self, database: str, table: str) -> DescTableResult:
        """Describe a table."""
        return self._call(
            TABLE_URI, "desc", {"database": database, "table": table}, DescTableResult
        )

    def add_field(self, args: AddFieldArgs) -> None:
        """Add scalar columns to a table."""
        self._post(TABLE_URI, "addField", args)

    def alias_table(self, database: str, table: str, alias: str) -> None:
        """Give a table an alias."""
        self._post(TABLE_URI, "alias", {"database": database, "table": table, "alias": alias})

    def unalias_table(self, database: str, table: str, alias: str) -> None:
        """Remove an alias from a table."""
        self._post(
            TABLE_URI, "unalias", {"database": database, "table": table, "alias": alias}
        )

    def show_table_stats(self, database: str, table: str) -> ShowTableStatsResult:
        """Row count and storage size of a table."""
        return self._call(
            TABLE_URI, "stats", {"database": database, "table": table}, ShowTableStatsResult
        )

    # Indexes

    def create_index(self, args: CreateIndexArgs) -> None:
        """Create indexes on a table."""
        self._post(INDEX_URI, "create", args)
        logger.info(
            f"Created {len(args.indexes)} index(es) on {args.database}.{args.table}",
            extra={"indexes": [i.index_name for i in args.indexes]},
        )

    def desc_index(self, database: str, table: str, index_name: str) -> DescIndexResult:
        """Describe an index."""
        return self._call(
            INDEX_URI,
            "desc",
            {"database": database, "table": table, "indexName": index_name},
            DescIndexResult,
        )

    def modify_index(self, args: ModifyIndexArgs) -> None:
        """Modify an index, e.g. its auto-build policy."""
        self._post(INDEX_URI, "modify", args)

    def drop_index(self, database: str, table: str, index_name: str) -> None:
        """Drop an index."""
        self._delete(INDEX_URI, {"database": database, "table": table, "indexName": index_name})
        logger.info(f"Dropped index: {database}.{table}.{index_name}")

    def rebuild_index(self, database: str, table: str, index_name: str) -> None:
        """Rebuild a vector index."""
        self._post(
            INDEX_URI,
            "rebuild",
            {"database": database, "table": table, "indexName": index_name},
        )

    # Rows

    def insert_row(self, args: InsertRowArgs) -> InsertRowResult:
        """Insert rows. Fails if a primary key already exists."""
        return self._call(ROW_URI, "insert", args, InsertRowResult)

    def upsert_row(self, args: UpsertRowArgs) -> UpsertRowResult:
        """Insert rows, replacing any with the same primary key."""
        return self._call(ROW_URI, "upsert", args, UpsertRowResult)

    def delete_row(self, args: DeleteRowArgs) -> None:
        """Delete rows by primary key or filter."""
        self._post(ROW_URI, "delete", args)

    def query_row(self, args: QueryRowArgs) -> QueryRowResult:
        """Fetch one row by primary key."""
        return self._call(ROW_URI, "query", args, QueryRowResult)

    def batch_query_row(self, args: BatchQueryRowArgs) -> BatchQueryRowResult:
        """Fetch several rows by primary key."""
        return self._call(ROW_URI, "batchQuery", args, BatchQueryRowResult)

    def select_row(self, args: SelectRowArgs) -> SelectRowResult:
        """Scan one page of rows matching a filter."""
        return self._call(ROW_URI, "select", args, SelectRowResult)

    def update_row(self, args: UpdateRowArgs) -> None:
        """Update columns of one row."""
        self._post(ROW_URI, "update", args)

    # Search

    def vector_search(self, args: VectorSearchArgs) -> SearchResult:
        """Top-k, range or batch vector search."""
        return search_service.vector_search(self._transport, args)

    def bm25_search(self, args: BM25SearchArgs) -> SearchResult:
        """Full-text search."""
        return search_service.bm25_search(self._transport, args)

    def hybrid_search(self, args: HybridSearchArgs) -> SearchResult:
        """Weighted vector plus full-text search."""
        return search_service.hybrid_search(self._transport, args)

    def multivector_search(self, args: MultivectorSearchArgs) -> SearchResult:
        """Search several vector fields with a ranking strategy."""
        return search_service.multivector_search(self._transport, args)

    def search_iterator(self, args: SearchIteratorArgs) -> SearchIterator:
        """Page through a top-k or multi-vector search.

        No request is sent until the first batch is pulled.
        """
        return SearchIterator(self._transport, args)

    # Users

    def create_user(self, username: str, password: str) -> None:
        """Create a user."""
        self._post(USER_URI, "create", {"username": username, "password": password})
        logger.info(f"Created user: {username}")

    def drop_user(self, username: str) -> None:
        """Drop a user."""
        self._post(USER_URI, "drop", {"username": username})
        logger.info(f"Dropped user: {username}")

    def change_user_password(self, username: str, new_password: str) -> None:
        """Change the password of a user."""
        self._post(
            USER_URI, "changePassword", {"username": username, "newPassword": new_password}
        )

    def grant_user_roles(self, args: GrantUserRolesArgs) -> None:
        """Grant roles to a user."""
        self._post(USER_URI, "grantRoles", args)

    def revoke_user_roles(self, args: RevokeUserRolesArgs) -> None:
        """Revoke roles from a user."""
        self._post(USER_URI, "revokeRoles", args)

    def grant_user_privileges(self, args: GrantUserPrivilegesArgs) -> None:
        """Grant privileges to a user."""
        self._post(USER_URI, "grantPrivileges", args)

    def revoke_user_privileges(self, args: RevokeUserPrivilegesArgs) -> None:
        """Revoke privileges from a user."""
        self._post(USER_URI, "revokePrivileges", args)

    def show_user_privileges(self, username: str) -> ShowUserPrivilegesResult:
        """Privileges of a user, directly granted and through roles."""
        return self._call(
            USER_URI, "showPrivileges", {"username": username}, ShowUserPrivilegesResult
        )

    def select_user(self, args: SelectUserArgs) -> SelectUserResult:
        """Find users by roles and privileges."""
        return self._call(USER_URI, "select", args, SelectUserResult)

    # Roles

    def create_role(self, role: str) -> None:
        """Create a role."""
        self._post(ROLE_URI, "create", {"role": role})
        logger.info(f"Created role: {role}")

    def drop_role(self, role: str) -> None:
        """Drop a role."""
        self._post(ROLE_URI, "drop", {"role": role})
        logger.info(f"Dropped role: {role}")

    def grant_role_privileges(self, args: GrantRolePrivilegesArgs) -> None:
        """Grant privileges to a role."""
        self._post(ROLE_URI, "grantPrivileges", args)

    def revoke_role_privileges(self, args: RevokeRolePrivilegesArgs) -> None:
        """Revoke privileges from a role."""
        self._post(ROLE_URI, "revokePrivileges", args)

    def show_role_privileges(self, role: str) -> ShowRolePrivilegesResult:
        """Privileges of a role and the users holding it."""
        return self._call(ROLE_URI, "showPrivileges", {"role": role}, ShowRolePrivilegesResult)

    def select_role(self, args: SelectRoleArgs) -> SelectRoleResult:
        """Find roles by privileges."""
        return self._call(ROLE_URI, "select", args, SelectRoleResult)
