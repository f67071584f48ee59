"""Database, table, index, row, user and role data models.

Arguments render to the service's camelCase wire format with
``to_dict()``; results decode from it. Unset optional fields are left
out of rendered payloads.
"""

from typing import Any, ClassVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from mochow.entities.enums import (
    AutoBuildPolicyType,
    ElementType,
    FieldType,
    IndexState,
    IndexStructureType,
    IndexType,
    InvertedIndexAnalyzer,
    InvertedIndexFieldAttribute,
    InvertedIndexParseMode,
    MetricType,
    PartitionType,
    ReadConsistency,
    TableState,
)


class WireModel(BaseModel):
    """Base for models exchanged with the service."""

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Render under wire names, leaving out unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# Schema


class PartitionParams(WireModel):
    """Table partitioning.

    Attributes:
        partition_type: Partitioning scheme.
        partition_num: Number of partitions.
    """

    partition_type: PartitionType = Field(default=PartitionType.HASH, alias="partitionType")
    partition_num: int = Field(ge=1, alias="partitionNum")


class FieldSchema(WireModel):
    """Column definition.

    Attributes:
        field_name: Column name.
        field_type: Column type.
        primary_key: Part of the primary key.
        partition_key: Used as the partition key.
        auto_increment: Auto-incremented primary key.
        not_null: Column may not be null.
        dimension: Vector dimension (FLOAT_VECTOR columns).
        element_type: Element type (ARRAY columns).
        max_capacity: Maximum element count (ARRAY columns).
    """

    field_name: str = Field(alias="fieldName")
    field_type: FieldType = Field(alias="fieldType")
    primary_key: bool = Field(default=False, alias="primaryKey")
    partition_key: bool = Field(default=False, alias="partitionKey")
    auto_increment: bool = Field(default=False, alias="autoIncrement")
    not_null: bool = Field(default=False, alias="notNull")
    dimension: int | None = Field(default=None, ge=1)
    element_type: ElementType | None = Field(default=None, alias="elementType")
    max_capacity: int | None = Field(default=None, ge=1, alias="maxCapacity")


class IndexParams(WireModel):
    """Base for typed index parameters."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_params(self) -> dict[str, Any]:
        return self.to_dict()


class HNSWParams(IndexParams):
    """HNSW build parameters."""

    m: int = Field(ge=1, alias="M", description="Neighbours per node")
    ef_construction: int = Field(
        ge=1,
        alias="efConstruction",
        description="Build candidate list size",
    )


class HNSWPQParams(HNSWParams):
    """HNSWPQ build parameters."""

    nsq: int = Field(ge=1, alias="NSQ", description="Number of PQ sub-quantizers")
    sample_rate: float = Field(
        gt=0,
        le=1,
        alias="sampleRate",
        description="Training sample rate",
    )


class PUCKParams(IndexParams):
    """PUCK build parameters."""

    coarse_cluster_count: int = Field(ge=1, alias="coarseClusterCount")
    fine_cluster_count: int = Field(ge=1, alias="fineClusterCount")


class InvertedIndexParams(IndexParams):
    """Inverted index tokenization parameters."""

    analyzer: InvertedIndexAnalyzer | None = None
    parse_mode: InvertedIndexParseMode | None = Field(default=None, alias="parseMode")


class AutoBuildPolicy(WireModel):
    """Base for automatic index rebuild policies."""

    policy_type: ClassVar[AutoBuildPolicyType]

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"policyType": self.policy_type.value}
        params.update(self.to_dict())
        return params


class AutoBuildTimingPolicy(AutoBuildPolicy):
    """Rebuild once at a fixed time, e.g. ``2024-06-06 00:00:00``."""

    policy_type: ClassVar[AutoBuildPolicyType] = AutoBuildPolicyType.TIMING

    timing: str


class AutoBuildPeriodicalPolicy(AutoBuildPolicy):
    """Rebuild every ``period_in_second`` seconds, optionally starting at ``timing``."""

    policy_type: ClassVar[AutoBuildPolicyType] = AutoBuildPolicyType.PERIODICAL

    period_in_second: int = Field(ge=1, alias="periodInSecond")
    timing: str | None = None


class AutoBuildIncrementPolicy(AutoBuildPolicy):
    """Rebuild after a number or ratio of rows has changed."""

    policy_type: ClassVar[AutoBuildPolicyType] = AutoBuildPolicyType.ROW_COUNT_INCREMENT

    row_count_increment: int | None = Field(default=None, ge=1, alias="rowCountIncrement")
    row_count_increment_ratio: float | None = Field(
        default=None,
        gt=0,
        alias="rowCountIncrementRatio",
    )

    @model_validator(mode="after")
    def _require_threshold(self) -> "AutoBuildIncrementPolicy":
        if self.row_count_increment is None and self.row_count_increment_ratio is None:
            raise ValueError("Set row_count_increment or row_count_increment_ratio")
        return self


class FilteringIndexField(WireModel):
    """One field of a filtering index."""

    field: str
    index_structure_type: IndexStructureType = Field(
        default=IndexStructureType.DEFAULT,
        alias="indexStructureType",
    )


class IndexSchema(WireModel):
    """Index definition.

    ``fields`` on the wire means inverted index fields for INVERTED
    indexes and filtering index fields for FILTERING indexes.

    Attributes:
        index_name: Index name.
        index_type: Index algorithm.
        metric_type: Distance metric (vector indexes).
        params: Build parameters, typed or as a plain mapping.
        field: Indexed column (vector and secondary indexes).
        inverted_index_fields: Columns of an inverted index.
        inverted_index_field_attributes: Per-column analysis flags.
        filtering_index_fields: Columns of a filtering index.
        state: Build state reported by the service.
        auto_build: Rebuild automatically.
        auto_build_policy: When to rebuild.
    """

    index_name: str = Field(alias="indexName")
    index_type: IndexType = Field(alias="indexType")
    metric_type: MetricType | None = Field(default=None, alias="metricType")
    params: dict[str, Any] | None = None
    field: str | None = None
    inverted_index_fields: list[str] | None = None
    inverted_index_field_attributes: list[InvertedIndexFieldAttribute] | None = None
    filtering_index_fields: list[FilteringIndexField] | None = None
    state: IndexState | None = None
    auto_build: bool = Field(default=False, alias="autoBuild")
    auto_build_policy: dict[str, Any] | None = Field(default=None, alias="autoBuildPolicy")

    @field_validator("params", mode="before")
    @classmethod
    def _typed_params(cls, value: Any) -> Any:
        if isinstance(value, IndexParams):
            return value.to_params()
        return value

    @field_validator("auto_build_policy", mode="before")
    @classmethod
    def _typed_policy(cls, value: Any) -> Any:
        if isinstance(value, AutoBuildPolicy):
            return value.to_params()
        return value

    @model_validator(mode="before")
    @classmethod
    def _route_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "fields" not in data:
            return data
        data = dict(data)
        fields = data.pop("fields")
        index_type = data.get("indexType", data.get("index_type"))
        if index_type == IndexType.INVERTED:
            data["inverted_index_fields"] = fields
            if "fieldsIndexAttributes" in data:
                data["inverted_index_field_attributes"] = data.pop("fieldsIndexAttributes")
        elif index_type == IndexType.FILTERING:
            data["filtering_index_fields"] = fields
        return data

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "indexName": self.index_name,
            "indexType": self.index_type.value,
            "autoBuild": self.auto_build,
        }
        if self.metric_type is not None:
            payload["metricType"] = self.metric_type.value
        if self.params is not None:
            payload["params"] = dict(self.params)
        if self.auto_build_policy is not None:
            payload["autoBuildPolicy"] = dict(self.auto_build_policy)
        if self.state is not None:
            payload["state"] = self.state.value
        if self.field:
            payload["field"] = self.field

        if self.index_type == IndexType.INVERTED:
            if self.inverted_index_fields:
                payload["fields"] = list(self.inverted_index_fields)
            if self.inverted_index_field_attributes:
                payload["fieldsIndexAttributes"] = [
                    attr.value for attr in self.inverted_index_field_attributes
                ]
        elif self.index_type == IndexType.FILTERING and self.filtering_index_fields:
            payload["fields"] = [f.to_dict() for f in self.filtering_index_fields]
        return payload


class TableSchema(WireModel):
    """Columns and indexes of a table."""

    fields: list[FieldSchema] = Field(default_factory=list)
    indexes: list[IndexSchema] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.fields:
            payload["fields"] = [f.to_dict() for f in self.fields]
        if self.indexes:
            payload["indexes"] = [i.to_dict() for i in self.indexes]
        return payload


class TableDescription(WireModel):
    """Table metadata returned by ``desc``."""

    database: str
    table: str
    create_time: str | None = Field(default=None, alias="createTime")
    description: str = ""
    replication: int = 0
    partition: PartitionParams | None = None
    enable_dynamic_field: bool = Field(default=False, alias="enableDynamicField")
    state: TableState | None = None
    aliases: list[str] = Field(default_factory=list)
    table_schema: TableSchema | None = Field(default=None, alias="schema")


# Database and table operations


class ListDatabaseResult(WireModel):
    databases: list[str] = Field(default_factory=list)


class CreateTableArgs(WireModel):
    """Arguments of ``create_table``."""

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    description: str = ""
    replication: int = Field(default=3, ge=1)
    partition: PartitionParams | None = None
    enable_dynamic_field: bool = Field(default=False, alias="enableDynamicField")
    table_schema: TableSchema | None = Field(default=None, alias="schema")

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "database": self.database,
            "table": self.table,
            "description": self.description,
            "replication": self.replication,
        }
        if self.partition is not None:
            payload["partition"] = self.partition.to_dict()
        if self.enable_dynamic_field:
            payload["enableDynamicField"] = True
        if self.table_schema is not None:
            payload["schema"] = self.table_schema.to_dict()
        return payload


class ListTableResult(WireModel):
    tables: list[str] = Field(default_factory=list)


class DescTableResult(WireModel):
    table: TableDescription


class AddFieldArgs(WireModel):
    """Arguments of ``add_field``. Only the schema's fields are sent."""

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    table_schema: TableSchema = Field(alias="schema")

    def to_dict(self) -> dict[str, Any]:
        return {
            "database": self.database,
            "table": self.table,
            "schema": self.table_schema.to_dict(),
        }


class ShowTableStatsResult(WireModel):
    row_count: int = Field(default=0, alias="rowCount")
    memory_size_in_byte: int = Field(default=0, alias="memorySizeInByte")
    disk_size_in_byte: int = Field(default=0, alias="diskSizeInByte")


# Index operations


class CreateIndexArgs(WireModel):
    """Arguments of ``create_index``."""

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    indexes: list[IndexSchema] = Field(min_length=1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "database": self.database,
            "table": self.table,
            "indexes": [i.to_dict() for i in self.indexes],
        }


class DescIndexResult(WireModel):
    index: IndexSchema


class ModifyIndexArgs(WireModel):
    """Arguments of ``modify_index``, e.g. to change the auto-build policy."""

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    index: IndexSchema

    def to_dict(self) -> dict[str, Any]:
        return {"database": self.database, "table": self.table, "index": self.index.to_dict()}


# Row operations


class InsertRowArgs(WireModel):
    """Arguments of ``insert_row`` and ``upsert_row``."""

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    rows: list[dict[str, Any]] = Field(min_length=1)


class UpsertRowArgs(InsertRowArgs):
    pass


class InsertRowResult(WireModel):
    affected_count: int = Field(default=0, alias="affectedCount")


class UpsertRowResult(InsertRowResult):
    pass


class DeleteRowArgs(WireModel):
    """Delete by primary key, or by filter."""

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    primary_key: dict[str, Any] | None = Field(default=None, alias="primaryKey")
    partition_key: dict[str, Any] | None = Field(default=None, alias="partitionKey")
    filter: str | None = None


class QueryRowArgs(WireModel):
    """Point lookup by primary key."""

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    primary_key: dict[str, Any] = Field(alias="primaryKey")
    partition_key: dict[str, Any] | None = Field(default=None, alias="partitionKey")
    projections: list[str] | None = None
    retrieve_vector: bool | None = Field(default=None, alias="retrieveVector")
    read_consistency: ReadConsistency | None = Field(default=None, alias="readConsistency")


class QueryRowResult(WireModel):
    row: dict[str, Any] = Field(default_factory=dict)


class QueryKey(WireModel):
    primary_key: dict[str, Any] = Field(alias="primaryKey")
    partition_key: dict[str, Any] | None = Field(default=None, alias="partitionKey")


class BatchQueryRowArgs(WireModel):
    """Point lookups of several primary keys."""

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    keys: list[QueryKey] = Field(min_length=1)
    projections: list[str] | None = None
    retrieve_vector: bool | None = Field(default=None, alias="retrieveVector")
    read_consistency: ReadConsistency | None = Field(default=None, alias="readConsistency")


class BatchQueryRowResult(WireModel):
    rows: list[dict[str, Any]] = Field(default_factory=list)


class SelectRowArgs(WireModel):
    """Scan rows matching a filter.

    Pass the previous result's ``next_marker`` as ``marker`` to fetch the
    following page while ``is_truncated`` is true.
    """

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    filter: str | None = None
    marker: dict[str, Any] | None = None
    limit: int | None = Field(default=None, ge=1)
    projections: list[str] | None = None
    read_consistency: ReadConsistency | None = Field(default=None, alias="readConsistency")


class SelectRowResult(WireModel):
    is_truncated: bool = Field(default=False, alias="isTruncated")
    next_marker: dict[str, Any] | None = Field(default=None, alias="nextMarker")
    rows: list[dict[str, Any]] = Field(default_factory=list)


class UpdateRowArgs(WireModel):
    """Update columns of the row with the given primary key."""

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    primary_key: dict[str, Any] = Field(alias="primaryKey")
    partition_key: dict[str, Any] | None = Field(default=None, alias="partitionKey")
    update: dict[str, Any] = Field(min_length=1)


# Access control


class PrivilegeTuple(WireModel):
    """Privileges granted on a database and table.

    Use ``*`` for all databases or tables. Decodes the legacy
    ``privilege`` key when ``privileges`` is absent.
    """

    database: str | None = None
    table: str | None = None
    privileges: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _legacy_privilege_key(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("privileges") and data.get("privilege"):
            data = dict(data)
            data["privileges"] = data.pop("privilege")
        return data


class GrantPrivilegesArgs(WireModel):
    """Privileges to grant to or revoke from a user or role."""

    privilege_tuples: list[PrivilegeTuple] = Field(min_length=1, alias="privilegeTuples")


class GrantUserPrivilegesArgs(GrantPrivilegesArgs):
    username: str = Field(min_length=1)


class RevokeUserPrivilegesArgs(GrantUserPrivilegesArgs):
    pass


class GrantRolePrivilegesArgs(GrantPrivilegesArgs):
    role: str = Field(min_length=1)


class RevokeRolePrivilegesArgs(GrantRolePrivilegesArgs):
    pass


class GrantUserRolesArgs(WireModel):
    username: str = Field(min_length=1)
    roles: list[str] = Field(min_length=1)


class RevokeUserRolesArgs(GrantUserRolesArgs):
    pass


class RolePrivileges(WireModel):
    role: str
    privilege_tuples: list[PrivilegeTuple] = Field(default_factory=list, alias="privilegeTuples")


class ShowUserPrivilegesResult(WireModel):
    """Privileges of a user, directly granted and through roles."""

    roles: list[RolePrivileges] = Field(default_factory=list)
    privilege_tuples: list[PrivilegeTuple] = Field(default_factory=list, alias="privilegeTuples")


class ShowRolePrivilegesResult(WireModel):
    """Privileges of a role and the users holding it."""

    users: list[str] = Field(default_factory=list)
    privilege_tuples: list[PrivilegeTuple] = Field(default_factory=list, alias="privilegeTuples")


class SelectUserArgs(WireModel):
    """Find users holding all of the given roles and privileges."""

    roles: list[str] | None = None
    privilege_tuples: list[PrivilegeTuple] | None = Field(default=None, alias="privilegeTuples")


class SelectUserResult(WireModel):
    users: list[str] = Field(default_factory=list)


class SelectRoleArgs(WireModel):
    """Find roles holding all of the given privileges."""

    privilege_tuples: list[PrivilegeTuple] | None = Field(default=None, alias="privilegeTuples")


class SelectRoleResult(WireModel):
    # The service sends this key capitalized.
    roles: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Roles", "roles"),
    )
