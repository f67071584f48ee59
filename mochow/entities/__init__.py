"""Schemas, enums and operation arguments for Mochow entities."""

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
from mochow.entities.models import (
    AddFieldArgs,
    AutoBuildIncrementPolicy,
    AutoBuildPeriodicalPolicy,
    AutoBuildPolicy,
    AutoBuildTimingPolicy,
    BatchQueryRowArgs,
    BatchQueryRowResult,
    CreateIndexArgs,
    CreateTableArgs,
    DeleteRowArgs,
    DescIndexResult,
    DescTableResult,
    FieldSchema,
    FilteringIndexField,
    GrantRolePrivilegesArgs,
    GrantUserPrivilegesArgs,
    GrantUserRolesArgs,
    HNSWParams,
    HNSWPQParams,
    IndexSchema,
    InsertRowArgs,
    InsertRowResult,
    InvertedIndexParams,
    ListDatabaseResult,
    ListTableResult,
    ModifyIndexArgs,
    PartitionParams,
    PrivilegeTuple,
    PUCKParams,
    QueryKey,
    QueryRowArgs,
    QueryRowResult,
    RevokeRolePrivilegesArgs,
    RevokeUserPrivilegesArgs,
    RevokeUserRolesArgs,
    RolePrivileges,
    SelectRoleArgs,
    SelectRoleResult,
    SelectRowArgs,
    SelectRowResult,
    SelectUserArgs,
    SelectUserResult,
    ShowRolePrivilegesResult,
    ShowTableStatsResult,
    ShowUserPrivilegesResult,
    TableDescription,
    TableSchema,
    UpdateRowArgs,
    UpsertRowArgs,
    UpsertRowResult,
)

__all__ = [
    "AddFieldArgs",
    "AutoBuildIncrementPolicy",
    "AutoBuildPeriodicalPolicy",
    "AutoBuildPolicy",
    "AutoBuildPolicyType",
    "AutoBuildTimingPolicy",
    "BatchQueryRowArgs",
    "BatchQueryRowResult",
    "CreateIndexArgs",
    "CreateTableArgs",
    "DeleteRowArgs",
    "DescIndexResult",
    "DescTableResult",
    "ElementType",
    "FieldSchema",
    "FieldType",
    "FilteringIndexField",
    "GrantRolePrivilegesArgs",
    "GrantUserPrivilegesArgs",
    "GrantUserRolesArgs",
    "HNSWParams",
    "HNSWPQParams",
    "IndexSchema",
    "IndexState",
    "IndexStructureType",
    "IndexType",
    "InsertRowArgs",
    "InsertRowResult",
    "InvertedIndexAnalyzer",
    "InvertedIndexFieldAttribute",
    "InvertedIndexParams",
    "InvertedIndexParseMode",
    "ListDatabaseResult",
    "ListTableResult",
    "MetricType",
    "ModifyIndexArgs",
    "PartitionParams",
    "PartitionType",
    "PrivilegeTuple",
    "PUCKParams",
    "QueryKey",
    "QueryRowArgs",
    "QueryRowResult",
    "ReadConsistency",
    "RevokeRolePrivilegesArgs",
    "RevokeUserPrivilegesArgs",
    "RevokeUserRolesArgs",
    "RolePrivileges",
    "SelectRoleArgs",
    "SelectRoleResult",
    "SelectRowArgs",
    "SelectRowResult",
    "SelectUserArgs",
    "SelectUserResult",
    "ShowRolePrivilegesResult",
    "ShowTableStatsResult",
    "ShowUserPrivilegesResult",
    "TableDescription",
    "TableSchema",
    "TableState",
    "UpdateRowArgs",
    "UpsertRowArgs",
    "UpsertRowResult",
]
