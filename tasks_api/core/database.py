"""
DynamoDB document store and an in-memory implementation for tests and local runs.

The store is constructed once per process and passed explicitly: the app factory
puts it on app.state and request handlers receive it through get_store.
"""

import copy
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

import boto3
from boto3.dynamodb.conditions import Key
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, ReadTimeoutError
from botocore.exceptions import ConnectionError as BotoConnectionError
from fastapi import Request

from tasks_api.core.errors import NotFoundError, StoreConnectionError, StoreError
from tasks_api.models.base import TableDescriptor

if TYPE_CHECKING:
    from tasks_api.core.config import Settings

logger = logging.getLogger(__name__)

TABLE_STATUS_ACTIVE = "ACTIVE"
TABLE_STATUS_CREATING = "CREATING"

# Credentials DynamoDB Local accepts when none are configured.
LOCAL_CREDENTIALS = ("local", "local")


@dataclass(frozen=True)
class TableDescription:
    """Subset of DescribeTable output the app relies on."""

    name: str
    status: str
    key_schema: list[dict[str, str]] = field(default_factory=list)


class DocumentStore(Protocol):
    """Operations the bootstrap and request handlers need from the store."""

    def list_tables(self) -> list[str]:
        ...

    def describe_table(self, name: str) -> TableDescription:
        ...

    def create_table(self, descriptor: TableDescriptor) -> None:
        ...

    def get_item(self, table: str, key: dict[str, Any]) -> dict[str, Any] | None:
        ...

    def put_item(self, table: str, item: dict[str, Any]) -> None:
        ...

    def delete_item(self, table: str, key: dict[str, Any]) -> None:
        ...

    def query_index(
        self, table: str, index_name: str, key_name: str, value: Any
    ) -> list[dict[str, Any]]:
        ...


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate botocore exceptions into the app's store errors."""
    try:
        yield
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "")
        if code == "ResourceNotFoundException":
            raise NotFoundError(f"{operation}: resource not found", cause=e) from e
        raise StoreError(f"{operation} failed ({code or 'ClientError'})", cause=e) from e
    except (BotoConnectionError, ReadTimeoutError) as e:
        raise StoreConnectionError(f"{operation}: DynamoDB is unreachable", cause=e) from e
    except BotoCoreError as e:
        raise StoreError(f"{operation} failed: {e}", cause=e) from e


class DynamoDBStore:
    """Document store backed by a boto3 DynamoDB resource (thread safe for these calls)."""

    def __init__(self, resource: Any) -> None:
        self._resource = resource
        self._client = resource.meta.client

    @classmethod
    def from_settings(cls, settings: "Settings") -> "DynamoDBStore":
        """Build the resource from region, optional endpoint override, credentials and timeouts."""
        config = Config(
            connect_timeout=settings.DYNAMODB_CONNECT_TIMEOUT_SEC,
            read_timeout=settings.DYNAMODB_READ_TIMEOUT_SEC,
            retries={"max_attempts": settings.DYNAMODB_MAX_ATTEMPTS, "mode": "standard"},
        )
        kwargs: dict[str, Any] = {"region_name": settings.AWS_REGION, "config": config}
        access_key = settings.AWS_ACCESS_KEY_ID
        secret_key = (
            settings.AWS_SECRET_ACCESS_KEY.get_secret_value()
            if settings.AWS_SECRET_ACCESS_KEY is not None
            else None
        )
        if settings.DYNAMODB_ENDPOINT:
            kwargs["endpoint_url"] = settings.DYNAMODB_ENDPOINT
            if not (access_key and secret_key):
                access_key, secret_key = LOCAL_CREDENTIALS
        if access_key and secret_key:
            kwargs["aws_access_key_id"] = access_key
            kwargs["aws_secret_access_key"] = secret_key
        logger.info(
            "DynamoDB store: region=%s endpoint=%s",
            settings.AWS_REGION,
            settings.DYNAMODB_ENDPOINT or "default",
        )
        return cls(boto3.resource("dynamodb", **kwargs))

    def list_tables(self) -> list[str]:
        names: list[str] = []
        with _store_errors("ListTables"):
            for page in self._client.get_paginator("list_tables").paginate():
                names.extend(page.get("TableNames", []))
        return names

    def describe_table(self, name: str) -> TableDescription:
        with _store_errors(f"DescribeTable {name}"):
            table = self._client.describe_table(TableName=name)["Table"]
        return TableDescription(
            name=table["TableName"],
            status=table["TableStatus"],
            key_schema=table.get("KeySchema", []),
        )

    def create_table(self, descriptor: TableDescriptor) -> None:
        with _store_errors(f"CreateTable {descriptor.name}"):
            self._client.create_table(**descriptor.create_table_params())

    def get_item(self, table: str, key: dict[str, Any]) -> dict[str, Any] | None:
        with _store_errors(f"GetItem {table}"):
            return self._resource.Table(table).get_item(Key=key).get("Item")

    def put_item(self, table: str, item: dict[str, Any]) -> None:
        with _store_errors(f"PutItem {table}"):
            self._resource.Table(table).put_item(Item=item)

    def delete_item(self, table: str, key: dict[str, Any]) -> None:
        with _store_errors(f"DeleteItem {table}"):
            self._resource.Table(table).delete_item(Key=key)

    def query_index(
        self, table: str, index_name: str, key_name: str, value: Any
    ) -> list[dict[str, Any]]:
        """Query a secondary index for key_name == value, following pagination."""
        items: list[dict[str, Any]] = []
        params: dict[str, Any] = {
            "IndexName": index_name,
            "KeyConditionExpression": Key(key_name).eq(value),
        }
        with _store_errors(f"Query {table}/{index_name}"):
            handle = self._resource.Table(table)
            while True:
                response = handle.query(**params)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                params["ExclusiveStartKey"] = last_key
        return items


@dataclass
class _MemoryTable:
    descriptor: TableDescriptor
    status: str
    # Describes left before a CREATING table turns ACTIVE; None keeps the status as is.
    pending_polls: int | None = None
    items: dict[str, dict[str, Any]] = field(default_factory=dict)


class InMemoryStore:
    """
    In-memory document store for tests and local development.

    creating_polls controls how many DescribeTable calls a newly created table
    reports CREATING before it turns ACTIVE. Set reachable=False to simulate an
    unreachable store. Every operation is appended to calls as (operation, table).
    """

    def __init__(self, *, creating_polls: int = 0, reachable: bool = True) -> None:
        self.creating_polls = creating_polls
        self.reachable = reachable
        self.tables: dict[str, _MemoryTable] = {}
        self.calls: list[tuple[str, str]] = []

    def add_table(self, descriptor: TableDescriptor, status: str = TABLE_STATUS_ACTIVE) -> None:
        """Pre-provision a table that keeps the given status."""
        self.tables[descriptor.name] = _MemoryTable(descriptor=descriptor, status=status)

    def reset(self) -> None:
        for table in self.tables.values():
            table.items.clear()
        self.calls.clear()

    def _check(self, operation: str, table: str = "") -> None:
        self.calls.append((operation, table))
        if not self.reachable:
            raise StoreConnectionError(f"{operation}: store is unreachable")

    def _table(self, operation: str, name: str) -> _MemoryTable:
        self._check(operation, name)
        table = self.tables.get(name)
        if table is None:
            raise NotFoundError(f"{operation} {name}: resource not found")
        return table

    def list_tables(self) -> list[str]:
        self._check("list_tables")
        return sorted(self.tables)

    def describe_table(self, name: str) -> TableDescription:
        table = self._table("describe_table", name)
        if table.status == TABLE_STATUS_CREATING and table.pending_polls is not None:
            if table.pending_polls <= 0:
                table.status = TABLE_STATUS_ACTIVE
            else:
                table.pending_polls -= 1
        return TableDescription(
            name=name,
            status=table.status,
            key_schema=[{"AttributeName": table.descriptor.key, "KeyType": "HASH"}],
        )

    def create_table(self, descriptor: TableDescriptor) -> None:
        self._check("create_table", descriptor.name)
        if descriptor.name in self.tables:
            raise StoreError(f"CreateTable {descriptor.name} failed (ResourceInUseException)")
        self.tables[descriptor.name] = _MemoryTable(
            descriptor=descriptor,
            status=TABLE_STATUS_CREATING,
            pending_polls=self.creating_polls,
        )

    def get_item(self, table: str, key: dict[str, Any]) -> dict[str, Any] | None:
        mem = self._table("get_item", table)
        item = mem.items.get(key[mem.descriptor.key])
        return copy.deepcopy(item) if item is not None else None

    def put_item(self, table: str, item: dict[str, Any]) -> None:
        mem = self._table("put_item", table)
        mem.items[item[mem.descriptor.key]] = copy.deepcopy(item)

    def delete_item(self, table: str, key: dict[str, Any]) -> None:
        mem = self._table("delete_item", table)
        mem.items.pop(key[mem.descriptor.key], None)

    def query_index(
        self, table: str, index_name: str, key_name: str, value: Any
    ) -> list[dict[str, Any]]:
        mem = self._table("query_index", table)
        index = mem.descriptor.index
        if index is None or index.name != index_name or index.key != key_name:
            raise StoreError(f"Query {table}/{index_name} failed (ValidationException)")
        return [
            copy.deepcopy(item)
            for item in mem.items.values()
            if item.get(key_name) == value
        ]


def create_store(settings: "Settings") -> DocumentStore:
    """Build the process-wide store from settings."""
    return DynamoDBStore.from_settings(settings)


def get_store(request: Request) -> DocumentStore:
    """Dependency that returns the store the app was created with."""
    return request.app.state.store


def check_db_connected(store: DocumentStore) -> bool:
    """List tables to verify the store is reachable."""
    try:
        store.list_tables()
        return True
    except StoreError as e:
        logger.warning("Store connectivity check failed: %s", e.message)
        return False
