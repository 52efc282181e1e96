"""Table descriptors: static definitions of the DynamoDB tables the app needs."""

from dataclasses import dataclass
from typing import Any

DEFAULT_READ_CAPACITY = 5
DEFAULT_WRITE_CAPACITY = 5


@dataclass(frozen=True)
class SecondaryIndex:
    """Global secondary index for lookup by a non-primary attribute (ALL projection)."""

    name: str
    key: str
    read_capacity: int = DEFAULT_READ_CAPACITY
    write_capacity: int = DEFAULT_WRITE_CAPACITY


@dataclass(frozen=True)
class TableDescriptor:
    """
    One required table: name, string hash key, and optional secondary index.

    Never mutated; used only to drive idempotent provisioning calls.
    """

    name: str
    key: str
    index: SecondaryIndex | None = None
    read_capacity: int = DEFAULT_READ_CAPACITY
    write_capacity: int = DEFAULT_WRITE_CAPACITY

    def create_table_params(self) -> dict[str, Any]:
        """Render DynamoDB CreateTable parameters for this table."""
        attributes = [{"AttributeName": self.key, "AttributeType": "S"}]
        params: dict[str, Any] = {
            "TableName": self.name,
            "KeySchema": [{"AttributeName": self.key, "KeyType": "HASH"}],
            "AttributeDefinitions": attributes,
            "ProvisionedThroughput": {
                "ReadCapacityUnits": self.read_capacity,
                "WriteCapacityUnits": self.write_capacity,
            },
        }
        if self.index is not None:
            attributes.append({"AttributeName": self.index.key, "AttributeType": "S"})
            params["GlobalSecondaryIndexes"] = [
                {
                    "IndexName": self.index.name,
                    "KeySchema": [{"AttributeName": self.index.key, "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                    "ProvisionedThroughput": {
                        "ReadCapacityUnits": self.index.read_capacity,
                        "WriteCapacityUnits": self.index.write_capacity,
                    },
                }
            ]
        return params
