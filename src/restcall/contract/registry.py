"""Registry of declared operations keyed by operation id."""

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Mapping

from pydantic import BaseModel, ValidationError

from ..client.exceptions import ConfigurationError
from .description import MethodDescription

logger = logging.getLogger("restcall")


class ContractFile(BaseModel):
    """On-disk shape of a contracts file."""

    base_url: str | None = None
    operations: dict[str, MethodDescription]


class ContractRegistry:
    """Explicit mapping from operation id to its MethodDescription.

    Built once at startup, either in code or from a JSON contracts file,
    and shared read-only afterwards.

    Usage:
        registry = ContractRegistry()
        registry.register("get_user", MethodDescription(
            http_method="GET",
            url="users/{user_id}",
            params=[ParamDescription(name="user_id", place="path")],
        ))

        registry = ContractRegistry.from_file("contracts.json")
    """

    def __init__(
        self,
        operations: Mapping[str, MethodDescription] | None = None,
        base_url: str | None = None,
    ):
        self.base_url = base_url
        self._operations: dict[str, MethodDescription] = {}
        for operation_id, description in (operations or {}).items():
            self.register(operation_id, description)

    def __contains__(self, operation_id: object) -> bool:
        return operation_id in self._operations

    def __iter__(self) -> Iterator[str]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def register(self, operation_id: str, description: MethodDescription) -> MethodDescription:
        """Add an operation.

        The stored description always carries ``operation_id``.

        Raises:
            ConfigurationError: If the id is taken or the description is invalid
        """
        if operation_id in self._operations:
            raise ConfigurationError(f"Operation '{operation_id}' is already registered")
        if description.operation_id != operation_id:
            description = description.model_copy(update={"operation_id": operation_id})
        description.check()
        self._operations[operation_id] = description
        return description

    def get(self, operation_id: str) -> MethodDescription:
        """Look up an operation.

        Raises:
            ConfigurationError: If the operation is unknown
        """
        try:
            return self._operations[operation_id]
        except KeyError:
            raise ConfigurationError(
                f"Unknown operation '{operation_id}'. "
                f"Known operations: {sorted(self._operations)}"
            ) from None

    def items(self) -> list[tuple[str, MethodDescription]]:
        return list(self._operations.items())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContractRegistry":
        """Build a registry from already parsed contract data.

        Raises:
            ConfigurationError: If the data does not describe valid operations
        """
        try:
            contract = ContractFile.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid contract definition: {e}") from e
        return cls(contract.operations, base_url=contract.base_url)

    @classmethod
    def from_file(cls, path: str | Path) -> "ContractRegistry":
        """Load a registry from a JSON contracts file.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: If the file is not a valid contract
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Contracts file not found: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Contracts file {path} is not valid JSON: {e}") from e

        registry = cls.from_dict(data)
        logger.debug(f"Loaded {len(registry)} operations from {path}")
        return registry
