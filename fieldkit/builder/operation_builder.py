"""
Operation Builder - Accumulates edit instructions for the issue "update" block

Each record has the shape {"update": {field_id: [{verb: value}, ...]}}, where
verb is an edit verb such as "add", "remove" or "set".
"""

import logging
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Dict, Iterator, List, Mapping

from fieldkit.errors import EntitySerializationError, MissingFieldIDError, NoEditOperatorError, NoEditValueError
from fieldkit.schema.document import to_json_value

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value


@dataclass
class UpdateOperations:
    """
    Ordered document of edit instructions

    Usage:
    ```python
    operations = UpdateOperations()
    operations.add_array_operation("labels", {"triaged": "add", "stale": "remove"})
    operations.add_string_operation("summary", "set", "New summary")
    ```
    """

    ROOT = "update"

    fields: List[Dict[str, Any]] = dataclass_field(default_factory=list)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.fields)

    def _append(self, field_id: str, instructions: List[Dict[str, Any]]) -> None:
        self.fields.append({self.ROOT: {field_id: instructions}})
        logger.debug(f"Added {len(instructions)} edit instructions for {field_id}")

    def add_array_operation(self, field_id: str, mapping: Mapping[str, str]) -> None:
        """
        Add one instruction per value of an array field

        Args:
            field_id: Field to edit (e.g. "labels" or a custom field id)
            mapping: {value: verb}, e.g. {"triaged": "add", "stale": "remove"}
        """
        if _is_blank(field_id):
            raise MissingFieldIDError(shape="array_operation")
        if not mapping:
            raise NoEditValueError()

        instructions = []
        for value, verb in mapping.items():
            if _is_blank(value):
                raise NoEditValueError()
            if _is_blank(verb):
                raise NoEditOperatorError()
            instructions.append({verb: value})

        self._append(field_id, instructions)

    def add_string_operation(self, field_id: str, verb: str, value: str) -> None:
        """Add a single instruction with a string value"""
        if _is_blank(field_id):
            raise MissingFieldIDError(shape="string_operation")
        if _is_blank(verb):
            raise NoEditOperatorError()
        if _is_blank(value):
            raise NoEditValueError()

        self._append(field_id, [{verb: value}])

    def add_raw_operation(self, field_id: str, verb: str, value: Any) -> None:
        """
        Add a single instruction with any JSON value

        Example:
            operations.add_raw_operation("components", "add", {"name": "Intranet"})
        """
        if _is_blank(field_id):
            raise MissingFieldIDError(shape="raw_operation")
        if _is_blank(verb):
            raise NoEditOperatorError()
        if value is None:
            raise NoEditValueError()
        try:
            value = to_json_value(value)
        except EntitySerializationError as e:
            raise NoEditValueError(f"no update operation value set: {e}") from e

        self._append(field_id, [{verb: value}])
