"""
Generic document model - the JSON tree shared by entities and field records

Supports:
- Serializing pydantic models, pydantic/std dataclasses and mappings into a
  GenericDocument using their wire names
- Recursive deep merge with override semantics
  (dicts merge, scalars and lists are replaced by the later value)
"""

import copy
import dataclasses
import logging
import math
from typing import Any, Dict, Iterable, Mapping

from pydantic import BaseModel, JsonValue, TypeAdapter, ValidationError

from fieldkit.errors import EntitySerializationError

logger = logging.getLogger(__name__)

GenericDocument = Dict[str, JsonValue]

_DOCUMENT_ADAPTER = TypeAdapter(GenericDocument)
_VALUE_ADAPTER = TypeAdapter(JsonValue)


def to_document(entity: Any) -> GenericDocument:
    """
    Convert an entity into a GenericDocument

    Pydantic models and dataclasses are dumped in JSON mode with their
    aliases, dropping unset (None) attributes the way the wire format omits
    them. Mappings are deep-copied.

    Args:
        entity: Pydantic model, dataclass instance or mapping. None gives {}

    Returns:
        A new document; the entity is never mutated

    Raises:
        EntitySerializationError: If the entity holds a value JSON cannot represent
    """
    if entity is None:
        return {}

    try:
        if isinstance(entity, BaseModel):
            raw = entity.model_dump(mode="json", by_alias=True, exclude_none=True)
        elif dataclasses.is_dataclass(entity) and not isinstance(entity, type):
            raw = TypeAdapter(type(entity)).dump_python(
                entity, mode="json", by_alias=True, exclude_none=True
            )
        elif isinstance(entity, Mapping):
            raw = copy.deepcopy(dict(entity))
        else:
            raise EntitySerializationError(
                f"cannot serialize entity of type {type(entity).__name__}"
            )
        _ensure_finite(raw, "")
        return _DOCUMENT_ADAPTER.validate_python(raw)
    except EntitySerializationError:
        raise
    except (ValidationError, TypeError, ValueError) as e:
        raise EntitySerializationError(
            f"cannot serialize entity of type {type(entity).__name__}: {e}"
        ) from e


def _ensure_finite(value: Any, path: str) -> None:
    """NaN and infinities have no JSON representation"""
    if isinstance(value, float) and not math.isfinite(value):
        raise EntitySerializationError(f"non-finite number at '{path or '(root)'}'")
    if isinstance(value, Mapping):
        for key, item in value.items():
            _ensure_finite(item, f"{path}.{key}" if path else str(key))
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _ensure_finite(item, f"{path}[{index}]")


def to_json_value(value: Any) -> JsonValue:
    """
    Return a detached copy of value if it is representable as JSON

    Raises:
        EntitySerializationError: For NaN, infinities, sets, non-string keys or
            objects outside the JSON model
    """
    try:
        copied = copy.deepcopy(value)
        _ensure_finite(copied, "")
        return _VALUE_ADAPTER.validate_python(copied)
    except EntitySerializationError:
        raise
    except (ValidationError, TypeError, ValueError) as e:
        raise EntitySerializationError(f"value of type {type(value).__name__} is not a JSON value: {e}") from e


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> GenericDocument:
    """
    Recursively merge two documents without mutating either

    Example:
        >>> deep_merge({"fields": {"a": 1, "b": [1]}}, {"fields": {"b": [2]}})
        {'fields': {'a': 1, 'b': [2]}}
    """
    result: GenericDocument = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            # Lists are replaced wholesale, never concatenated
            result[key] = copy.deepcopy(value)
    return result


def merge_records(
    base: Mapping[str, Any],
    records: Iterable[Mapping[str, Any]],
) -> GenericDocument:
    """
    Deep-merge records into base, in order; later records win

    Returns:
        A new document
    """
    merged: GenericDocument = copy.deepcopy(dict(base))
    count = 0
    for record in records:
        merged = deep_merge(merged, record)
        count += 1

    logger.debug(f"Merged {count} records into document with keys {list(merged)}")
    return merged
