"""
Field Extractor - Decodes one named field out of a raw response buffer

The caller picks the decode target (pydantic model, dataclass, TypedDict,
builtin or typing construct); nothing else of the response is modelled.

Checks run in a fixed order:
1. malformed buffer      -> MalformedBufferError
2. missing container     -> MissingContainerError / MissingRecordsError
3. null or absent field  -> MissingValueError
4. undecodable field     -> MissingValueError
"""

import json
import logging
from typing import Any, Dict, Generic, List, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from fieldkit.errors import (
    EmptyResultError,
    MalformedBufferError,
    MissingContainerError,
    MissingRecordsError,
    MissingValueError,
)
from fieldkit.extractor.paths import MISSING, join_path, lookup

logger = logging.getLogger(__name__)

T = TypeVar("T")

Buffer = Union[bytes, bytearray, memoryview, str, Any]

DEFAULT_CONTAINER = "fields"
DEFAULT_RECORDS = "issues"
DEFAULT_KEY = "key"


def parse_buffer(buffer: Buffer) -> Any:
    """
    Parse a raw response buffer into a JSON document

    Args:
        buffer: bytes, str or a file-like object (read() / getvalue())

    Raises:
        MalformedBufferError: If the content is not a single JSON document
    """
    if hasattr(buffer, "getvalue"):
        content = buffer.getvalue()
    elif hasattr(buffer, "read"):
        content = buffer.read()
    else:
        content = buffer

    if isinstance(content, (bytearray, memoryview)):
        content = bytes(content)

    try:
        return json.loads(content)
    except (ValueError, TypeError) as e:
        raise MalformedBufferError(f"the buffer does not contain a valid JSON document: {e}") from e


def locate_field(document: Any, field_id: str, container: str = DEFAULT_CONTAINER) -> Any:
    """
    Return the raw value of field_id inside the top-level container

    Returns:
        The value (None for an explicit null) or MISSING when absent

    Raises:
        MissingContainerError: If the document has no container object
    """
    if not isinstance(document, dict) or not isinstance(document.get(container), dict):
        raise MissingContainerError(field_id=field_id)

    if not field_id:
        return MISSING

    return lookup(document[container], join_path(field_id))


def locate_records(document: Any, records: str = DEFAULT_RECORDS) -> List[Any]:
    """
    Return the top-level list of records

    Raises:
        MissingRecordsError: If the document has no such list
    """
    if not isinstance(document, dict) or not isinstance(document.get(records), list):
        raise MissingRecordsError(f"please provide a buffer with a valid {records} list")
    return document[records]


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or str(target)


class FieldExtractor(Generic[T]):
    """
    Decodes a named field into a fixed target type

    Usage:
    ```python
    extractor = FieldExtractor(List[CustomFieldOption])
    options = extractor.extract(response.content, "customfield_10046")
    by_issue = extractor.extract_all(search_response.content, "customfield_10046")
    ```
    """

    def __init__(
        self,
        target: Type[T],
        container: str = DEFAULT_CONTAINER,
        records: str = DEFAULT_RECORDS,
        key: str = DEFAULT_KEY,
    ):
        """
        Initialize FieldExtractor

        Args:
            target: Type the field value is decoded into
            container: Name of the object holding the fields of a record
            records: Name of the top-level list in collection buffers
            key: Record attribute used as the key of collection results
        """
        self.target = target
        self.container = container
        self.records = records
        self.key = key
        self._adapter = TypeAdapter(target)

    def decode(self, value: Any) -> T:
        """
        Validate a raw value against the target type (raises ValidationError)

        Strict JSON rules apply: booleans and numeric strings are not numbers,
        string ids are not integers. Dates still decode from ISO strings.
        """
        return self._adapter.validate_json(json.dumps(value), strict=True)

    def extract(self, buffer: Buffer, field_id: str) -> T:
        """
        Extract the field from a single-record buffer

        Raises:
            MalformedBufferError, MissingContainerError, MissingValueError
        """
        document = parse_buffer(buffer)
        value = locate_field(document, field_id, self.container)
        return self._decode_present(value, field_id)

    def _decode_present(self, value: Any, field_id: str) -> T:
        if value is MISSING or value is None:
            raise MissingValueError(f"the custom field {field_id} has no value", field_id=field_id)

        try:
            return self.decode(value)
        except ValidationError as e:
            raise MissingValueError(
                f"the custom field {field_id} cannot be decoded as {_type_name(self.target)}",
                field_id=field_id,
            ) from e

    def extract_all(self, buffer: Buffer, field_id: str) -> Dict[str, T]:
        """
        Extract the field from every record of a collection buffer

        Records whose field is null, absent or undecodable are skipped.

        Returns:
            {record key: decoded value}, in record order

        Raises:
            MalformedBufferError, MissingRecordsError, EmptyResultError
        """
        document = parse_buffer(buffer)
        records = locate_records(document, self.records)
        path = join_path(self.container, field_id) if field_id else ""

        values: Dict[str, T] = {}
        for index, record in enumerate(records):
            value = lookup(record, path) if path else MISSING
            if value is MISSING or value is None:
                logger.debug(f"Record {index} has no value for {field_id}, skipping")
                continue

            try:
                decoded = self.decode(value)
            except ValidationError as e:
                logger.debug(f"Record {index} value for {field_id} is not a {_type_name(self.target)}: {e}")
                continue

            record_key = record.get(self.key) if isinstance(record, dict) else None
            values[str(record_key) if record_key is not None else ""] = decoded

        if not values:
            raise EmptyResultError(
                f"no record of the {self.records} list holds a value for {field_id}",
                field_id=field_id,
            )

        logger.debug(f"Extracted {field_id} from {len(values)}/{len(records)} records")
        return values


# ============================================================================
# Extractor convenience functions
# ============================================================================


def extract_field(
    buffer: Buffer,
    field_id: str,
    target: Type[T],
    container: str = DEFAULT_CONTAINER,
) -> T:
    """Decode field_id of a single-record buffer into target"""
    return FieldExtractor(target, container=container).extract(buffer, field_id)


def extract_fields(
    buffer: Buffer,
    field_id: str,
    target: Type[T],
    records: str = DEFAULT_RECORDS,
    key: str = DEFAULT_KEY,
    container: str = DEFAULT_CONTAINER,
) -> Dict[str, T]:
    """Decode field_id of every record of a collection buffer into target"""
    extractor = FieldExtractor(target, container=container, records=records, key=key)
    return extractor.extract_all(buffer, field_id)
