"""
Payload Merger - Combines a typed entity with accumulated field records

Integrates:
- Entity serialization into the generic document model (wire names)
- CustomFields / RequestFields / UpdateOperations records
- Deep merge with override: later records win, lists are replaced

An empty or missing record document yields an empty document ({}), so the
caller can tell "nothing dynamic to send" apart from "entity without custom
fields" and fall back to sending the plain entity.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from fieldkit.schema.document import GenericDocument, merge_records, to_document

logger = logging.getLogger(__name__)


class PayloadMerger:
    """
    Builds outgoing request bodies from an entity plus dynamic records

    Usage:
    ```python
    custom_fields = CustomFields()
    custom_fields.number("customfield_10042", 1000.3232)

    issue = IssueScheme(fields=IssueFieldsScheme(summary="New issue"))
    payload = PayloadMerger().merge_custom_fields(issue, custom_fields)
    # {"fields": {"summary": "New issue", "customfield_10042": 1000.3232}}
    ```

    The merger keeps no state between calls and never mutates its inputs.
    """

    def merge(
        self,
        entity: Any,
        records: Optional[Iterable[Mapping[str, Any]]],
    ) -> GenericDocument:
        """
        Merge any record document into the serialized entity

        Args:
            entity: Pydantic model, dataclass or mapping (None for no entity)
            records: CustomFields, RequestFields, UpdateOperations or a list of records

        Returns:
            New merged document, or {} when there are no records

        Raises:
            EntitySerializationError: If the entity cannot be serialized
        """
        base = to_document(entity)

        record_list = list(records) if records is not None else []
        if not record_list:
            logger.debug("No records to merge, returning empty document")
            return {}

        return merge_records(base, record_list)

    def merge_custom_fields(self, entity: Any, fields: Optional[Iterable[Mapping[str, Any]]]) -> GenericDocument:
        """Merge a CustomFields document under the "fields" root"""
        return self.merge(entity, fields)

    def merge_request_fields(self, entity: Any, fields: Optional[Iterable[Mapping[str, Any]]]) -> GenericDocument:
        """Merge a RequestFields document under the "requestFieldValues" root"""
        return self.merge(entity, fields)

    def merge_operations(self, entity: Any, operations: Optional[Iterable[Mapping[str, Any]]]) -> GenericDocument:
        """Merge an UpdateOperations document under the "update" root"""
        return self.merge(entity, operations)


# ============================================================================
# Merger convenience functions
# ============================================================================


def merge_custom_fields(entity: Any, fields: Optional[Iterable[Mapping[str, Any]]]) -> GenericDocument:
    """Merge custom fields into an entity"""
    return PayloadMerger().merge_custom_fields(entity, fields)


def merge_operations(entity: Any, operations: Optional[Iterable[Mapping[str, Any]]]) -> GenericDocument:
    """Merge edit operations into an entity"""
    return PayloadMerger().merge_operations(entity, operations)
