"""
Builder Module

Builds outgoing payloads from typed entities plus dynamic custom fields:
- CustomFields / RequestFields: typed field assignments per value shape
- UpdateOperations: verb + value edit instructions
- PayloadMerger: deep-merges records into the serialized entity
"""

from .field_builder import CustomFields, RequestFields
from .operation_builder import UpdateOperations
from .payload_builder import PayloadMerger, merge_custom_fields, merge_operations

__all__ = [
    "CustomFields",
    "RequestFields",
    "UpdateOperations",
    "PayloadMerger",
    "merge_custom_fields",
    "merge_operations",
]
