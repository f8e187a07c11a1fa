"""
Schema Module

- document: generic JSON document model, entity serialization and deep merge
- models: reference entities and custom field value models
"""

from .document import GenericDocument, deep_merge, merge_records, to_document, to_json_value

__all__ = ["GenericDocument", "deep_merge", "merge_records", "to_document", "to_json_value"]
