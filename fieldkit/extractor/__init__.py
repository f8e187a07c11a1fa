"""
Extractor Module

Pulls one named field out of raw response buffers:
- FieldExtractor / extract_field / extract_fields: caller-chosen decode target
- parse_<shape>_field(s): fixed targets with per-shape null policies
"""

from .custom_fields import (
    PARSERS,
    CustomFieldParser,
    parse_assets_field,
    parse_assets_fields,
    parse_cascading_field,
    parse_cascading_fields,
    parse_date_field,
    parse_date_fields,
    parse_datetime_field,
    parse_datetime_fields,
    parse_float_field,
    parse_float_fields,
    parse_group_picker_field,
    parse_group_picker_fields,
    parse_labels_field,
    parse_labels_fields,
    parse_multi_select_field,
    parse_multi_select_fields,
    parse_request_type_field,
    parse_request_type_fields,
    parse_select_field,
    parse_select_fields,
    parse_sprint_field,
    parse_sprint_fields,
    parse_string_field,
    parse_string_fields,
    parse_tempo_account_field,
    parse_tempo_account_fields,
    parse_user_field,
    parse_user_fields,
    parse_user_picker_field,
    parse_user_picker_fields,
    parse_version_picker_field,
    parse_version_picker_fields,
)
from .field_extractor import FieldExtractor, extract_field, extract_fields

__all__ = [
    "FieldExtractor",
    "CustomFieldParser",
    "PARSERS",
    "extract_field",
    "extract_fields",
    "parse_assets_field",
    "parse_assets_fields",
    "parse_cascading_field",
    "parse_cascading_fields",
    "parse_date_field",
    "parse_date_fields",
    "parse_datetime_field",
    "parse_datetime_fields",
    "parse_float_field",
    "parse_float_fields",
    "parse_group_picker_field",
    "parse_group_picker_fields",
    "parse_labels_field",
    "parse_labels_fields",
    "parse_multi_select_field",
    "parse_multi_select_fields",
    "parse_request_type_field",
    "parse_request_type_fields",
    "parse_select_field",
    "parse_select_fields",
    "parse_sprint_field",
    "parse_sprint_fields",
    "parse_string_field",
    "parse_string_fields",
    "parse_tempo_account_field",
    "parse_tempo_account_fields",
    "parse_user_field",
    "parse_user_fields",
    "parse_user_picker_field",
    "parse_user_picker_fields",
    "parse_version_picker_field",
    "parse_version_picker_fields",
]
