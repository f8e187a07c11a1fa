"""
Custom Field Parsers - Fixed-shape extractors for well-known custom field types

Each parser fixes the decode target and a null policy:
- list shapes and the cascading select return an empty result ([] / None)
  when the field is null or absent
- scalar and single-object shapes raise MissingValueError instead

A value of another shape raises WrongShapeError carrying the shape name.
Collection parsers (parse_*_fields) share the generic collection rules.
"""

import logging
from datetime import date, datetime
from typing import Annotated, Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BeforeValidator, ValidationError

from fieldkit.errors import MissingValueError, WrongShapeError
from fieldkit.extractor.field_extractor import (
    DEFAULT_CONTAINER,
    DEFAULT_KEY,
    DEFAULT_RECORDS,
    Buffer,
    FieldExtractor,
    locate_field,
    parse_buffer,
)
from fieldkit.extractor.paths import MISSING
from fieldkit.schema.models import (
    AssetReference,
    CascadingSelect,
    CustomFieldOption,
    GroupDetail,
    RequestTypeReference,
    SprintDetail,
    TempoAccount,
    UserDetail,
    VersionDetail,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 2023-07-12T16:00:00.000+0100
DATETIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


def _parse_response_datetime(value: Any) -> Any:
    if not isinstance(value, str):
        return value

    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    # Left to pydantic, which accepts the remaining ISO 8601 spellings
    return value


ResponseDateTime = Annotated[datetime, BeforeValidator(_parse_response_datetime)]


class CustomFieldParser(FieldExtractor[T]):
    """
    FieldExtractor with a shape name and a null policy

    Args:
        shape: Name reported by WrongShapeError
        target: Decode target
        empty: Factory for the result of a null/absent field, None when the
            field is required
        container, records, key: As for FieldExtractor
    """

    def __init__(
        self,
        shape: str,
        target: Type[T],
        empty: Optional[Callable[[], T]] = None,
        container: str = DEFAULT_CONTAINER,
        records: str = DEFAULT_RECORDS,
        key: str = DEFAULT_KEY,
    ):
        super().__init__(target, container=container, records=records, key=key)
        self.shape = shape
        self.empty = empty

    def with_layout(self, container: str, records: str, key: str) -> "CustomFieldParser[T]":
        """Same shape and null policy over other container, records and key names"""
        return CustomFieldParser(
            self.shape, self.target, self.empty, container=container, records=records, key=key
        )

    @property
    def required(self) -> bool:
        return self.empty is None

    def extract(self, buffer: Buffer, field_id: str) -> T:
        document = parse_buffer(buffer)
        value = locate_field(document, field_id, self.container)

        if value is MISSING or value is None:
            if self.required:
                raise MissingValueError(f"the custom field {field_id} has no value", field_id=field_id)
            logger.debug(f"Custom field {field_id} is empty, returning empty {self.shape}")
            return self.empty()

        try:
            return self.decode(value)
        except ValidationError as e:
            raise WrongShapeError(self.shape, field_id=field_id) from e


def _none() -> None:
    return None


MULTI_SELECT = CustomFieldParser("multi-select", List[CustomFieldOption], empty=list)
GROUP_PICKER = CustomFieldParser("group-picker", List[GroupDetail], empty=list)
USER_PICKER = CustomFieldParser("user-picker", List[UserDetail], empty=list)
CASCADING = CustomFieldParser("cascading", Optional[CascadingSelect], empty=_none)
VERSION_PICKER = CustomFieldParser("version-picker", List[VersionDetail], empty=list)
SPRINT = CustomFieldParser("sprint", List[SprintDetail], empty=list)
LABELS = CustomFieldParser("labels", List[str], empty=list)
ASSETS = CustomFieldParser("assets", List[AssetReference], empty=list)

TEMPO_ACCOUNT = CustomFieldParser("tempo-account", TempoAccount)
SELECT = CustomFieldParser("select", CustomFieldOption)
USER = CustomFieldParser("user", UserDetail)
REQUEST_TYPE = CustomFieldParser("request-type", RequestTypeReference)
STRING = CustomFieldParser("string", str)
FLOAT = CustomFieldParser("float", float)
DATE = CustomFieldParser("date", date)
DATETIME = CustomFieldParser("datetime", ResponseDateTime)


# ============================================================================
# Empty-on-null shapes
# ============================================================================


def parse_multi_select_field(buffer: Buffer, field_id: str) -> List[CustomFieldOption]:
    """Options of a multi-select or check-box field ([] when unset)"""
    return MULTI_SELECT.extract(buffer, field_id)


def parse_multi_select_fields(buffer: Buffer, field_id: str) -> Dict[str, List[CustomFieldOption]]:
    return MULTI_SELECT.extract_all(buffer, field_id)


def parse_group_picker_field(buffer: Buffer, field_id: str) -> List[GroupDetail]:
    """Groups of a group multi-picker ([] when unset)"""
    return GROUP_PICKER.extract(buffer, field_id)


def parse_group_picker_fields(buffer: Buffer, field_id: str) -> Dict[str, List[GroupDetail]]:
    return GROUP_PICKER.extract_all(buffer, field_id)


def parse_user_picker_field(buffer: Buffer, field_id: str) -> List[UserDetail]:
    """Users of a user multi-picker ([] when unset)"""
    return USER_PICKER.extract(buffer, field_id)


def parse_user_picker_fields(buffer: Buffer, field_id: str) -> Dict[str, List[UserDetail]]:
    return USER_PICKER.extract_all(buffer, field_id)


def parse_cascading_field(buffer: Buffer, field_id: str) -> Optional[CascadingSelect]:
    """Parent and child of a cascading select (None when unset)"""
    return CASCADING.extract(buffer, field_id)


def parse_cascading_fields(buffer: Buffer, field_id: str) -> Dict[str, CascadingSelect]:
    return CASCADING.extract_all(buffer, field_id)


def parse_version_picker_field(buffer: Buffer, field_id: str) -> List[VersionDetail]:
    return VERSION_PICKER.extract(buffer, field_id)


def parse_version_picker_fields(buffer: Buffer, field_id: str) -> Dict[str, List[VersionDetail]]:
    return VERSION_PICKER.extract_all(buffer, field_id)


def parse_sprint_field(buffer: Buffer, field_id: str) -> List[SprintDetail]:
    return SPRINT.extract(buffer, field_id)


def parse_sprint_fields(buffer: Buffer, field_id: str) -> Dict[str, List[SprintDetail]]:
    return SPRINT.extract_all(buffer, field_id)


def parse_labels_field(buffer: Buffer, field_id: str) -> List[str]:
    return LABELS.extract(buffer, field_id)


def parse_labels_fields(buffer: Buffer, field_id: str) -> Dict[str, List[str]]:
    return LABELS.extract_all(buffer, field_id)


def parse_assets_field(buffer: Buffer, field_id: str) -> List[AssetReference]:
    """Asset object references ([] when unset)"""
    return ASSETS.extract(buffer, field_id)


def parse_assets_fields(buffer: Buffer, field_id: str) -> Dict[str, List[AssetReference]]:
    return ASSETS.extract_all(buffer, field_id)


# ============================================================================
# Required shapes
# ============================================================================


def parse_tempo_account_field(buffer: Buffer, field_id: str) -> TempoAccount:
    """External account reference with a numeric id"""
    return TEMPO_ACCOUNT.extract(buffer, field_id)


def parse_tempo_account_fields(buffer: Buffer, field_id: str) -> Dict[str, TempoAccount]:
    return TEMPO_ACCOUNT.extract_all(buffer, field_id)


def parse_select_field(buffer: Buffer, field_id: str) -> CustomFieldOption:
    return SELECT.extract(buffer, field_id)


def parse_select_fields(buffer: Buffer, field_id: str) -> Dict[str, CustomFieldOption]:
    return SELECT.extract_all(buffer, field_id)


def parse_user_field(buffer: Buffer, field_id: str) -> UserDetail:
    return USER.extract(buffer, field_id)


def parse_user_fields(buffer: Buffer, field_id: str) -> Dict[str, UserDetail]:
    return USER.extract_all(buffer, field_id)


def parse_request_type_field(buffer: Buffer, field_id: str) -> RequestTypeReference:
    """Request type and current status of a service desk issue"""
    return REQUEST_TYPE.extract(buffer, field_id)


def parse_request_type_fields(buffer: Buffer, field_id: str) -> Dict[str, RequestTypeReference]:
    return REQUEST_TYPE.extract_all(buffer, field_id)


def parse_string_field(buffer: Buffer, field_id: str) -> str:
    return STRING.extract(buffer, field_id)


def parse_string_fields(buffer: Buffer, field_id: str) -> Dict[str, str]:
    return STRING.extract_all(buffer, field_id)


def parse_float_field(buffer: Buffer, field_id: str) -> float:
    return FLOAT.extract(buffer, field_id)


def parse_float_fields(buffer: Buffer, field_id: str) -> Dict[str, float]:
    return FLOAT.extract_all(buffer, field_id)


def parse_date_field(buffer: Buffer, field_id: str) -> date:
    """Date picker value (YYYY-MM-DD)"""
    return DATE.extract(buffer, field_id)


def parse_date_fields(buffer: Buffer, field_id: str) -> Dict[str, date]:
    return DATE.extract_all(buffer, field_id)


def parse_datetime_field(buffer: Buffer, field_id: str) -> datetime:
    """Date time picker value, e.g. 2023-07-12T16:00:00.000+0100"""
    return DATETIME.extract(buffer, field_id)


def parse_datetime_fields(buffer: Buffer, field_id: str) -> Dict[str, datetime]:
    return DATETIME.extract_all(buffer, field_id)


# Shape name -> parser, used by the CLI
PARSERS: Dict[str, CustomFieldParser] = {
    "multi-select": MULTI_SELECT,
    "group-picker": GROUP_PICKER,
    "user-picker": USER_PICKER,
    "cascading": CASCADING,
    "version-picker": VERSION_PICKER,
    "sprint": SPRINT,
    "labels": LABELS,
    "assets": ASSETS,
    "tempo-account": TEMPO_ACCOUNT,
    "select": SELECT,
    "user": USER,
    "request-type": REQUEST_TYPE,
    "string": STRING,
    "float": FLOAT,
    "date": DATE,
    "datetime": DATETIME,
}
