"""
Field Builder - Accumulates custom field assignments for one payload

Supports:
- Text, number, URL and raw values
- Date (YYYY-MM-DD) and date-time (RFC 3339) values
- Select, radio button, multi-select and check-box options
- Group/user references, single and multiple
- Cascading selects (parent + child option)
- Customer request fields (requestFieldValues root, labels, components)

Every successful call appends exactly one record {root: {field_id: value}}.
Records are never deduplicated; the merger lets later records win.
"""

import logging
import math
from dataclasses import dataclass, field as dataclass_field
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence, Type

from fieldkit.errors import (
    EntitySerializationError,
    MissingFieldIDError,
    MissingFieldValueError,
    NoButtonTypeError,
    NoCascadingChildError,
    NoCascadingParentError,
    NoCheckBoxTypeError,
    NoComponentsTypeError,
    NoDatePickerTypeError,
    NoDateTimeTypeError,
    NoFloatTypeError,
    NoGroupNameError,
    NoGroupsNameError,
    NoLabelsTypeError,
    NoMultiSelectTypeError,
    NoMultiUserTypeError,
    NoSelectTypeError,
    NoTextTypeError,
    NoURLTypeError,
    NoUserTypeError,
    NoValueTypeError,
)
from fieldkit.schema.document import to_json_value

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value


def _is_zero_date(value: date) -> bool:
    # date.min / datetime.min stand for "no date picked"
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) == datetime.min
    return value == date.min


def _clean_values(values: Optional[Sequence[str]], error: Type[MissingFieldValueError]) -> List[str]:
    """Validate a sequence of option names / account ids"""
    if values is None or isinstance(values, str):
        raise error()

    items = list(values)
    if not items or any(_is_blank(item) for item in items):
        raise error()

    return items


@dataclass
class CustomFields:
    """
    Ordered document of custom field assignments

    Usage:
    ```python
    custom_fields = CustomFields()
    custom_fields.number("customfield_10042", 1000.3232)
    custom_fields.multi_select("customfield_10046", ["Option 1", "Option 3"])
    custom_fields.cascading("customfield_10045", "America", "Costa Rica")
    ```
    """

    ROOT = "fields"

    fields: List[Dict[str, Any]] = dataclass_field(default_factory=list)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.fields)

    def _append(self, field_id: str, value: Any) -> None:
        self.fields.append({self.ROOT: {field_id: value}})
        logger.debug(f"Added {self.ROOT}.{field_id} ({len(self.fields)} records)")

    @staticmethod
    def _check_id(field_id: str, shape: str) -> None:
        if _is_blank(field_id):
            raise MissingFieldIDError(shape=shape)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def text(self, field_id: str, value: str) -> None:
        """Set a single or multi-line text field"""
        self._check_id(field_id, "text")
        if _is_blank(value):
            raise NoTextTypeError()
        self._append(field_id, value)

    def url(self, field_id: str, value: str) -> None:
        """Set a URL field"""
        self._check_id(field_id, "url")
        if _is_blank(value):
            raise NoURLTypeError()
        self._append(field_id, value)

    def number(self, field_id: str, value: float) -> None:
        """
        Set a number field

        Zero is a valid number; None, booleans and non-finite floats are not.
        """
        self._check_id(field_id, "number")
        if (
            value is None
            or isinstance(value, bool)
            or not isinstance(value, (int, float))
            or not math.isfinite(value)
        ):
            raise NoFloatTypeError()
        self._append(field_id, float(value))

    def date(self, field_id: str, value: date) -> None:
        """Set a date-picker field, sent as YYYY-MM-DD"""
        self._check_id(field_id, "date")
        if not isinstance(value, date) or _is_zero_date(value):
            raise NoDatePickerTypeError()
        self._append(field_id, value.strftime(DATE_FORMAT))

    def date_time(self, field_id: str, value: datetime) -> None:
        """
        Set a date-time field, sent as RFC 3339

        Timezone-aware values keep their offset, naive values are sent as-is.
        """
        self._check_id(field_id, "datetime")
        if not isinstance(value, datetime) or _is_zero_date(value):
            raise NoDateTimeTypeError()
        self._append(field_id, value.isoformat(timespec="seconds"))

    def raw(self, field_id: str, value: Any) -> None:
        """
        Set any JSON value the other shapes do not cover

        The value is copied; later changes by the caller are not recorded.
        """
        self._check_id(field_id, "raw")
        if value is None:
            raise NoValueTypeError()
        try:
            value = to_json_value(value)
        except EntitySerializationError as e:
            raise NoValueTypeError(f"no value set: {e}") from e
        self._append(field_id, value)

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def select(self, field_id: str, option: str) -> None:
        """Set a single-select field"""
        self._check_id(field_id, "select")
        if _is_blank(option):
            raise NoSelectTypeError()
        self._append(field_id, {"value": option})

    def radio_button(self, field_id: str, button: str) -> None:
        """Set a radio button field"""
        self._check_id(field_id, "radio_button")
        if _is_blank(button):
            raise NoButtonTypeError()
        self._append(field_id, {"value": button})

    def multi_select(self, field_id: str, options: Sequence[str]) -> None:
        """Set a multi-select field"""
        self._check_id(field_id, "multi_select")
        items = _clean_values(options, NoMultiSelectTypeError)
        self._append(field_id, [{"value": option} for option in items])

    def check_box(self, field_id: str, options: Sequence[str]) -> None:
        """Set a check-box field"""
        self._check_id(field_id, "check_box")
        items = _clean_values(options, NoCheckBoxTypeError)
        self._append(field_id, [{"value": option} for option in items])

    def cascading(self, field_id: str, parent: str, child: str) -> None:
        """
        Set a cascading select field

        Args:
            field_id: Custom field id
            parent: First-level option
            child: Second-level option, required even when parent is given
        """
        self._check_id(field_id, "cascading")
        if _is_blank(parent):
            raise NoCascadingParentError()
        if _is_blank(child):
            raise NoCascadingChildError()
        self._append(field_id, {"value": parent, "child": {"value": child}})

    # ------------------------------------------------------------------
    # Groups and users
    # ------------------------------------------------------------------

    def group(self, field_id: str, group: str) -> None:
        """Set a single group picker"""
        self._check_id(field_id, "group")
        if _is_blank(group):
            raise NoGroupNameError()
        self._append(field_id, {"name": group})

    def groups(self, field_id: str, groups: Sequence[str]) -> None:
        """Set a multi group picker"""
        self._check_id(field_id, "groups")
        items = _clean_values(groups, NoGroupsNameError)
        self._append(field_id, [{"name": group} for group in items])

    def user(self, field_id: str, account_id: str) -> None:
        """Set a single user picker"""
        self._check_id(field_id, "user")
        if _is_blank(account_id):
            raise NoUserTypeError()
        self._append(field_id, {"accountId": account_id})

    def users(self, field_id: str, account_ids: Sequence[str]) -> None:
        """Set a multi user picker"""
        self._check_id(field_id, "users")
        items = _clean_values(account_ids, NoMultiUserTypeError)
        self._append(field_id, [{"accountId": account_id} for account_id in items])


@dataclass
class RequestFields(CustomFields):
    """
    Customer request field values

    Same shapes as CustomFields, recorded under "requestFieldValues", plus the
    system labels and components fields a customer request may set.
    """

    ROOT = "requestFieldValues"

    def labels(self, labels: Sequence[str]) -> None:
        """Set the labels field"""
        items = _clean_values(labels, NoLabelsTypeError)
        self._append("labels", items)

    def components(self, components: Sequence[str]) -> None:
        """Set the components field by component name"""
        items = _clean_values(components, NoComponentsTypeError)
        self._append("components", [{"name": component} for component in items])
