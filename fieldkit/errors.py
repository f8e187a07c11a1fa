"""
Exceptions raised by fieldkit

Three families, each raised synchronously to the direct caller:
- FieldBuildError: a builder rejected an identifier or a value
- EntitySerializationError: an entity could not be turned into a JSON document
- FieldExtractionError: a response buffer could not yield the requested field
"""

from typing import Optional


class FieldKitError(Exception):
    """Base exception for fieldkit errors"""


# ============================================================================
# Construction time
# ============================================================================


class FieldBuildError(FieldKitError, ValueError):
    """Raised when a builder rejects its arguments"""

    message = "invalid field assignment"

    def __init__(self, message: Optional[str] = None, shape: Optional[str] = None):
        self.shape = shape
        super().__init__(message or self.message)


class MissingFieldIDError(FieldBuildError):
    """Raised when the field identifier is empty"""

    message = "no field id set"

    def __init__(self, shape: Optional[str] = None):
        super().__init__(shape=shape)


class MissingFieldValueError(FieldBuildError):
    """Raised when the value is missing or invalid for the field shape"""

    message = "no value set"
    shape_name: Optional[str] = None

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, shape=self.shape_name)


class NoTextTypeError(MissingFieldValueError):
    message = "no text type set"
    shape_name = "text"


class NoFloatTypeError(MissingFieldValueError):
    message = "no float type set"
    shape_name = "number"


class NoDatePickerTypeError(MissingFieldValueError):
    message = "no datepicker type set"
    shape_name = "date"


class NoDateTimeTypeError(MissingFieldValueError):
    message = "no datetime type set"
    shape_name = "datetime"


class NoSelectTypeError(MissingFieldValueError):
    message = "no select type set"
    shape_name = "select"


class NoButtonTypeError(MissingFieldValueError):
    message = "no button type set"
    shape_name = "radio_button"


class NoMultiSelectTypeError(MissingFieldValueError):
    message = "no multiselect type set"
    shape_name = "multi_select"


class NoGroupNameError(MissingFieldValueError):
    message = "no group name set"
    shape_name = "group"


class NoGroupsNameError(MissingFieldValueError):
    message = "no groups names set"
    shape_name = "groups"


class NoUserTypeError(MissingFieldValueError):
    message = "no user type set"
    shape_name = "user"


class NoMultiUserTypeError(MissingFieldValueError):
    message = "no multi-user type set"
    shape_name = "users"


class NoCheckBoxTypeError(MissingFieldValueError):
    message = "no check-box type set"
    shape_name = "check_box"


class NoURLTypeError(MissingFieldValueError):
    message = "no url type set"
    shape_name = "url"


class NoValueTypeError(MissingFieldValueError):
    message = "no value set"
    shape_name = "raw"


class NoLabelsTypeError(MissingFieldValueError):
    message = "no labels type set"
    shape_name = "labels"


class NoComponentsTypeError(MissingFieldValueError):
    message = "no components type set"
    shape_name = "components"


class NoCascadingParentError(MissingFieldValueError):
    message = "no cascading parent value set"
    shape_name = "cascading"


class NoCascadingChildError(MissingFieldValueError):
    message = "no cascading child value set"
    shape_name = "cascading"


class NoEditOperatorError(FieldBuildError):
    """Raised when an edit instruction has no verb"""

    message = "no update operation set"


class NoEditValueError(FieldBuildError):
    """Raised when an edit instruction has no target value"""

    message = "no update operation value set"


# ============================================================================
# Merge time
# ============================================================================


class EntitySerializationError(FieldKitError):
    """Raised when an entity cannot be represented as a JSON document"""


# ============================================================================
# Extraction time
# ============================================================================


class FieldExtractionError(FieldKitError):
    """Base exception for response buffer extraction errors"""

    message = "field extraction failed"

    def __init__(self, message: Optional[str] = None, field_id: Optional[str] = None):
        self.field_id = field_id
        super().__init__(message or self.message)


class MalformedBufferError(FieldExtractionError):
    """Raised when the buffer is not a parseable JSON document"""

    message = "the buffer does not contain a valid JSON document"


class MissingContainerError(FieldExtractionError):
    """Raised when the buffer has no top-level fields object"""

    message = "please provide a buffer with a valid fields object"


class MissingRecordsError(FieldExtractionError):
    """Raised when the buffer has no top-level list of records"""

    message = "please provide a buffer with a valid records list"


class MissingValueError(FieldExtractionError):
    """Raised when the field is null, absent or not decodable as the requested type"""

    message = "no value found for the custom field"


class WrongShapeError(FieldExtractionError):
    """Raised when the field holds a value of another shape"""

    message = "the custom field does not hold the expected shape"

    def __init__(
        self,
        shape: str,
        field_id: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.shape = shape
        super().__init__(message or f"no {shape} type found", field_id=field_id)


class EmptyResultError(FieldExtractionError):
    """Raised when no record in a collection yielded a value"""

    message = "no values were extracted from the records"


# ============================================================================
# Transport
# ============================================================================


class TransportError(FieldKitError):
    """Raised when the HTTP transport fails"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
