"""
Unit tests for the generic Field Extractor Module

Tests:
- Buffer parsing: bytes, str, file-like objects, malformed input
- extract_field: error priority, caller-chosen targets, dotted identifiers
- extract_fields: collection rules, skipped records, empty results
"""

import io
import json
from dataclasses import dataclass
from typing import Dict, List, Optional

import pytest
from pydantic import BaseModel
from typing_extensions import TypedDict

from fieldkit.errors import (
    EmptyResultError,
    FieldExtractionError,
    MalformedBufferError,
    MissingContainerError,
    MissingRecordsError,
    MissingValueError,
)
from fieldkit.extractor import FieldExtractor, extract_field, extract_fields
from fieldkit.extractor.field_extractor import parse_buffer
from fieldkit.extractor.paths import MISSING, join_path, lookup, split_path


class CustomType(BaseModel):
    """Caller-defined target model"""

    MyFieldName: str


@dataclass
class Option:
    """Caller-defined dataclass target"""

    id: str
    value: str


class OptionDict(TypedDict):
    id: str
    value: str


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def issue_buffer():
    """Single issue response with assorted custom fields"""
    return json.dumps(
        {
            "id": "10001",
            "key": "KP-1",
            "fields": {
                "summary": "Sample issue",
                "customfield_10000": {"MyFieldName": "hello"},
                "customfield_10046": [{"id": "10044", "value": "Option 1"}],
                "customfield_10042": 1000.3232,
                "customfield_10050": None,
                "custom.field": "dotted",
            },
        }
    ).encode("utf-8")


@pytest.fixture
def search_buffer():
    """Search response with one record per null/absent/valid case"""
    return json.dumps(
        {
            "startAt": 0,
            "maxResults": 50,
            "total": 4,
            "issues": [
                {"key": "KP-1", "fields": {"customfield_10000": {"MyFieldName": "one"}}},
                {"key": "KP-2", "fields": {"customfield_10000": None}},
                {"key": "KP-3", "fields": {"summary": "no custom field"}},
                {"key": "KP-4", "fields": {"customfield_10000": {"MyFieldName": "four"}}},
                {"key": "KP-5", "fields": {"customfield_10000": "wrong shape"}},
            ],
        }
    ).encode("utf-8")


# ============================================================================
# TEST: Paths
# ============================================================================


class TestPaths:
    """Tests for dot-path navigation"""

    def test_join_escapes_dots(self):
        """Test dotted identifiers stay one segment"""
        assert split_path(join_path("fields", "custom.field")) == ["fields", "custom.field"]

    def test_backslash_round_trip(self):
        """Test backslashes inside identifiers survive escaping"""
        assert split_path(join_path("a\\b", "c")) == ["a\\b", "c"]

    def test_lookup_distinguishes_null_and_absent(self):
        """Test explicit null is None, absent is MISSING"""
        data = {"fields": {"a": None}}

        assert lookup(data, "fields.a") is None
        assert lookup(data, "fields.b") is MISSING

    def test_lookup_does_not_index_lists(self):
        """Test traversal stops at non-dict values"""
        assert lookup({"fields": [{"a": 1}]}, "fields.a") is MISSING


# ============================================================================
# TEST: Buffer parsing
# ============================================================================


class TestParseBuffer:
    """Tests for accepted buffer types"""

    @pytest.mark.parametrize(
        "buffer",
        [
            b'{"fields": {}}',
            bytearray(b'{"fields": {}}'),
            '{"fields": {}}',
            io.BytesIO(b'{"fields": {}}'),
            io.StringIO('{"fields": {}}'),
        ],
    )
    def test_accepted_types(self, buffer):
        """Test bytes, str and file-like buffers parse the same way"""
        assert parse_buffer(buffer) == {"fields": {}}

    @pytest.mark.parametrize("buffer", [b"", b"{not json", b"\xff\xfe\x00", None])
    def test_malformed(self, buffer):
        """Test unparseable buffers raise MalformedBufferError"""
        with pytest.raises(MalformedBufferError):
            parse_buffer(buffer)


# ============================================================================
# TEST: extract_field
# ============================================================================


class TestExtractField:
    """Tests for single-record extraction"""

    def test_model_target(self, issue_buffer):
        """Test decoding into a caller model"""
        value = extract_field(issue_buffer, "customfield_10000", CustomType)

        assert isinstance(value, CustomType)
        assert value.MyFieldName == "hello"

    def test_dataclass_and_typeddict_targets(self, issue_buffer):
        """Test dataclass and TypedDict targets"""
        options = extract_field(issue_buffer, "customfield_10046", List[Option])
        dict_options = extract_field(issue_buffer, "customfield_10046", List[OptionDict])

        assert options == [Option(id="10044", value="Option 1")]
        assert dict_options == [{"id": "10044", "value": "Option 1"}]

    def test_builtin_target(self, issue_buffer):
        """Test decoding into a builtin"""
        assert extract_field(issue_buffer, "customfield_10042", float) == 1000.3232

    def test_no_lax_coercion(self):
        """Test numeric strings and booleans do not decode as numbers"""
        buffer = b'{"fields": {"customfield_1": "12", "customfield_2": true}}'

        with pytest.raises(MissingValueError):
            extract_field(buffer, "customfield_1", float)
        with pytest.raises(MissingValueError):
            extract_field(buffer, "customfield_2", int)

    def test_dotted_identifier(self, issue_buffer):
        """Test identifiers containing dots are addressable"""
        assert extract_field(issue_buffer, "custom.field", str) == "dotted"

    def test_null_field(self, issue_buffer):
        """Test null value raises MissingValueError"""
        with pytest.raises(MissingValueError) as error:
            extract_field(issue_buffer, "customfield_10050", CustomType)

        assert error.value.field_id == "customfield_10050"

    def test_absent_field(self, issue_buffer):
        """Test absent field raises MissingValueError"""
        with pytest.raises(MissingValueError):
            extract_field(issue_buffer, "customfield_99999", CustomType)

    def test_wrong_type_is_missing_value(self, issue_buffer):
        """Test undecodable value raises the same MissingValueError"""
        with pytest.raises(MissingValueError):
            extract_field(issue_buffer, "customfield_10042", CustomType)

    def test_empty_identifier(self, issue_buffer):
        """Test empty identifier never resolves to the container itself"""
        with pytest.raises(MissingValueError):
            extract_field(issue_buffer, "", Dict[str, object])

    def test_missing_container(self):
        """Test buffer without fields object raises MissingContainerError"""
        with pytest.raises(MissingContainerError):
            extract_field(b'{"id": "10001"}', "customfield_10000", CustomType)

    def test_container_not_an_object(self):
        """Test a non-object fields value counts as missing"""
        with pytest.raises(MissingContainerError):
            extract_field(b'{"fields": []}', "customfield_10000", CustomType)

    def test_malformed_before_container(self):
        """Test malformed input is reported first"""
        with pytest.raises(MalformedBufferError):
            extract_field(b"{", "customfield_10000", CustomType)

    def test_container_before_value(self):
        """Test missing container is reported before a missing value"""
        with pytest.raises(MissingContainerError):
            extract_field(b"[]", "customfield_10000", CustomType)

    def test_custom_container(self):
        """Test extracting from another container name"""
        buffer = b'{"requestFieldValues": {"summary": "Help"}}'

        assert extract_field(buffer, "summary", str, container="requestFieldValues") == "Help"

    def test_errors_share_base_class(self):
        """Test extraction errors are FieldExtractionError"""
        with pytest.raises(FieldExtractionError):
            extract_field(b'{"fields": {}}', "customfield_10000", CustomType)


# ============================================================================
# TEST: extract_fields
# ============================================================================


class TestExtractFields:
    """Tests for collection extraction"""

    def test_skips_null_absent_and_undecodable(self, search_buffer):
        """Test only decodable records are returned, keyed by issue key"""
        values = extract_fields(search_buffer, "customfield_10000", CustomType)

        assert list(values) == ["KP-1", "KP-4"]
        assert values["KP-1"].MyFieldName == "one"
        assert values["KP-4"].MyFieldName == "four"

    def test_missing_records_for_any_field(self, issue_buffer):
        """Test buffer without issues list raises MissingRecordsError"""
        for field_id in ("customfield_10000", "summary", "anything"):
            with pytest.raises(MissingRecordsError):
                extract_fields(issue_buffer, field_id, CustomType)

    def test_empty_result(self, search_buffer):
        """Test no decodable record raises EmptyResultError"""
        with pytest.raises(EmptyResultError):
            extract_fields(search_buffer, "customfield_99999", CustomType)

    def test_empty_issue_list(self):
        """Test empty issues list raises EmptyResultError"""
        with pytest.raises(EmptyResultError):
            extract_fields(b'{"issues": []}', "customfield_10000", CustomType)

    def test_malformed(self):
        """Test malformed bytes raise MalformedBufferError"""
        with pytest.raises(MalformedBufferError):
            extract_fields(b"not json", "customfield_10000", CustomType)

    def test_custom_records_and_key(self):
        """Test other record list and key names"""
        buffer = json.dumps(
            {"values": [{"issueKey": "SD-1", "fields": {"customfield_1": 3}}]}
        ).encode("utf-8")

        values = extract_fields(buffer, "customfield_1", int, records="values", key="issueKey")

        assert values == {"SD-1": 3}

    def test_non_string_keys_are_stringified(self):
        """Test numeric record keys become strings"""
        buffer = b'{"issues": [{"key": 10001, "fields": {"customfield_1": "a"}}]}'

        assert extract_fields(buffer, "customfield_1", str) == {"10001": "a"}


# ============================================================================
# TEST: FieldExtractor
# ============================================================================


class TestFieldExtractor:
    """Tests for the reusable extractor"""

    def test_single_and_collection(self, issue_buffer, search_buffer):
        """Test one extractor serves both modes"""
        extractor = FieldExtractor(Optional[CustomType])

        assert extractor.extract(issue_buffer, "customfield_10000").MyFieldName == "hello"
        assert set(extractor.extract_all(search_buffer, "customfield_10000")) == {"KP-1", "KP-4"}

    def test_file_like_buffer(self, issue_buffer):
        """Test file-like buffers are read"""
        extractor = FieldExtractor(CustomType)

        assert extractor.extract(io.BytesIO(issue_buffer), "customfield_10000").MyFieldName == "hello"
