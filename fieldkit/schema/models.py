"""Entity and custom-field value models.

Entities (IssueScheme, CustomerRequestPayload) are what callers merge custom
fields into; value models are the decode targets of the specialized
extractors. Attribute names are snake_case, wire names are the aliases.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base model accepting both wire aliases and attribute names."""

    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Entities
# ============================================================================


class ProjectScheme(WireModel):
    """Project reference."""

    id: Optional[str] = None
    key: Optional[str] = None
    name: Optional[str] = None


class IssueTypeScheme(WireModel):
    """Issue type reference."""

    id: Optional[str] = None
    name: Optional[str] = None


class PriorityScheme(WireModel):
    """Priority reference."""

    id: Optional[str] = None
    name: Optional[str] = None


class UserScheme(WireModel):
    """User reference."""

    account_id: Optional[str] = Field(default=None, alias="accountId")
    display_name: Optional[str] = Field(default=None, alias="displayName")
    email_address: Optional[str] = Field(default=None, alias="emailAddress")


class ComponentScheme(WireModel):
    """Component reference."""

    id: Optional[str] = None
    name: Optional[str] = None


class VersionScheme(WireModel):
    """Version reference."""

    id: Optional[str] = None
    name: Optional[str] = None


class ParentScheme(WireModel):
    """Parent issue reference."""

    id: Optional[str] = None
    key: Optional[str] = None


class IssueFieldsScheme(WireModel):
    """Statically known issue attributes."""

    summary: Optional[str] = None
    description: Optional[Union[str, Dict[str, Any]]] = None
    project: Optional[ProjectScheme] = None
    issue_type: Optional[IssueTypeScheme] = Field(default=None, alias="issuetype")
    priority: Optional[PriorityScheme] = None
    assignee: Optional[UserScheme] = None
    reporter: Optional[UserScheme] = None
    parent: Optional[ParentScheme] = None
    labels: Optional[List[str]] = None
    components: Optional[List[ComponentScheme]] = None
    fix_versions: Optional[List[VersionScheme]] = Field(default=None, alias="fixVersions")
    versions: Optional[List[VersionScheme]] = None
    due_date: Optional[str] = Field(default=None, alias="duedate")


class IssueScheme(WireModel):
    """Issue entity as sent to and received from the issue endpoints."""

    id: Optional[str] = None
    key: Optional[str] = None
    self_url: Optional[str] = Field(default=None, alias="self")
    fields: Optional[IssueFieldsScheme] = None


class CustomerRequestPayload(WireModel):
    """Customer request entity for the service desk request endpoint."""

    service_desk_id: Optional[str] = Field(default=None, alias="serviceDeskId")
    request_type_id: Optional[str] = Field(default=None, alias="requestTypeId")
    request_participants: Optional[List[str]] = Field(default=None, alias="requestParticipants")
    raise_on_behalf_of: Optional[str] = Field(default=None, alias="raiseOnBehalfOf")
    channel: Optional[str] = None


# ============================================================================
# Custom field values
# ============================================================================


class CustomFieldOption(WireModel):
    """Option of a select, multi-select or check-box field."""

    id: str
    value: str
    option_id: Optional[str] = Field(default=None, alias="optionId")
    disabled: bool = False
    self_url: Optional[str] = Field(default=None, alias="self")


class GroupDetail(WireModel):
    """Group picked in a group-picker field."""

    name: str
    group_id: Optional[str] = Field(default=None, alias="groupId")
    self_url: Optional[str] = Field(default=None, alias="self")


class UserDetail(WireModel):
    """User picked in a user-picker field.

    The e-mail address is only returned for users whose privacy settings
    expose it.
    """

    account_id: str = Field(alias="accountId")
    display_name: Optional[str] = Field(default=None, alias="displayName")
    email_address: Optional[str] = Field(default=None, alias="emailAddress")
    active: Optional[bool] = None
    time_zone: Optional[str] = Field(default=None, alias="timeZone")
    account_type: Optional[str] = Field(default=None, alias="accountType")
    self_url: Optional[str] = Field(default=None, alias="self")


class CascadingSelectChild(WireModel):
    """Second level of a cascading select."""

    id: str
    value: str
    self_url: Optional[str] = Field(default=None, alias="self")


class CascadingSelect(WireModel):
    """First level of a cascading select, with its nested child."""

    id: str
    value: str
    child: Optional[CascadingSelectChild] = None
    self_url: Optional[str] = Field(default=None, alias="self")


class VersionDetail(WireModel):
    """Version picked in a version-picker field."""

    id: str
    name: str
    description: Optional[str] = None
    archived: bool = False
    released: bool = False
    release_date: Optional[str] = Field(default=None, alias="releaseDate")
    self_url: Optional[str] = Field(default=None, alias="self")


class SprintDetail(WireModel):
    """Sprint referenced by the sprint field."""

    id: int
    name: str
    state: Optional[str] = None
    board_id: Optional[int] = Field(default=None, alias="boardId")
    goal: Optional[str] = None
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    complete_date: Optional[str] = Field(default=None, alias="completeDate")


class AssetReference(WireModel):
    """Asset object referenced by an assets field."""

    workspace_id: str = Field(alias="workspaceId")
    id: str
    object_id: str = Field(alias="objectId")


class TempoAccount(WireModel):
    """External account reference with a numeric identifier."""

    id: int
    value: str


class RequestTypeDetail(WireModel):
    id: str
    name: str
    description: Optional[str] = None
    help_text: Optional[str] = Field(default=None, alias="helpText")
    issue_type_id: Optional[str] = Field(default=None, alias="issueTypeId")
    service_desk_id: Optional[str] = Field(default=None, alias="serviceDeskId")
    portal_id: Optional[str] = Field(default=None, alias="portalId")
    group_ids: List[str] = Field(default_factory=list, alias="groupIds")


class RequestStatus(WireModel):
    status: str
    status_category: Optional[str] = Field(default=None, alias="statusCategory")


class RequestTypeReference(WireModel):
    """Request type field of a service desk issue."""

    request_type: RequestTypeDetail = Field(alias="requestType")
    current_status: Optional[RequestStatus] = Field(default=None, alias="currentStatus")
