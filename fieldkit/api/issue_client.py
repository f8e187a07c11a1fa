"""Issue tracker API client."""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import requests
from requests.auth import HTTPBasicAuth

from config import ApiConfig
from fieldkit.builder.payload_builder import PayloadMerger
from fieldkit.errors import TransportError
from fieldkit.schema.document import GenericDocument, to_document

logger = logging.getLogger(__name__)

Records = Optional[Iterable[Mapping[str, Any]]]


class IssueClient:
    """
    Sends merged issue payloads and returns raw response bytes

    Raw bytes are what the extractors consume, so read endpoints never decode
    the response themselves.
    """

    def __init__(self, config: ApiConfig, session: Optional[requests.Session] = None):
        """Initialize client."""
        self.config = config
        self.session = session or requests.Session()
        self.merger = PayloadMerger()

        if config.api_user:
            self.session.auth = HTTPBasicAuth(config.api_user, config.api_token)
        elif config.api_token:
            self.session.headers.update({"Authorization": f"Bearer {config.api_token}"})

        self.session.headers.update({"Accept": "application/json"})

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self._url(path)
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(method, url, timeout=self.config.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransportError(f"{method} {path} failed: {e}", status_code=status) from e
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        return response

    def _payload(self, entity: Any, *documents: Records) -> GenericDocument:
        """Merge every non-empty record document into the entity"""
        records: List[Mapping[str, Any]] = []
        for document in documents:
            if document:
                records.extend(document)

        merged = self.merger.merge(entity, records)
        if not merged:
            # Nothing dynamic to send
            return to_document(entity)
        return merged

    def create(self, payload: Any, custom_fields: Records = None) -> Dict[str, Any]:
        """Create an issue, returns the created issue reference."""
        body = self._payload(payload, custom_fields)
        response = self._request("POST", "rest/api/3/issue", json=body)
        return response.json()

    def update(
        self,
        issue_key: str,
        payload: Any,
        custom_fields: Records = None,
        operations: Records = None,
        notify: bool = True,
    ) -> None:
        """Edit an issue with custom field values and edit operations."""
        body = self._payload(payload, custom_fields, operations)
        self._request(
            "PUT",
            f"rest/api/3/issue/{issue_key}",
            json=body,
            params={"notifyUsers": "true" if notify else "false"},
        )

    def get_raw(self, issue_key: str, fields: Optional[List[str]] = None) -> bytes:
        """Get an issue as raw bytes."""
        params = {"fields": ",".join(fields)} if fields else None
        response = self._request("GET", f"rest/api/3/issue/{issue_key}", params=params)
        return response.content

    def search_raw(self, jql: str, fields: Optional[List[str]] = None, max_results: int = 50) -> bytes:
        """Search issues by JQL, returns the raw page of results."""
        body: Dict[str, Any] = {"jql": jql, "maxResults": max_results}
        if fields:
            body["fields"] = list(fields)
        response = self._request("POST", "rest/api/3/search", json=body)
        return response.content

    def create_customer_request(self, payload: Any, fields: Records) -> Dict[str, Any]:
        """Create a customer request with request field values."""
        body = self._payload(payload, fields)
        response = self._request("POST", "rest/servicedeskapi/request", json=body)
        return response.json()
