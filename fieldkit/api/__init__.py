"""API Module - HTTP transport for merged payloads and raw responses"""

from .issue_client import IssueClient

__all__ = ["IssueClient"]
