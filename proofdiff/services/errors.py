"""Exceptions raised by the proofdiff services"""

from __future__ import annotations


class ProofdiffError(Exception):
    """Base class for service errors"""


class InputTooLongError(ProofdiffError):
    """Text exceeds the configured alignment length gate"""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Input of {length} characters exceeds the limit of {limit}")


class IssueNotFoundError(ProofdiffError, KeyError):
    """No issue with the requested id in the session"""

    def __init__(self, issue_id: int):
        self.issue_id = issue_id
        super().__init__(f"Issue {issue_id} not found")

    def __str__(self) -> str:
        return self.args[0]


class SessionNotFoundError(ProofdiffError, KeyError):
    """No proofreading session with the requested id"""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")

    def __str__(self) -> str:
        return self.args[0]


class CorrectionParseError(ProofdiffError, ValueError):
    """A correction payload contains no JSON at all"""
