"""Login feature: credential entry and the connection retry state machine.

Public API:
    CredentialBuilder - prompts for address/password and builds a Session
    LoginStateMachine - connects submission then retrieval, retrying on failure
    RetryPolicy - retry budget and backoff for the state machine
"""

from .credentials import CredentialBuilder
from .workflow import AuthenticatedSession, LoginStage, LoginStateMachine, RetryPolicy

__all__ = [
    "AuthenticatedSession",
    "CredentialBuilder",
    "LoginStage",
    "LoginStateMachine",
    "RetryPolicy",
]
