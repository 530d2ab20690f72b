"""SMTP submission client."""

from .client import SMTPSubmissionClient, SubmissionClient, get_smtp_client

__all__ = ["SMTPSubmissionClient", "SubmissionClient", "get_smtp_client"]
