"""Archivist: an interactive mail user agent for SMTP and IMAP."""

__version__ = "0.1.0"
