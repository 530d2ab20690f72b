"""
Shared test fixtures and configuration for pytest
"""
import os
import tempfile

# Keep config and log files out of the real home directory
os.environ["ARCHIVIST_HOME"] = tempfile.mkdtemp(prefix="archivist-test-")

from io import StringIO

import pytest

from archivist.ui.catalog import get_catalog
from archivist.ui.components import InputReader
from archivist.utils.console import create_console, use_console

from tests.test_helpers import FakeRetrieval, FakeSubmission, ScriptedInput


@pytest.fixture
def catalog():
    """English prompt catalog"""
    return get_catalog("en")


@pytest.fixture
def console():
    """Console writing to an in-memory buffer"""
    return create_console(file=StringIO(), width=120, color_system=None)


@pytest.fixture
def scripted_input():
    """Empty scripted line source; tests feed it with ``extend``"""
    return ScriptedInput()


@pytest.fixture
def reader(catalog, console, scripted_input):
    """InputReader wired to the scripted line source and buffer console"""
    return InputReader(catalog, console=console, line_source=scripted_input)


@pytest.fixture
def submission():
    """Fake submission client"""
    return FakeSubmission()


@pytest.fixture
def retrieval():
    """Fake retrieval client with an inbox of two messages"""
    return FakeRetrieval(
        {
            "INBOX": [
                b"From: bob@example.com\r\nTo: alice@example.com\r\nSubject: Hi\r\n\r\nHello\r\n",
                (
                    b"Received: by mx.example.com\r\n"
                    b"From: carol@example.com\r\n"
                    b"To: alice@example.com\r\n"
                    b"Subject: Re: Hi\r\n"
                    b"Content-Type: text/plain; charset=utf-8\r\n"
                    b"\r\n"
                    b"Hi back\r\n"
                ),
            ],
            "Sent": [],
        }
    )


def output_of(console):
    """Everything printed to a buffer console so far"""
    return console.file.getvalue()


@pytest.fixture
def shared_console(console):
    """Install the buffer console as the shared console for the test"""
    use_console(console)
    yield console
    use_console(None)
