"""Centralized path definitions for the Archivist application.

Every path hangs off ``ARCHIVIST_DIR``, which defaults to ``~/.archivist`` and
can be moved with the ``ARCHIVIST_HOME`` environment variable.
"""

import os
from pathlib import Path

# Base application directory
ARCHIVIST_DIR = Path(
    os.environ.get("ARCHIVIST_HOME", str(Path.home() / ".archivist"))
).expanduser()

# Subdirectories
LOGS_DIR = ARCHIVIST_DIR / "logs"

# Specific files
CONFIG_PATH = ARCHIVIST_DIR / "config.json"
