"""Global constants shared by the werror package."""

from __future__ import annotations

API_VERSION = "1.0"
"""Version of the public call contract exposed by ``werror``."""

STATUS_CLIENT_CLOSED_REQUEST = 499
"""Non-standard status used when the client went away before a response."""

NO_VALUE = "<no value>"
"""Marker printed by message templates for unresolved placeholders."""

DEFAULT_LEFT_DELIM = "{{"
DEFAULT_RIGHT_DELIM = "}}"
