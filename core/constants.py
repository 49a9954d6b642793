"""
Core system constants.

Only place true invariants here (wire codes, placeholder text, patterns).
"""

from __future__ import annotations

import re


# Code assigned to errors that arrive as plain text
UNKNOWN_CODE = "unknown"

# Text rendered for associations that were never loaded
ASSOCIATION_PLACEHOLDER = "association"

# Template placeholders look like %{count}
TEMPLATE_PLACEHOLDER_PATTERN = re.compile(r"%\{(\w+)\}")

# Tags accepted on raw (tag, value) resolver tuples
OK_TAG = "ok"
ERROR_TAG = "error"
