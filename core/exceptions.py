"""
Exceptions raised by the payload core.

Validation failures reported by resolvers are data and never raised. The
classes here signal defects in the calling code.
"""

from typing import Any


class MessageContractError(TypeError):
    """Raised when a resolver hands over an error that is not a message or text."""

    def __init__(self, entry: Any):
        self.entry = entry
        super().__init__(f"Unexpected validation message: {entry!r}")
