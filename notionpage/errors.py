"""
Error types for Notionpage.

Absence of data is never an error. These exceptions cover data that is
present but malformed, and requests that are rejected before they reach
the transaction client.
"""

from typing import Any, Optional


SNIPPET_LENGTH = 200


def make_snippet(raw: Any, limit: int = SNIPPET_LENGTH) -> str:
    """Render a raw payload as a short printable string for error messages."""
    if isinstance(raw, (bytes, bytearray)):
        text = bytes(raw).decode("utf-8", errors="replace")
    else:
        text = repr(raw)
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class NotionPageError(Exception):
    """Base class for all Notionpage errors."""


class InlineParseError(NotionPageError):
    """
    Raised when a rich-text value does not have the expected run structure.
    """

    def __init__(self, message: str, value: Any = None):
        self.value = value
        super().__init__(f"{message}: {make_snippet(value)}")


class PropertyDecodeError(NotionPageError):
    """
    Raised when a property that is required to decode a block is malformed.
    """

    def __init__(self, field: str, block_type: str, block_id: str = "", cause: Optional[Exception] = None):
        self.field = field
        self.block_type = block_type
        self.block_id = block_id
        self.cause = cause
        super().__init__(
            f"failed to decode property '{field}' of {block_type} block '{block_id}': {cause}"
        )


class FormatDecodeError(NotionPageError):
    """
    Raised when the format payload of a recognized block type does not
    match the schema for that type.
    """

    def __init__(self, block_type: str, raw: bytes, cause: Optional[Exception] = None):
        self.block_type = block_type
        self.raw = raw
        self.cause = cause
        super().__init__(
            f"failed to decode format of {block_type} block: {cause}, format: '{make_snippet(raw)}'"
        )


class BlockDecodeError(NotionPageError):
    """A hard decoding failure of a single block inside a page tree."""

    def __init__(self, block_id: str, block_type: str, cause: Exception):
        self.block_id = block_id
        self.block_type = block_type
        self.cause = cause
        super().__init__(f"block {block_id} ({block_type}): {cause}")


class PageNotFoundError(NotionPageError):
    """Raised when a record map does not contain the requested root block."""


class InvalidRequestError(NotionPageError, ValueError):
    """Raised when a mutation helper is called with invalid arguments."""
