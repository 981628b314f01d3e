"""
Scalar property extraction.

Most block fields only need the text of the first run of a property.
Which properties a block has depends on its type, so a missing property
is the normal case and not an error.
"""

import logging
from typing import Optional, Tuple

from ..errors import InlineParseError
from ..models import Block
from .inline import get_first_inline_block


def lookup_prop(block: Block, name: str) -> Optional[str]:
    """
    Return the first-run text of a property.

    Returns:
        The text, or None if the block has no such property

    Raises:
        InlineParseError: If the property is present but malformed
    """
    if name not in block.properties:
        return None
    return get_first_inline_block(block.properties[name])


def get_prop(block: Block, name: str) -> Tuple[str, bool]:
    """
    Return the first-run text of a property and whether it was found.

    A malformed property is reported as not found.
    """
    try:
        value = lookup_prop(block, name)
    except InlineParseError as e:
        logging.debug(f"Ignoring malformed property '{name}' of block {block.id}: {e}")
        return "", False
    if value is None:
        return "", False
    return value, True
