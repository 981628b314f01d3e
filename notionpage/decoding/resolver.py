"""
Block decoding for Notionpage.

resolve_block() populates the typed fields of a raw block from its
property bag and format payload. The steps run in a fixed order: later
steps read fields set by earlier ones.
"""

from typing import Optional

from ..errors import InlineParseError, PropertyDecodeError
from ..models import Block, BlockType
from .formats import FormatRegistry, decode_format
from .inline import get_first_inline_block, parse_inline_blocks
from .properties import get_prop
from .urls import make_image_url


def _merge_prop(block: Block, name: str, attr: str, keep_existing: bool = False) -> None:
    """
    Copy a scalar property into a block field.

    With keep_existing, a value already set from structured record data
    takes precedence over the property bag.
    """
    if keep_existing and getattr(block, attr):
        return
    value, found = get_prop(block, name)
    if found:
        setattr(block, attr, value)


def _parse_title(block: Block) -> None:
    title = block.properties.get("title")
    try:
        if block.type == BlockType.PAGE.value:
            block.title = get_first_inline_block(title)
        elif block.type == BlockType.CODE.value:
            block.code = get_first_inline_block(title)
        else:
            block.inline_content = parse_inline_blocks(title)
    except InlineParseError as e:
        raise PropertyDecodeError("title", block.type, block.id, e) from e


def parse_properties(block: Block) -> None:
    """
    Populate scalar fields and inline content from the property bag.

    Raises:
        PropertyDecodeError: If the 'title' property is malformed
    """
    if "title" in block.properties:
        _parse_title(block)

    if block.type == BlockType.TODO.value:
        checked, _ = get_prop(block, "checked")
        block.is_checked = checked.casefold() == "yes"

    # bookmark
    _merge_prop(block, "description", "description")
    _merge_prop(block, "link", "link")

    # bookmark, image, gist, file, embed
    _merge_prop(block, "source", "source", keep_existing=True)

    if block.source and block.is_image():
        block.image_url = make_image_url(block.source)

    # code
    _merge_prop(block, "language", "code_language")

    if block.type == BlockType.FILE.value:
        _merge_prop(block, "size", "file_size")


def parse_format(block: Block, registry: Optional[FormatRegistry] = None) -> None:
    """
    Decode the block's format payload into block.format.

    Raises:
        FormatDecodeError: If the payload does not match the block type's schema
    """
    block.format = decode_format(block.type, block.format_raw, registry)


def resolve_block(block: Block, registry: Optional[FormatRegistry] = None) -> Block:
    """
    Decode a raw block in place.

    Args:
        block: Block with id, type, properties and format_raw set
        registry: Format registry to use (the global one by default)

    Returns:
        The same block, for chaining

    Raises:
        PropertyDecodeError: If the title cannot be decoded
        FormatDecodeError: If the format payload is malformed
    """
    parse_properties(block)
    parse_format(block, registry)
    return block
