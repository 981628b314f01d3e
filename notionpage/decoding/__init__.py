"""Block and page decoding."""

from .inline import get_first_inline, get_first_inline_block, inline_to_plain_text, parse_inline_blocks
from .properties import get_prop, lookup_prop
from .urls import make_image_url, with_width
from .formats import FormatRegistry, FormatSpec, decode_format, format_registry
from .resolver import parse_format, parse_properties, resolve_block
from .page import PageDecoder, block_from_record, to_dash_id

__all__ = [
    "get_first_inline",
    "get_first_inline_block",
    "inline_to_plain_text",
    "parse_inline_blocks",
    "get_prop",
    "lookup_prop",
    "make_image_url",
    "with_width",
    "FormatRegistry",
    "FormatSpec",
    "decode_format",
    "format_registry",
    "parse_format",
    "parse_properties",
    "resolve_block",
    "PageDecoder",
    "block_from_record",
    "to_dash_id",
]
