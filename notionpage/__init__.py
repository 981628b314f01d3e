"""
Notionpage: typed decoding of document pages and blocks.

Turns raw block records (type tag, rich-text property bag, format payload)
into typed Block trees and builds edit operations for pages.
"""

__version__ = "0.1.0"
__author__ = "Notionpage Project"

# Import main components
from .models import Block, BlockType, InlineToken, Operation, Page, Table, User
from .decoding import PageDecoder, decode_format, make_image_url, parse_inline_blocks, resolve_block
from .importers import BaseImporter, MockImporter, RecordMapImporter
from .mutations import RecordingClient, TransactionClient

__all__ = [
    "Block",
    "BlockType",
    "InlineToken",
    "Operation",
    "Page",
    "Table",
    "User",
    "PageDecoder",
    "decode_format",
    "make_image_url",
    "parse_inline_blocks",
    "resolve_block",
    "BaseImporter",
    "MockImporter",
    "RecordMapImporter",
    "RecordingClient",
    "TransactionClient",
]
