"""Data models for Notionpage."""

from .inline import InlineToken
from .formats import (
    BlockFormat,
    FormatBookmark,
    FormatColumn,
    FormatEmbed,
    FormatImage,
    FormatPage,
    FormatTable,
    FormatText,
    FormatVideo,
    TableProperty,
)
from .block import Block, BlockType
from .operations import Operation
from .page import Collection, CollectionView, Page, Table, User

__all__ = [
    "InlineToken",
    "BlockFormat",
    "FormatBookmark",
    "FormatColumn",
    "FormatEmbed",
    "FormatImage",
    "FormatPage",
    "FormatTable",
    "FormatText",
    "FormatVideo",
    "TableProperty",
    "Block",
    "BlockType",
    "Operation",
    "Collection",
    "CollectionView",
    "Page",
    "Table",
    "User",
]
