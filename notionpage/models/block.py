"""
Block model for Notionpage.

A Block starts life as a raw record (type tag, property bag, format
payload). The decoding pass fills in the typed fields below exactly once.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional
from pydantic import BaseModel, Field, model_validator

from .formats import (
    FORMAT_MODELS,
    BlockFormat,
    FormatBookmark,
    FormatColumn,
    FormatEmbed,
    FormatImage,
    FormatPage,
    FormatTable,
    FormatText,
    FormatVideo,
)
from .inline import InlineToken


class BlockType(str, Enum):
    """Known block type tags."""

    PAGE = "page"
    TEXT = "text"
    CODE = "code"
    TODO = "to_do"
    IMAGE = "image"
    BOOKMARK = "bookmark"
    FILE = "file"
    GIST = "gist"
    EMBED = "embed"
    VIDEO = "video"
    AUDIO = "audio"
    PDF = "pdf"
    DRIVE = "drive"
    TWEET = "tweet"
    MAPS = "maps"
    FIGMA = "figma"
    CODEPEN = "codepen"
    COLUMN = "column"
    COLUMN_LIST = "column_list"
    TABLE = "table"
    TABLE_ROW = "table_row"
    COLLECTION_VIEW = "collection_view"
    COLLECTION_VIEW_PAGE = "collection_view_page"
    HEADER = "header"
    SUB_HEADER = "sub_header"
    SUB_SUB_HEADER = "sub_sub_header"
    QUOTE = "quote"
    CALLOUT = "callout"
    TOGGLE = "toggle"
    DIVIDER = "divider"
    BULLETED_LIST = "bulleted_list"
    NUMBERED_LIST = "numbered_list"
    EQUATION = "equation"
    TABLE_OF_CONTENTS = "table_of_contents"
    BREADCRUMB = "breadcrumb"
    FACTORY = "factory"
    COMMENT = "comment"


IMAGE_BLOCK_TYPES = frozenset({BlockType.IMAGE.value})

COLLECTION_BLOCK_TYPES = frozenset({
    BlockType.COLLECTION_VIEW.value,
    BlockType.COLLECTION_VIEW_PAGE.value,
})


class Block(BaseModel):
    """
    A single node of a page tree.
    """

    id: str = Field(
        ...,
        description="Unique ID of the block"
    )

    type: str = Field(
        ...,
        description="Type tag; see BlockType for the known values"
    )

    properties: Dict[str, Any] = Field(
        default_factory=dict,
        description="Property bag: property name -> nested rich-text runs"
    )

    format_raw: bytes = Field(
        default=b"",
        description="Raw JSON of the type-specific format object"
    )

    parent_id: Optional[str] = None
    parent_table: Optional[str] = None
    alive: bool = True
    version: Optional[int] = None
    created_time: Optional[int] = None
    last_edited_time: Optional[int] = None

    content: List[str] = Field(
        default_factory=list,
        description="IDs of child blocks, in display order"
    )

    children: List['Block'] = Field(
        default_factory=list,
        description="Decoded child blocks, in the order given by content"
    )

    # Decoded fields

    title: str = ""
    code: str = ""
    code_language: str = ""
    description: str = ""
    link: str = ""
    source: str = ""
    image_url: str = ""
    file_size: str = ""
    is_checked: bool = False

    inline_content: List[InlineToken] = Field(
        default_factory=list,
        description="Full rich-text content of the 'title' property for non-page, non-code blocks"
    )

    format: Optional[BlockFormat] = Field(
        default=None,
        description="Decoded format; for recognized types the variant matches the block type"
    )

    @model_validator(mode="after")
    def _check_format_variant(self) -> 'Block':
        expected = FORMAT_MODELS.get(self.type)
        if self.format is not None and expected is not None and not isinstance(self.format, expected):
            raise ValueError(
                f"{type(self.format).__name__} is not the format of a {self.type} block"
            )
        return self

    def is_image(self) -> bool:
        """Return True if the block displays an image from its source."""
        return self.type in IMAGE_BLOCK_TYPES

    def is_page(self) -> bool:
        return self.type == BlockType.PAGE.value

    def is_collection(self) -> bool:
        return self.type in COLLECTION_BLOCK_TYPES

    def walk(self) -> Iterator['Block']:
        """Yield this block and all of its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def _format_as(self, cls):
        if isinstance(self.format, cls):
            return self.format
        return None

    @property
    def format_page(self) -> Optional[FormatPage]:
        return self._format_as(FormatPage)

    @property
    def format_bookmark(self) -> Optional[FormatBookmark]:
        return self._format_as(FormatBookmark)

    @property
    def format_image(self) -> Optional[FormatImage]:
        return self._format_as(FormatImage)

    @property
    def format_column(self) -> Optional[FormatColumn]:
        return self._format_as(FormatColumn)

    @property
    def format_table(self) -> Optional[FormatTable]:
        return self._format_as(FormatTable)

    @property
    def format_text(self) -> Optional[FormatText]:
        return self._format_as(FormatText)

    @property
    def format_video(self) -> Optional[FormatVideo]:
        return self._format_as(FormatVideo)

    @property
    def format_embed(self) -> Optional[FormatEmbed]:
        return self._format_as(FormatEmbed)


# Enable forward references for self-referencing model
Block.model_rebuild()
