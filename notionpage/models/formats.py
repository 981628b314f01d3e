"""
Format payload models for Notionpage.

Each recognized block type stores display settings in a type-specific
"format" object. These models are the decoded form of that object; keys
that are not modelled here are ignored.
"""

from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class FormatBase(BaseModel):
    """Common configuration for all format variants."""

    model_config = ConfigDict(extra="ignore", strict=True)


class FormatPage(FormatBase):
    """Format of a page block."""

    page_full_width: Optional[bool] = None
    page_small_text: Optional[bool] = None
    page_cover: Optional[str] = Field(
        default=None,
        description="Cover image, either relative to the document host or absolute"
    )
    page_cover_position: Optional[float] = None
    page_icon: Optional[str] = Field(
        default=None,
        description="Emoji or image URL used as page icon"
    )
    page_font: Optional[str] = None
    block_locked: Optional[bool] = None
    block_locked_by: Optional[str] = None

    page_cover_url: str = Field(
        default="",
        description="Proxied, fetchable URL of page_cover"
    )


class FormatBookmark(FormatBase):
    """Format of a bookmark block."""

    bookmark_icon: Optional[str] = None
    bookmark_cover: Optional[str] = None
    block_color: Optional[str] = None


class FormatImage(FormatBase):
    """Format of an image block."""

    block_aspect_ratio: Optional[float] = None
    block_full_width: Optional[bool] = None
    block_page_width: Optional[bool] = None
    block_preserve_scale: Optional[bool] = None
    block_width: Optional[float] = None
    block_height: Optional[float] = None
    display_source: Optional[str] = None

    image_url: str = Field(
        default="",
        description="Proxied, fetchable URL of display_source"
    )


class FormatColumn(FormatBase):
    """Format of a column block."""

    column_ratio: Optional[float] = Field(
        default=None,
        description="Share of the column list width taken by this column"
    )


class TableProperty(FormatBase):
    """Visibility and width of one column of a simple table."""

    property: str
    visible: bool = True
    width: Optional[float] = None


class FormatTable(FormatBase):
    """Format of a table block."""

    table_wrap: Optional[bool] = None
    table_properties: List[TableProperty] = Field(default_factory=list)


class FormatText(FormatBase):
    """Format of a text block."""

    block_color: Optional[str] = None


class FormatVideo(FormatBase):
    """Format of a video block."""

    block_width: Optional[float] = None
    block_height: Optional[float] = None
    block_full_width: Optional[bool] = None
    block_page_width: Optional[bool] = None
    block_aspect_ratio: Optional[float] = None
    block_preserve_scale: Optional[bool] = None
    display_source: Optional[str] = None


class FormatEmbed(FormatBase):
    """Format of an embed block."""

    block_width: Optional[float] = None
    block_height: Optional[float] = None
    block_full_width: Optional[bool] = None
    block_page_width: Optional[bool] = None
    block_aspect_ratio: Optional[float] = None
    block_preserve_scale: Optional[bool] = None
    display_source: Optional[str] = None


BlockFormat = Union[
    FormatPage,
    FormatBookmark,
    FormatImage,
    FormatColumn,
    FormatTable,
    FormatText,
    FormatVideo,
    FormatEmbed,
]


# Block type tag -> format model of the recognized types
FORMAT_MODELS = {
    "page": FormatPage,
    "bookmark": FormatBookmark,
    "image": FormatImage,
    "column": FormatColumn,
    "table": FormatTable,
    "text": FormatText,
    "video": FormatVideo,
    "embed": FormatEmbed,
}
