"""
Inline content model for Notionpage.

Rich text is stored upstream as a list of runs. Each run decodes into one
InlineToken: its text plus the annotations that apply to all of it.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class InlineToken(BaseModel):
    """
    A run of text together with its formatting and annotation markers.
    """

    text: str = Field(
        default="",
        description="Plain text of the run ('‣' for mentions)"
    )

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False
    underline: bool = False

    link: Optional[str] = Field(
        default=None,
        description="Target URL when the run is a hyperlink"
    )

    user_id: Optional[str] = Field(
        default=None,
        description="ID of the mentioned user"
    )

    page_id: Optional[str] = Field(
        default=None,
        description="ID of the mentioned page"
    )

    highlight: Optional[str] = Field(
        default=None,
        description="Text or background color name, e.g. 'red' or 'yellow_background'"
    )

    equation: Optional[str] = Field(
        default=None,
        description="LaTeX source of an inline equation"
    )

    date: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Raw date mention payload (start_date, date_format, ...)"
    )

    comment_ids: List[str] = Field(
        default_factory=list,
        description="IDs of the discussions attached to this run"
    )

    def is_plain(self) -> bool:
        """Return True if the run carries no formatting or annotations."""
        return not (
            self.bold or self.italic or self.strikethrough or self.code or self.underline
            or self.link or self.user_id or self.page_id or self.highlight
            or self.equation or self.date or self.comment_ids
        )
