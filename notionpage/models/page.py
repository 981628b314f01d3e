"""
Page-level aggregate models for Notionpage.

Pages and tables own already decoded blocks; they never decode anything
themselves.
"""

from typing import Any, Dict, Iterator, List, Optional
from pydantic import BaseModel, Field, PrivateAttr

from .block import Block
from .. import mutations


class User(BaseModel):
    """
    A user referenced from a page (mentions, authors, ...).
    """

    id: str
    email: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    profile_photo: Optional[str] = None

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.given_name, self.family_name) if p]
        return " ".join(parts)


class CollectionView(BaseModel):
    """
    Presentation settings of a collection: layout, grouping and sorting.
    """

    id: str
    type: str = Field(
        default="table",
        description="Layout type: table, board, list, gallery, calendar"
    )
    name: Optional[str] = None
    parent_id: Optional[str] = None
    format: Dict[str, Any] = Field(default_factory=dict)
    query: Dict[str, Any] = Field(
        default_factory=dict,
        description="Sort, filter and aggregate settings"
    )


class Collection(BaseModel):
    """
    Schema and row storage of a table-like block grouping.
    """

    id: str
    name: Any = Field(
        default=None,
        description="Raw rich-text runs of the collection name"
    )
    parent_id: Optional[str] = None
    schema_: Dict[str, Any] = Field(
        default_factory=dict,
        alias="schema",
        description="Column ID -> column definition (name, type, options)"
    )


class Table(BaseModel):
    """
    A collection paired with the view it is displayed through.
    """

    collection_view: CollectionView
    collection: Optional[Collection] = None
    data: List[Block] = Field(
        default_factory=list,
        description="Row blocks of the collection"
    )


class Page(BaseModel):
    """
    A decoded page: the root block plus the users and tables it references.
    """

    id: str
    root: Block
    users: List[User] = Field(default_factory=list)
    tables: List[Table] = Field(default_factory=list)

    _client: Any = PrivateAttr(default=None)

    def attach_client(self, client: "mutations.TransactionClient") -> "Page":
        """Attach the transaction client used by set_title/set_format."""
        self._client = client
        return self

    def find_user(self, user_id: str) -> Optional[User]:
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    def all_blocks(self) -> Iterator[Block]:
        return self.root.walk()

    def set_title(self, title: str) -> None:
        """
        Change the page title.

        Args:
            title: The new title
        """
        op = mutations.build_set_title_op(self.root.id, title)
        mutations.submit(self._client, [op])

    def set_format(self, args: Dict[str, Any]) -> None:
        """
        Change format properties of the page.

        Valid keys are page_full_width (bool) and page_small_text (bool).

        Raises:
            InvalidRequestError: If args is empty or has an unknown key
        """
        mutations.validate_format_args(args)
        op = mutations.build_set_page_format_op(self.root.id, args)
        mutations.submit(self._client, [op])
