"""
Transaction operation model for Notionpage.
"""

from typing import Any, List
from pydantic import BaseModel, Field


class Operation(BaseModel):
    """
    A single edit request handed to the transaction client.

    Operations address a record by table and ID, never by the in-memory
    decoded block.
    """

    id: str = Field(
        ...,
        description="ID of the record to change"
    )

    table: str = Field(
        default="block",
        description="Record table, e.g. 'block' or 'collection'"
    )

    path: List[str] = Field(
        default_factory=list,
        description="Path inside the record that the command applies to"
    )

    command: str = Field(
        ...,
        description="Operation command: 'set', 'update', 'listAfter', ..."
    )

    args: Any = Field(
        default=None,
        description="Command arguments"
    )
