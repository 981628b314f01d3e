"""
Mutation helpers for Notionpage.

This module builds edit operations for a page and hands them to a
transaction client. Submitting them over the network is the client's job.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .errors import InvalidRequestError
from .models.operations import Operation


# Format keys accepted by set_format
VALID_FORMAT_KEYS = frozenset({
    "page_full_width",
    "page_small_text",
})


class TransactionClient(ABC):
    """
    Abstract capability that submits a batch of operations atomically.
    """

    @abstractmethod
    def submit_transaction(self, ops: List[Operation]) -> None:
        """
        Submit operations as one transaction.

        Args:
            ops: Operations to apply, in order
        """
        pass


class RecordingClient(TransactionClient):
    """
    Transaction client that only records what it was asked to submit.

    Used for dry runs and tests.
    """

    def __init__(self):
        self.transactions: List[List[Operation]] = []

    def submit_transaction(self, ops: List[Operation]) -> None:
        self.transactions.append(list(ops))
        logging.info(f"Recorded transaction with {len(ops)} operation(s)")

    @property
    def operations(self) -> List[Operation]:
        return [op for batch in self.transactions for op in batch]


def build_set_title_op(block_id: str, title: str) -> Operation:
    return Operation(
        id=block_id,
        table="block",
        path=["properties", "title"],
        command="set",
        args=[[title]],
    )


def build_set_page_format_op(block_id: str, args: Dict[str, Any]) -> Operation:
    return Operation(
        id=block_id,
        table="block",
        path=["format"],
        command="update",
        args=dict(args),
    )


def validate_format_args(args: Dict[str, Any]) -> None:
    """
    Check that args only contains known page format keys.

    Raises:
        InvalidRequestError: If args is empty or has an unknown key
    """
    if not args:
        raise InvalidRequestError("args can't be empty")
    for key in args:
        if key not in VALID_FORMAT_KEYS:
            raise InvalidRequestError(f"'{key}' is not a valid page format property")


def submit(client: Optional[TransactionClient], ops: List[Operation]) -> None:
    if client is None:
        raise InvalidRequestError("page has no transaction client attached")
    client.submit_transaction(ops)
