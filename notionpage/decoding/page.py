"""
Page decoding for Notionpage.

A page arrives as a record map: every block, user, collection and
collection view the page refers to, keyed by ID. PageDecoder decodes each
block independently, links the tree together and collects the users and
tables of the page.
"""

import json
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..errors import BlockDecodeError, NotionPageError, PageNotFoundError
from ..models import Block, BlockType, Collection, CollectionView, Page, Table, User
from .formats import FormatRegistry
from .resolver import resolve_block


_NO_DASH_ID = re.compile(r"^[0-9a-fA-F]{32}$")

PAGE_ROOT_TYPES = (BlockType.PAGE.value, BlockType.COLLECTION_VIEW_PAGE.value)


def to_dash_id(block_id: str) -> str:
    """
    Convert a 32 character ID to the dashed form used in record maps.

    IDs that are already dashed, or not IDs at all, are returned unchanged.
    """
    if not _NO_DASH_ID.match(block_id):
        return block_id
    return "-".join([
        block_id[0:8], block_id[8:12], block_id[12:16], block_id[16:20], block_id[20:32]
    ]).lower()


def _unwrap(record: Any) -> Optional[Dict[str, Any]]:
    """Return the value of a record map entry, or None for an empty one."""
    if not isinstance(record, dict):
        return None
    value = record.get("value", record)
    # Newer responses nest the value one level deeper
    if isinstance(value, dict) and "id" not in value and isinstance(value.get("value"), dict):
        value = value["value"]
    if not isinstance(value, dict) or "id" not in value:
        return None
    return value


def _records(record_map: Dict[str, Any], table: str) -> List[Dict[str, Any]]:
    values = []
    for record in (record_map.get(table) or {}).values():
        value = _unwrap(record)
        if value is not None:
            values.append(value)
    return values


def block_from_record(value: Dict[str, Any]) -> Block:
    """
    Build a raw, not yet decoded Block from a block record.

    A structured format object is stored back as raw JSON; a structured
    top-level "source" pre-sets block.source.
    """
    fmt = value.get("format")
    if fmt is None:
        format_raw = b""
    elif isinstance(fmt, (bytes, str)):
        format_raw = fmt.encode("utf-8") if isinstance(fmt, str) else fmt
    else:
        format_raw = json.dumps(fmt).encode("utf-8")

    block = Block(
        id=value["id"],
        type=value.get("type", ""),
        properties=value.get("properties") or {},
        format_raw=format_raw,
        parent_id=value.get("parent_id"),
        parent_table=value.get("parent_table"),
        alive=value.get("alive", True),
        version=value.get("version"),
        created_time=value.get("created_time"),
        last_edited_time=value.get("last_edited_time"),
        content=value.get("content") or [],
    )
    source = value.get("source")
    if isinstance(source, str):
        block.source = source
    return block


class PageDecoder:
    """
    Decodes record maps into Page objects.
    """

    def __init__(self, max_workers: int = 1, fail_fast: bool = False,
                 registry: Optional[FormatRegistry] = None):
        """
        Initialize the page decoder.

        Args:
            max_workers: Number of threads used to decode blocks; 1 decodes inline
            fail_fast: Raise the first block failure instead of collecting it
            registry: Format registry (the global one by default)
        """
        self.max_workers = max(1, int(max_workers))
        self.fail_fast = fail_fast
        self.registry = registry
        self.errors: List[BlockDecodeError] = []

    def _decode_one(self, block: Block) -> Optional[BlockDecodeError]:
        try:
            resolve_block(block, self.registry)
        except NotionPageError as e:
            return BlockDecodeError(block.id, block.type, e)
        return None

    def decode_blocks(self, blocks: List[Block]) -> List[BlockDecodeError]:
        """
        Decode blocks independently of each other.

        A failing block does not stop the others.

        Returns:
            One BlockDecodeError per failed block
        """
        if self.max_workers > 1 and len(blocks) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(executor.map(self._decode_one, blocks))
        else:
            results = [self._decode_one(block) for block in blocks]

        errors = [error for error in results if error is not None]
        for error in errors:
            logging.error(f"Failed to decode {error}")
        if errors and self.fail_fast:
            raise errors[0]
        return errors

    def decode(self, record_map: Dict[str, Any], page_id: Optional[str] = None) -> Page:
        """
        Decode a record map into a page.

        Args:
            record_map: Record map, optionally wrapped in {"recordMap": ...}
            page_id: ID of the root block; defaults to the first page block

        Returns:
            The decoded page; blocks that failed to decode are listed in self.errors

        Raises:
            PageNotFoundError: If the root block is not in the record map
            BlockDecodeError: With fail_fast, on the first block failure
        """
        if "recordMap" in record_map:
            record_map = record_map["recordMap"]

        blocks: Dict[str, Block] = {}
        record_errors: List[BlockDecodeError] = []
        for value in _records(record_map, "block"):
            try:
                block = block_from_record(value)
            except ValidationError as e:
                error = BlockDecodeError(str(value["id"]), str(value.get("type")), e)
                logging.error(f"Failed to read {error}")
                if self.fail_fast:
                    raise error from e
                record_errors.append(error)
                continue
            blocks[block.id] = block

        root = self._find_root(blocks, page_id)
        logging.info(f"Decoding page {root.id} with {len(blocks)} blocks")

        self.errors = record_errors + self.decode_blocks(list(blocks.values()))
        self._link_children(blocks)

        page = Page(
            id=root.id,
            root=root,
            users=[User.model_validate(value) for value in _records(record_map, "notion_user")],
            tables=self._build_tables(record_map, blocks),
        )
        logging.info(
            f"Decoded page {page.id}: {len(page.users)} users, {len(page.tables)} tables, "
            f"{len(self.errors)} failed blocks"
        )
        return page

    @staticmethod
    def _find_root(blocks: Dict[str, Block], page_id: Optional[str]) -> Block:
        if page_id:
            root = blocks.get(to_dash_id(page_id)) or blocks.get(page_id)
            if root is None:
                raise PageNotFoundError(f"page '{page_id}' not found in record map")
            return root
        for block in blocks.values():
            if block.type in PAGE_ROOT_TYPES and block.parent_id not in blocks:
                return block
        raise PageNotFoundError("record map has no root page block")

    @staticmethod
    def _link_children(blocks: Dict[str, Block]) -> None:
        for block in blocks.values():
            block.children = [
                blocks[child_id] for child_id in block.content
                if child_id in blocks and blocks[child_id].alive
            ]

    @staticmethod
    def _build_tables(record_map: Dict[str, Any], blocks: Dict[str, Block]) -> List[Table]:
        collections = {value["id"]: value for value in _records(record_map, "collection")}
        views = {value["id"]: value for value in _records(record_map, "collection_view")}
        raw_blocks = {value["id"]: value for value in _records(record_map, "block")}

        tables = []
        for block in blocks.values():
            if not block.is_collection():
                continue
            raw = raw_blocks.get(block.id, {})
            collection_id = raw.get("collection_id")
            collection_value = collections.get(collection_id)
            collection = Collection.model_validate(collection_value) if collection_value else None
            rows = [
                row for row in blocks.values()
                if collection_id and row.parent_id == collection_id and row.parent_table == "collection"
            ]
            for view_id in raw.get("view_ids") or []:
                view_value = views.get(view_id)
                if view_value is None:
                    logging.warning(f"Collection view {view_id} of block {block.id} not in record map")
                    continue
                view = CollectionView(
                    id=view_value["id"],
                    type=view_value.get("type", "table"),
                    name=view_value.get("name"),
                    parent_id=view_value.get("parent_id"),
                    format=view_value.get("format") or {},
                    query=view_value.get("query2") or view_value.get("query") or {},
                )
                tables.append(Table(collection_view=view, collection=collection, data=rows))
        return tables
