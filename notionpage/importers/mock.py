"""
Mock importer for testing Notionpage.

This module provides a hardcoded record map covering every block type
that has a format schema, for testing the decoding pipeline without a
saved API response.
"""

import copy
from typing import Any, Dict, List, Optional

from ..decoding import PageDecoder
from .base import BaseImporter


MOCK_PAGE_ID = "4c6a54c6-8b3e-4ea2-af9c-faabcc88d58d"
MOCK_USER_ID = "bb760e2d-d679-4b64-b2a9-03005b21870a"
MOCK_COLLECTION_ID = "58e7440f-fad4-4a30-9de3-2dc5f5673b62"
MOCK_VIEW_ID = "51a75b9a-b94b-4ea1-9b6b-6d8c0e6b4c2f"


def _block(block_id: str, block_type: str, parent_id: str = MOCK_PAGE_ID, **fields: Any) -> Dict[str, Any]:
    value = {
        "id": block_id,
        "type": block_type,
        "parent_id": parent_id,
        "parent_table": "block",
        "alive": True,
        "version": 1,
    }
    value.update(fields)
    return {"role": "reader", "value": value}


class MockImporter(BaseImporter):
    """
    Mock importer that returns a hardcoded record map.
    """

    def __init__(self, page_id: Optional[str] = None, decoder: Optional[PageDecoder] = None):
        """Initialize the mock importer with test data."""
        super().__init__(page_id=page_id or MOCK_PAGE_ID, decoder=decoder)
        self._record_map = self._create_record_map()

    def get_record_map(self) -> Dict[str, Any]:
        # Callers may mutate the result; hand out a copy
        return copy.deepcopy(self._record_map)

    def _create_blocks(self) -> List[Dict[str, Any]]:
        """
        Create hardcoded block records.

        Returns:
            Block records; the first one is the page root
        """
        blocks = []

        # Page root with a built-in cover
        blocks.append(_block(
            MOCK_PAGE_ID, "page",
            parent_id="e3f5b7a1-0c2d-4e6f-8a9b-1c2d3e4f5a6b",
            parent_table="space",
            properties={"title": [["Reading list"]]},
            format={
                "page_full_width": True,
                "page_cover": "/images/page-cover/met_vincent_van_gogh_cradle.jpg",
                "page_cover_position": 0.6,
                "page_icon": "📚",
            },
            content=[
                "a1000000-0000-4000-8000-000000000001",
                "a1000000-0000-4000-8000-000000000002",
                "a1000000-0000-4000-8000-000000000003",
                "a1000000-0000-4000-8000-000000000004",
                "a1000000-0000-4000-8000-000000000005",
                "a1000000-0000-4000-8000-000000000006",
                "a1000000-0000-4000-8000-000000000007",
                "a1000000-0000-4000-8000-000000000008",
                "a1000000-0000-4000-8000-000000000009",
                "a1000000-0000-4000-8000-00000000000a",
            ],
        ))

        # Text with formatting and a user mention
        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000001", "text",
            properties={"title": [
                ["Shared by "],
                ["‣", [["u", MOCK_USER_ID]]],
                [", see "],
                ["the catalog", [["b"], ["a", "https://example.com/catalog"]]],
            ]},
            format={"block_color": "gray"},
        ))

        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000002", "code",
            properties={
                "title": [["print('hello')"]],
                "language": [["Python"]],
            },
        ))

        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000003", "to_do",
            properties={
                "title": [["Finish chapter 3"]],
                "checked": [["Yes"]],
            },
        ))

        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000004", "image",
            properties={"source": [["https://s3-us-west-2.amazonaws.com/secure.notion-static.com/cover.png"]]},
            format={
                "block_width": 640,
                "block_preserve_scale": True,
                "display_source": "https://s3-us-west-2.amazonaws.com/secure.notion-static.com/cover.png",
            },
        ))

        # Bookmark records carry their source as a structured field
        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000005", "bookmark",
            source="https://example.com/articles/1",
            properties={
                "title": [["An article"]],
                "link": [["https://example.com/articles/1"]],
                "description": [["A long read about decoding."]],
                "source": [["https://example.com/stale"]],
            },
            format={"bookmark_icon": "https://example.com/favicon.ico"},
        ))

        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000006", "file",
            properties={
                "title": [["notes.pdf"]],
                "source": [["https://example.com/files/notes.pdf"]],
                "size": [["1.2MB"]],
            },
        ))

        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000007", "column_list",
            content=[
                "a1000000-0000-4000-8000-000000000071",
                "a1000000-0000-4000-8000-000000000072",
            ],
        ))
        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000071", "column",
            parent_id="a1000000-0000-4000-8000-000000000007",
            format={"column_ratio": 0.5},
        ))
        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000072", "column",
            parent_id="a1000000-0000-4000-8000-000000000007",
            format={"column_ratio": 0.5},
        ))

        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000008", "video",
            properties={"source": [["https://www.youtube.com/watch?v=dQw4w9WgXcQ"]]},
            format={
                "block_width": 800,
                "block_height": 450,
                "display_source": "https://www.youtube.com/embed/dQw4w9WgXcQ",
            },
        ))

        blocks.append(_block(
            "a1000000-0000-4000-8000-000000000009", "embed",
            properties={"source": [["https://example.com/widget"]]},
            format={"block_height": 300, "block_full_width": False},
        ))

        blocks.append(_block(
            "a1000000-0000-4000-8000-00000000000a", "collection_view",
            collection_id=MOCK_COLLECTION_ID,
            view_ids=[MOCK_VIEW_ID],
        ))

        # Collection rows
        blocks.append(_block(
            "a1000000-0000-4000-8000-0000000000b1", "page",
            parent_id=MOCK_COLLECTION_ID,
            parent_table="collection",
            properties={"title": [["Middlemarch"]], "Ps<1": [["George Eliot"]]},
        ))
        blocks.append(_block(
            "a1000000-0000-4000-8000-0000000000b2", "page",
            parent_id=MOCK_COLLECTION_ID,
            parent_table="collection",
            properties={"title": [["Bleak House"]], "Ps<1": [["Charles Dickens"]]},
        ))

        return blocks

    def _create_record_map(self) -> Dict[str, Any]:
        blocks = self._create_blocks()
        return {
            "recordMap": {
                "block": {record["value"]["id"]: record for record in blocks},
                "notion_user": {
                    MOCK_USER_ID: {"role": "reader", "value": {
                        "id": MOCK_USER_ID,
                        "email": "jane@example.com",
                        "given_name": "Jane",
                        "family_name": "Doe",
                        "profile_photo": "https://example.com/jane.png",
                    }},
                },
                "collection": {
                    MOCK_COLLECTION_ID: {"role": "reader", "value": {
                        "id": MOCK_COLLECTION_ID,
                        "name": [["Books"]],
                        "parent_id": "a1000000-0000-4000-8000-00000000000a",
                        "schema": {
                            "title": {"name": "Name", "type": "title"},
                            "Ps<1": {"name": "Author", "type": "text"},
                        },
                    }},
                },
                "collection_view": {
                    MOCK_VIEW_ID: {"role": "reader", "value": {
                        "id": MOCK_VIEW_ID,
                        "type": "table",
                        "name": "All books",
                        "parent_id": "a1000000-0000-4000-8000-00000000000a",
                        "format": {"table_wrap": True},
                        "query2": {"sort": [{"property": "title", "direction": "ascending"}]},
                    }},
                },
            }
        }
