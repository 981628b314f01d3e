"""
Record map file importer for Notionpage.

Reads a page record map saved as JSON, e.g. the body of a loadPageChunk
response.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..decoding import PageDecoder
from .base import BaseImporter


class RecordMapImporter(BaseImporter):
    """
    Importer for record maps stored as JSON files.
    """

    def __init__(self, record_map_path: str, page_id: Optional[str] = None,
                 decoder: Optional[PageDecoder] = None):
        super().__init__(page_id=page_id, decoder=decoder)
        self.record_map_path = Path(record_map_path)
        logging.info(f"Initialized record map importer for: {self.record_map_path}")

    def get_record_map(self) -> Dict[str, Any]:
        """
        Load the record map from disk.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a JSON object
        """
        if not self.record_map_path.is_file():
            raise FileNotFoundError(f"Record map file not found: {self.record_map_path}")

        with open(self.record_map_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(
                f"Record map must be a JSON object, got {type(data).__name__}: {self.record_map_path}"
            )
        return data
