"""
Base importer interface for Notionpage.

This module defines the abstract interface that all record map sources
must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..decoding import PageDecoder
from ..errors import BlockDecodeError
from ..models import Block, Page


class BaseImporter(ABC):
    """
    Abstract base class for all importers.

    Each importer supplies a raw record map (from a file, a fixture, ...);
    decoding it into a Page is shared.
    """

    def __init__(self, page_id: Optional[str] = None, decoder: Optional[PageDecoder] = None):
        self.page_id = page_id
        self.decoder = decoder or PageDecoder()

    @abstractmethod
    def get_record_map(self) -> Dict[str, Any]:
        """
        Retrieve the raw record map of the page.

        Returns:
            Record map dictionary
        """
        pass

    def get_page(self) -> Page:
        """
        Decode the record map into a page.

        Returns:
            The decoded Page
        """
        return self.decoder.decode(self.get_record_map(), self.page_id)

    def get_all_blocks(self) -> List[Block]:
        """
        Decode the page and return every block of its tree, depth first.
        """
        return list(self.get_page().all_blocks())

    @property
    def errors(self) -> List[BlockDecodeError]:
        """Block failures of the last decode."""
        return self.decoder.errors
