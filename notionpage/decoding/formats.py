"""
Format decoding for Notionpage.

This module holds the registry of format schemas, one per recognized block
type, and decodes a block's raw format payload into the matching model.
Block types that are not registered have no decoded format.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from ..errors import FormatDecodeError
from ..models import BlockFormat, BlockType, FormatImage, FormatPage
from ..models.formats import FORMAT_MODELS
from .urls import make_image_url


FormatHook = Callable[[BaseModel], None]


@dataclass
class FormatSpec:
    """
    Decoding rule for one block type.
    """
    block_type: str
    model: Type[BaseModel]
    hook: Optional[FormatHook] = None


def _page_hook(fmt: FormatPage) -> None:
    fmt.page_cover_url = make_image_url(fmt.page_cover or "")


def _image_hook(fmt: FormatImage) -> None:
    fmt.image_url = make_image_url(fmt.display_source or "")


class FormatRegistry:
    """
    Registry of format schemas keyed by block type tag.
    """

    def __init__(self):
        """Initialize the registry with the default format schemas."""
        self._specs: Dict[str, FormatSpec] = {}
        self._register_default_formats()

    def _register_default_formats(self):
        hooks = {
            BlockType.PAGE.value: _page_hook,
            BlockType.IMAGE.value: _image_hook,
        }
        for block_type, model in FORMAT_MODELS.items():
            self.register(block_type, model, hooks.get(block_type))

    def register(self, block_type: str, model: Type[BaseModel], hook: Optional[FormatHook] = None) -> None:
        """
        Register the format schema of a block type.

        Args:
            block_type: Type tag the schema applies to
            model: Pydantic model the payload is validated against
            hook: Optional function run on the decoded model
        """
        self._specs[block_type] = FormatSpec(block_type=block_type, model=model, hook=hook)

    def get(self, block_type: str) -> Optional[FormatSpec]:
        return self._specs.get(block_type)

    def list_types(self) -> List[str]:
        return list(self._specs.keys())

    def decode(self, block_type: str, raw: bytes) -> Optional[BlockFormat]:
        """
        Decode a raw format payload for a block type.

        Args:
            block_type: The block's type tag
            raw: Raw JSON of the format object

        Returns:
            The decoded format, or None if raw is empty or the type has
            no registered schema

        Raises:
            FormatDecodeError: If raw does not match the registered schema
        """
        # A JSON null is a format that was never set
        if not raw or bytes(raw).strip() == b"null":
            return None
        spec = self._specs.get(block_type)
        if spec is None:
            return None
        try:
            fmt = spec.model.model_validate_json(raw)
        except ValidationError as e:
            raise FormatDecodeError(block_type, raw, e) from e
        if spec.hook is not None:
            spec.hook(fmt)
        return fmt


# Global format registry instance
format_registry = FormatRegistry()


def decode_format(block_type: str, raw: bytes, registry: Optional[FormatRegistry] = None) -> Optional[BlockFormat]:
    """Decode a format payload with the given registry (the global one by default)."""
    return (registry or format_registry).decode(block_type, raw)
