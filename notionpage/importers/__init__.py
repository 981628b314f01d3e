"""Record map importers."""

from .base import BaseImporter
from .mock import MockImporter
from .record_map import RecordMapImporter

__all__ = ["BaseImporter", "MockImporter", "RecordMapImporter"]
