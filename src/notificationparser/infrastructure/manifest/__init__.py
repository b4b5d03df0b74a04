"""
Manifest parsing package.
"""

from notificationparser.infrastructure.manifest.extractor import (
    ManifestDocument,
    ManifestExtractor,
    load_manifest,
)

__all__ = ["ManifestDocument", "ManifestExtractor", "load_manifest"]
