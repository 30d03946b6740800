"""Manifest parsing for cedar."""

from cedar.config.manifest import (
    MANIFEST_FILENAME,
    BuildSection,
    Manifest,
    MetaSection,
    default_manifest_text,
    load_manifest,
    parse_manifest,
)

__all__ = [
    "MANIFEST_FILENAME",
    "BuildSection",
    "Manifest",
    "MetaSection",
    "default_manifest_text",
    "load_manifest",
    "parse_manifest",
]
