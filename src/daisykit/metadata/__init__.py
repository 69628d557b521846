# ABOUTME: Metadata package: typed DAISY records, meta-element extraction and in-place patching.
# ABOUTME: Exports the record dataclasses and the extraction helpers used by every format.

from daisykit.metadata.extract import add_metadata_value, extract_metadata
from daisykit.metadata.types import (
    AudioClip,
    DtbData,
    ManifestItem,
    MetadataMap,
    MetadataValue,
    NavPoint,
    NcxData,
    OpfData,
    PageTarget,
    SmilData,
    SpineItem,
)
from daisykit.metadata.update import update_meta_elements

__all__ = [
    "AudioClip",
    "DtbData",
    "ManifestItem",
    "MetadataMap",
    "MetadataValue",
    "NavPoint",
    "NcxData",
    "OpfData",
    "PageTarget",
    "SmilData",
    "SpineItem",
    "add_metadata_value",
    "extract_metadata",
    "update_meta_elements",
]
