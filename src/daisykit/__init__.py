# ABOUTME: daisykit - metadata, navigation and timing extraction for DAISY v3 talking books.
# ABOUTME: Re-exports the public API: XML tree layer, records, formats, time codec and splitter.

from daisykit.core import (
    Page,
    PageUrls,
    Part,
    calculate_duration,
    format_time,
    format_time_iso,
    paginate,
    parse_time,
    split_by_tag,
)
from daisykit.errors import (
    DaisyError,
    MalformedXmlError,
    MissingContainerError,
    MissingRootElementError,
)
from daisykit.formats import (
    parse_dtbook,
    parse_ncx,
    parse_opf,
    parse_smil,
    update_dtbook_metadata_from_tree,
    update_ncx_metadata_from_tree,
    update_opf_metadata_from_tree,
    update_smil_metadata_from_tree,
)
from daisykit.metadata import (
    AudioClip,
    DtbData,
    ManifestItem,
    MetadataMap,
    NavPoint,
    NcxData,
    OpfData,
    PageTarget,
    SmilData,
    SpineItem,
    extract_metadata,
)
from daisykit.xml import (
    Element,
    Root,
    Text,
    find_direct_children,
    find_element,
    find_elements,
    get_attribute,
    get_text_content,
    parse_xml,
    to_xml,
)

__all__ = [
    "AudioClip",
    "DaisyError",
    "DtbData",
    "Element",
    "MalformedXmlError",
    "ManifestItem",
    "MetadataMap",
    "MissingContainerError",
    "MissingRootElementError",
    "NavPoint",
    "NcxData",
    "OpfData",
    "Page",
    "PageTarget",
    "PageUrls",
    "Part",
    "Root",
    "SmilData",
    "SpineItem",
    "Text",
    "calculate_duration",
    "extract_metadata",
    "find_direct_children",
    "find_element",
    "find_elements",
    "format_time",
    "format_time_iso",
    "get_attribute",
    "get_text_content",
    "paginate",
    "parse_dtbook",
    "parse_ncx",
    "parse_opf",
    "parse_smil",
    "parse_time",
    "split_by_tag",
    "to_xml",
    "update_dtbook_metadata_from_tree",
    "update_ncx_metadata_from_tree",
    "update_opf_metadata_from_tree",
    "update_smil_metadata_from_tree",
]
