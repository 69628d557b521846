# ABOUTME: Per-format DAISY v3 adapters: OPF, NCX, SMIL and DTBook parsers and updaters.
# ABOUTME: Each adapter is independent and built on the shared query and metadata layers.

from daisykit.formats.dtbook import parse_dtbook, update_dtbook_metadata_from_tree
from daisykit.formats.ncx import parse_ncx, update_ncx_metadata_from_tree
from daisykit.formats.opf import DUBLIN_CORE_TERMS, parse_opf, update_opf_metadata_from_tree
from daisykit.formats.smil import parse_smil, update_smil_metadata_from_tree

__all__ = [
    "DUBLIN_CORE_TERMS",
    "parse_dtbook",
    "parse_ncx",
    "parse_opf",
    "parse_smil",
    "update_dtbook_metadata_from_tree",
    "update_ncx_metadata_from_tree",
    "update_opf_metadata_from_tree",
    "update_smil_metadata_from_tree",
]
