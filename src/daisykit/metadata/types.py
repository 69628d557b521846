# ABOUTME: Typed records extracted from DAISY v3 OPF, NCX, SMIL and DTBook files.
# ABOUTME: All records are plain dataclasses built fresh per parse call.

from dataclasses import dataclass, field
from typing import Union

from daisykit.xml.nodes import Root

MetadataValue = Union[str, list[str]]
MetadataMap = dict[str, MetadataValue]


@dataclass
class ManifestItem:
    """A file listed in the OPF manifest."""

    id: str
    href: str
    media_type: str


@dataclass
class SpineItem:
    """An entry of the OPF spine (reading order)."""

    idref: str
    linear: bool = True


@dataclass
class OpfData:
    """Everything extracted from an OPF package file.

    Metadata keys are lower-case Dublin Core terms (``title``, ``creator``)
    merged with the ``<meta>`` name/content pairs (``dtb:totalTime``).
    """

    metadata: MetadataMap
    manifest: list[ManifestItem] = field(default_factory=list)
    spine: list[SpineItem] = field(default_factory=list)
    unique_identifier: str | None = None


@dataclass
class NavPoint:
    """A navigation point flattened out of the NCX navMap hierarchy."""

    id: str
    level: int
    label: str
    src: str
    play_order: int


@dataclass
class PageTarget:
    """A print page reference from the NCX pageList."""

    id: str
    type: str
    value: str
    label: str
    src: str
    play_order: int


@dataclass
class NcxData:
    """Everything extracted from an NCX navigation file."""

    metadata: MetadataMap
    nav_points: list[NavPoint] = field(default_factory=list)
    doc_title: str | None = None
    doc_author: str | None = None
    page_targets: list[PageTarget] = field(default_factory=list)


@dataclass
class AudioClip:
    """Audio timing for one SMIL ``par``. Duration is in milliseconds."""

    src: str
    clip_begin: str
    clip_end: str
    duration: int = 0


@dataclass
class SmilData:
    """Everything extracted from a SMIL file.

    ``elements`` is keyed by ``"<smil file name>#<par id>"`` so that maps from
    several SMIL files can be merged without id collisions.
    """

    metadata: MetadataMap
    elements: dict[str, AudioClip] = field(default_factory=dict)
    total_elapsed_time: str | None = None


@dataclass
class DtbData:
    metadata: MetadataMap
    tree: Root
