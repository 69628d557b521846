# ABOUTME: DAISY v3 SMIL file parsing into per-par audio clips, and head metadata patching.
# ABOUTME: Clip keys combine the SMIL file name and the par id to stay unique across files.

import logging
from collections.abc import Mapping

from daisykit.core.timecode import calculate_duration
from daisykit.errors import MissingContainerError, MissingRootElementError
from daisykit.metadata.extract import extract_metadata
from daisykit.metadata.types import AudioClip, SmilData
from daisykit.metadata.update import NewValue, update_meta_elements
from daisykit.xml.nodes import Element, Root
from daisykit.xml.parser import parse_xml
from daisykit.xml.query import find_element, find_elements, get_attribute

logger = logging.getLogger(__name__)

TOTAL_ELAPSED_TIME_KEY = "dtb:totalElapsedTime"


def _extract_audio_clip(par: Element) -> AudioClip | None:
    """Build the clip for a par, or None if its audio lacks src/clipBegin/clipEnd."""
    audio = find_element(par, "audio")
    if audio is None:
        return None

    src = get_attribute(audio, "src")
    clip_begin = get_attribute(audio, "clipBegin")
    clip_end = get_attribute(audio, "clipEnd")
    if not src or not clip_begin or not clip_end:
        return None

    return AudioClip(
        src=src,
        clip_begin=clip_begin,
        clip_end=clip_end,
        duration=calculate_duration(clip_begin, clip_end),
    )


def parse_smil(smil_content: str | bytes, smil_file_name: str) -> SmilData:
    """Parse a SMIL file and collect the audio clip of every identified par.

    Args:
        smil_content: The SMIL document text.
        smil_file_name: Name used as the key prefix, e.g. ``"chapter1.smil"``.

    Returns:
        SmilData whose ``elements`` maps ``"<file>#<par id>"`` to its AudioClip.

    Raises:
        MalformedXmlError: If the content is not well-formed XML.
        MissingRootElementError: If there is no ``smil`` element.
    """
    tree = parse_xml(smil_content)
    smil = find_element(tree, "smil")
    if smil is None:
        raise MissingRootElementError("smil", "SMIL")

    head = find_element(smil, "head")
    meta_elements = find_elements(head, "meta") if head is not None else []
    metadata = extract_metadata(meta_elements)

    total_elapsed_time = next(
        (
            get_attribute(meta, "content")
            for meta in meta_elements
            if get_attribute(meta, "name") == TOTAL_ELAPSED_TIME_KEY
        ),
        None,
    )

    elements: dict[str, AudioClip] = {}
    body = find_element(smil, "body")
    if body is not None:
        # Audio lives in <par>; <seq> only groups pars.
        for par in find_elements(body, "par"):
            par_id = get_attribute(par, "id")
            if not par_id:
                continue
            clip = _extract_audio_clip(par)
            if clip is None:
                logger.debug("Skipping par %s in %s: incomplete audio", par_id, smil_file_name)
                continue
            elements[f"{smil_file_name}#{par_id}"] = clip

    logger.debug("Parsed SMIL %s: %d audio clips", smil_file_name, len(elements))
    return SmilData(
        metadata=metadata,
        elements=elements,
        total_elapsed_time=total_elapsed_time,
    )


def update_smil_metadata_from_tree(
    tree: Root,
    new_values: Mapping[str, NewValue],
    *,
    create_if_missing: bool = True,
) -> None:
    """Patch ``<meta>`` elements in the SMIL ``head`` in place.

    Raises:
        MissingContainerError: If the tree has no ``head`` element.
    """
    head = find_element(tree, "head")
    if head is None:
        raise MissingContainerError("head", "SMIL")
    update_meta_elements(head, new_values, create_if_missing=create_if_missing)
