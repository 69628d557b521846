# ABOUTME: In-place metadata patching shared by the per-format updaters.
# ABOUTME: Overwrites matching elements, appends missing ones, and keeps container indentation.

import logging
from collections.abc import Callable, Iterable, Mapping

from daisykit.xml.nodes import Element, Node, Parent, Text
from daisykit.xml.query import find_ancestors, find_elements, get_attribute

logger = logging.getLogger(__name__)

NewValue = str | Iterable[str]


def _is_blank(node: Node) -> bool:
    return isinstance(node, Text) and not node.value.strip()


def _index_of(children: list[Node], node: Node) -> int:
    # Identity, not dataclass equality: sibling metas can compare equal.
    return next(i for i, child in enumerate(children) if child is node)


def append_child(container: Parent, node: Node) -> None:
    """Append ``node`` at the end of ``container``, reusing its indentation.

    If the last element child is preceded by a whitespace run, the same run is
    placed before ``node``; a trailing whitespace run (the closing tag's
    indentation) stays last.
    """
    children = container.children
    indent = None
    for i in range(len(children) - 1, -1, -1):
        if isinstance(children[i], Element):
            if i > 0 and _is_blank(children[i - 1]):
                indent = children[i - 1].value
            break

    insert_at = len(children) - 1 if children and _is_blank(children[-1]) else len(children)
    new_nodes: list[Node] = [Text(indent), node] if indent else [node]
    children[insert_at:insert_at] = new_nodes


def detach(tree: Node, element: Element) -> None:
    """Remove ``element`` from its parent together with its leading whitespace."""
    ancestors = find_ancestors(tree, element)
    if not ancestors:
        return
    children = ancestors[-1].children
    index = _index_of(children, element)
    start = index - 1 if index > 0 and _is_blank(children[index - 1]) else index
    del children[start : index + 1]


def _as_values(value: NewValue) -> tuple[list[str], bool]:
    if isinstance(value, str):
        return [value], True
    if isinstance(value, Iterable):
        return [str(v) for v in value], False
    return [str(value)], True


def apply_metadata_value(
    container: Parent,
    key: str,
    value: NewValue,
    existing: list[Element],
    *,
    write: Callable[[Element, str], None],
    build: Callable[[str], Element],
    create_if_missing: bool = True,
) -> None:
    """Write one metadata key into a container.

    A scalar overwrites every element in ``existing``. A list is applied
    positionally; surplus existing elements are removed so the key reads back
    as exactly the given list. Values without a matching element are appended
    through ``build`` only when ``create_if_missing`` is set.
    """
    values, scalar = _as_values(value)

    if scalar:
        for element in existing:
            write(element, values[0])
        remaining = [] if existing else values
    else:
        for element, item in zip(existing, values):
            write(element, item)
        for element in existing[len(values) :]:
            detach(container, element)
        remaining = values[len(existing) :]

    if not create_if_missing:
        return
    for item in remaining:
        append_child(container, build(item))
        logger.debug("Appended metadata element for %s", key)


def _write_content(element: Element, value: str) -> None:
    element.attributes["content"] = value


def update_meta_elements(
    container: Parent,
    new_values: Mapping[str, NewValue],
    *,
    create_if_missing: bool = True,
) -> None:
    """Patch ``<meta name=.. content=..>`` elements found under ``container``."""
    metas = find_elements(container, "meta")
    for key, value in new_values.items():
        existing = [meta for meta in metas if get_attribute(meta, "name") == key]
        apply_metadata_value(
            container,
            key,
            value,
            existing,
            write=_write_content,
            build=lambda item, key=key: Element("meta", {"name": key, "content": item}),
            create_if_missing=create_if_missing,
        )
