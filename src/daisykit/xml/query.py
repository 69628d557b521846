# ABOUTME: Tree query primitives: find elements by tag or attribute, read attributes and text.
# ABOUTME: Lookups never raise; a miss is None or an empty list and callers decide what it means.

from collections.abc import Callable

from daisykit.xml.nodes import Element, Node, Parent, Text, is_parent


def _children(node: Node) -> list[Node]:
    return node.children if is_parent(node) else []


def select_elements(
    tree: Node, predicate: Callable[[Element], bool], *, first_only: bool = False
) -> list[Element]:
    """Collect elements matching ``predicate`` in depth-first pre-order.

    The starting node itself is considered. With ``first_only`` the walk stops
    at the first match instead of scanning the rest of the tree.
    """
    results: list[Element] = []
    stack: list[Node] = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, Element) and predicate(node):
            results.append(node)
            if first_only:
                break
        # Reversed so the leftmost child is popped next.
        stack.extend(reversed(_children(node)))
    return results


def find_element(tree: Node, tag_name: str) -> Element | None:
    """Return the first element named ``tag_name`` in document order, or None."""
    found = select_elements(tree, lambda el: el.name == tag_name, first_only=True)
    return found[0] if found else None


def find_elements(tree: Node, tag_name: str) -> list[Element]:
    """Return every element named ``tag_name`` in document order."""
    return select_elements(tree, lambda el: el.name == tag_name)


def find_direct_children(tree: Node, tag_name: str) -> list[Element]:
    """Return the immediate element children of ``tree`` named ``tag_name``.

    Deeper descendants are never included, so nested elements sharing a name
    (navPoints inside navPoints) are not counted twice.
    """
    return [
        child
        for child in _children(tree)
        if isinstance(child, Element) and child.name == tag_name
    ]


def find_by_attribute(
    tree: Node, name: str, value: str, tag_name: str | None = None
) -> Element | None:
    """Return the first element whose ``name`` attribute equals ``value``.

    When ``tag_name`` is given the element must also carry that tag.
    """

    def matches(element: Element) -> bool:
        if tag_name is not None and element.name != tag_name:
            return False
        return element.attributes.get(name) == value

    found = select_elements(tree, matches, first_only=True)
    return found[0] if found else None


def find_ancestors(tree: Node, target: Node) -> list[Parent] | None:
    """Return the ancestors of ``target`` from ``tree`` downwards.

    The list starts with ``tree`` and ends with the direct parent of
    ``target``. Returns an empty list when ``target`` is ``tree`` and None when
    ``target`` is not part of the tree. Nodes are compared by identity.
    """
    if target is tree:
        return []
    stack: list[tuple[Node, list[Parent]]] = [(tree, [])]
    while stack:
        node, path = stack.pop()
        if not is_parent(node):
            continue
        lineage = [*path, node]
        for child in node.children:
            if child is target:
                return lineage
            stack.append((child, lineage))
    return None


def get_attribute(element: Node | None, name: str) -> str | None:
    """Return an attribute value, or None if absent or not an element."""
    if not isinstance(element, Element):
        return None
    return element.attributes.get(name)


def get_text_content(node: Node | None) -> str:
    """Concatenate all descendant text in document order and strip the ends."""
    if node is None:
        return ""
    parts: list[str] = []
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Text):
            parts.append(current.value)
        stack.extend(reversed(_children(current)))
    return "".join(parts).strip()
