"""Equality for lxml element trees via canonical serialization."""

from __future__ import annotations

import copy
import logging
from typing import Any

from lxml import etree

from comparepack.comparators.objects import ObjectComparator
from comparepack.core.options import ProcessedPairs
from comparepack.diff.failure import ComparisonFailure

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
EMPTY_DOCUMENT_TEXT = "<?xml version='1.0' encoding='UTF-8'?>\n"

# Parse/canonicalization failures only; anything else propagates.
CANONICALIZATION_ERRORS = (etree.C14NError, etree.XMLSyntaxError, ValueError)


def is_dom_node(value: Any) -> bool:
    return isinstance(value, (etree._Element, etree._ElementTree))


def is_dom_document(value: Any) -> bool:
    return isinstance(value, etree._ElementTree)


class DOMNodeComparator(ObjectComparator):
    """Compares lxml elements and documents by their canonical text.

    Both operands are always canonicalized, so attribute order, ignorable
    whitespace and namespace prefix spelling do not affect the result.
    """

    name = "dom"

    def accepts(self, expected: Any, actual: Any) -> bool:
        return is_dom_node(expected) and is_dom_node(actual)

    def assert_equals(
        self,
        expected: Any,
        actual: Any,
        delta: float = 0.0,
        canonicalize: bool = False,
        ignore_case: bool = False,
        processed: ProcessedPairs | None = None,
    ) -> None:
        expected_as_string = node_to_text(expected, canonicalize=True, ignore_case=ignore_case)
        actual_as_string = node_to_text(actual, canonicalize=True, ignore_case=ignore_case)

        if expected_as_string != actual_as_string:
            kind = "documents" if is_dom_document(expected) else "nodes"
            raise ComparisonFailure(
                expected,
                actual,
                expected_as_string,
                actual_as_string,
                identical=False,
                message=f"Failed asserting that two DOM {kind} are equal.\n",
            )


def node_to_text(node: Any, *, canonicalize: bool, ignore_case: bool) -> str:
    """Return the normalized, whitespace-cleaned, indented text of a node.

    With ``canonicalize`` the node is serialized to exclusive C14N and
    re-parsed into a fresh document, which is what gets rendered. A node
    that cannot be canonicalized renders as an empty document.
    """
    if canonicalize:
        text = _serialize_document(_canonical_document(node))
    elif is_dom_document(node):
        text = _serialize_document(node)
    else:
        text = etree.tostring(node, encoding="unicode", pretty_print=True, with_tail=False)

    return text.lower() if ignore_case else text


def _canonical_document(node: Any) -> etree._ElementTree | None:
    if not _has_canonical_form(node):
        logger.debug("no canonical form for %s; using empty document", type(node).__name__)
        return None

    try:
        c14n = _c14n(node)
        if not c14n.strip():
            logger.debug("empty canonical form for %s; using empty document", type(node).__name__)
            return None
        root = etree.fromstring(c14n, parser=_reparse_parser())
    except CANONICALIZATION_ERRORS as error:
        logger.debug(
            "canonicalization failed for %s; using empty document: %s",
            type(node).__name__,
            error,
        )
        return None

    return etree.ElementTree(_normalize_namespaces(root))


def _has_canonical_form(node: Any) -> bool:
    # Comment, PI and entity nodes are rejected before C14N, which cannot
    # serialize them.
    root = node.getroot() if is_dom_document(node) else node
    if root is None or not isinstance(root.tag, str):
        return False
    return next(root.iter(etree.Entity), None) is None


def _c14n(node: Any) -> bytes:
    return etree.tostring(node, method="c14n", exclusive=True, with_comments=False)


def _reparse_parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)


def _serialize_document(document: etree._ElementTree | None) -> str:
    if document is None:
        return EMPTY_DOCUMENT_TEXT
    rendered = etree.tostring(
        document,
        encoding="UTF-8",
        xml_declaration=True,
        pretty_print=True,
    )
    return rendered.decode("utf-8")


def _normalize_namespaces(root: etree._Element) -> etree._Element:
    """Rebuild ``root`` with prefixes ``ns0``, ``ns1``, ... declared on the root.

    Prefixes are assigned in order of first use, so two trees that differ
    only in prefix spelling (or default vs. prefixed declarations) rebuild
    identically. Nodes beside the root, such as prolog processing
    instructions, are carried over to the rebuilt document.

    Attribute values are not rewritten: QName-valued attributes such as
    ``xsi:type="x:T"`` are compared by their literal text.
    """
    namespaces: list[str] = []
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        for name in (element.tag, *element.attrib.keys()):
            uri = etree.QName(name).namespace
            if uri and uri != XML_NAMESPACE and uri not in namespaces:
                namespaces.append(uri)

    if not namespaces:
        return root

    nsmap = {f"ns{index}": uri for index, uri in enumerate(namespaces)}
    copied = _copy_element(root, None, nsmap)
    # addprevious/addnext insert next to the root, so walk outwards-in.
    for sibling in reversed(list(root.itersiblings(preceding=True))):
        copied.addprevious(copy.copy(sibling))
    for sibling in reversed(list(root.itersiblings())):
        copied.addnext(copy.copy(sibling))
    return copied


def _copy_element(
    element: etree._Element,
    parent: etree._Element | None,
    nsmap: dict[str, str],
) -> etree._Element:
    attributes = dict(element.attrib)
    if parent is None:
        copied = etree.Element(element.tag, attributes, nsmap=nsmap)
    else:
        copied = etree.SubElement(parent, element.tag, attributes)
    copied.text = element.text

    for child in element:
        if isinstance(child.tag, str):
            duplicate = _copy_element(child, copied, nsmap)
        else:
            duplicate = copy.copy(child)
            copied.append(duplicate)
        duplicate.tail = child.tail

    return copied
