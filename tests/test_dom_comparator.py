from lxml import etree
import pytest

from comparepack.comparators import (
    EMPTY_DOCUMENT_TEXT,
    ComparatorRegistry,
    DOMNodeComparator,
    ObjectComparator,
    node_to_text,
)
from comparepack.comparators import dom as dom_module
from comparepack.diff import ComparisonFailure

DECLARATION = "<?xml version='1.0' encoding='UTF-8'?>\n"


def _document(xml: str) -> etree._ElementTree:
    return etree.ElementTree(etree.fromstring(xml))


def test_accepts_only_pairs_of_tree_values() -> None:
    comparator = DOMNodeComparator()
    document = _document("<a/>")
    element = etree.fromstring("<a/>")

    assert comparator.accepts(document, document) is True
    assert comparator.accepts(element, document) is True
    assert comparator.accepts(element, "<a/>") is False
    assert comparator.accepts({"a": 1}, {"a": 1}) is False


def test_missing_child_element_fails_with_document_message_and_diff() -> None:
    expected = _document("<a><b/></a>")
    actual = _document("<a></a>")

    with pytest.raises(ComparisonFailure) as exc_info:
        DOMNodeComparator().assert_equals(expected, actual)

    failure = exc_info.value
    assert failure.message == "Failed asserting that two DOM documents are equal.\n"
    assert failure.expected is expected
    assert failure.actual is actual
    assert failure.identical is False
    assert failure.expected_as_string == DECLARATION + "<a>\n  <b/>\n</a>\n"
    assert failure.actual_as_string == DECLARATION + "<a/>\n"

    rendered = failure.diff()
    assert rendered.startswith("\n--- Expected\n+++ Actual\n")
    assert "-  <b/>\n" in rendered.splitlines(keepends=True)


def test_element_operands_report_nodes() -> None:
    with pytest.raises(ComparisonFailure) as exc_info:
        DOMNodeComparator().assert_equals(etree.fromstring("<a>1</a>"), etree.fromstring("<a>2</a>"))

    assert exc_info.value.message == "Failed asserting that two DOM nodes are equal.\n"


def test_same_instance_is_equal() -> None:
    document = _document("<a><b attr='x'>text</b></a>")

    DOMNodeComparator().assert_equals(document, document)


def test_structurally_identical_documents_are_equal() -> None:
    DOMNodeComparator().assert_equals(_document("<a><b/></a>"), _document("<a><b></b></a>"))


def test_attribute_order_is_ignored() -> None:
    DOMNodeComparator().assert_equals(
        _document('<a x="1" y="2"><b p="3" q="4"/></a>'),
        _document('<a y="2" x="1"><b q="4" p="3"/></a>'),
    )


def test_insignificant_whitespace_is_ignored() -> None:
    DOMNodeComparator().assert_equals(
        _document("<a>\n    <b>text</b>\n    <c/>\n</a>"),
        _document("<a><b>text</b><c/></a>"),
    )


def test_comments_are_ignored() -> None:
    DOMNodeComparator().assert_equals(
        _document("<a><!-- generated --><b/></a>"),
        _document("<a><b/></a>"),
    )


def test_namespace_prefix_spelling_is_ignored() -> None:
    DOMNodeComparator().assert_equals(
        _document('<x:root xmlns:x="urn:test"><x:item x:attr="v"/></x:root>'),
        _document('<y:root xmlns:y="urn:test"><y:item y:attr="v"/></y:root>'),
    )


def test_default_and_prefixed_namespace_declarations_are_equal() -> None:
    DOMNodeComparator().assert_equals(
        _document('<root xmlns="urn:test"><item/></root>'),
        _document('<p:root xmlns:p="urn:test"><p:item/></p:root>'),
    )


def test_different_namespace_uris_are_not_equal() -> None:
    with pytest.raises(ComparisonFailure):
        DOMNodeComparator().assert_equals(
            _document('<x:root xmlns:x="urn:one"/>'),
            _document('<x:root xmlns:x="urn:two"/>'),
        )


def test_ignore_case_folds_elements_and_text() -> None:
    DOMNodeComparator().assert_equals(
        _document("<A><B>Hello</B></A>"),
        _document("<a><b>hello</b></a>"),
        ignore_case=True,
    )


def test_case_sensitive_failure_preserves_original_case() -> None:
    with pytest.raises(ComparisonFailure) as exc_info:
        DOMNodeComparator().assert_equals(
            _document("<A><B>Hello</B></A>"),
            _document("<a><b>hello</b></a>"),
        )

    failure = exc_info.value
    assert "<A>" in failure.expected_as_string
    assert "<B>Hello</B>" in failure.expected_as_string
    assert "<b>hello</b>" in failure.actual_as_string


def test_canonicalize_flag_from_caller_does_not_disable_normalization() -> None:
    DOMNodeComparator().assert_equals(
        _document('<a x="1" y="2"/>'),
        _document('<a y="2" x="1"/>'),
        canonicalize=False,
    )


def test_node_to_text_without_canonicalization_serializes_element() -> None:
    element = etree.fromstring("<a><b/></a>")

    assert node_to_text(element, canonicalize=False, ignore_case=False) == "<a>\n  <b/>\n</a>\n"


def test_node_to_text_lowercases_when_ignoring_case() -> None:
    text = node_to_text(_document("<Root>ÄBC</Root>"), canonicalize=True, ignore_case=True)

    assert text == DECLARATION.lower() + "<root>äbc</root>\n"


def test_canonicalization_error_falls_back_to_empty_document(monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise(_node: object) -> bytes:
        raise etree.C14NError("C14N failed")

    monkeypatch.setattr(dom_module, "_c14n", _raise)

    assert node_to_text(_document("<a/>"), canonicalize=True, ignore_case=False) == EMPTY_DOCUMENT_TEXT


def test_empty_canonical_form_falls_back_to_empty_document(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dom_module, "_c14n", lambda _node: b"")

    assert node_to_text(_document("<a/>"), canonicalize=True, ignore_case=False) == EMPTY_DOCUMENT_TEXT


def test_unparseable_canonical_form_falls_back_to_empty_document(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(dom_module, "_c14n", lambda _node: b"<a><b></a>")

    assert node_to_text(_document("<a/>"), canonicalize=True, ignore_case=False) == EMPTY_DOCUMENT_TEXT


def test_unrelated_errors_are_not_absorbed(monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise(_node: object) -> bytes:
        raise RuntimeError("unexpected")

    monkeypatch.setattr(dom_module, "_c14n", _raise)

    with pytest.raises(RuntimeError, match="unexpected"):
        node_to_text(_document("<a/>"), canonicalize=True, ignore_case=False)


def test_comment_node_without_canonical_form_does_not_raise() -> None:
    first = node_to_text(etree.Comment("one"), canonicalize=True, ignore_case=False)
    second = node_to_text(etree.Comment("two"), canonicalize=True, ignore_case=False)

    assert first == EMPTY_DOCUMENT_TEXT
    assert first == second


def test_registry_selects_dom_comparator_ahead_of_generic_object_comparator() -> None:
    registry = ComparatorRegistry()
    expected = _document("<a/>")
    actual = _document("<a/>")

    assert ObjectComparator().accepts(expected, actual) is True
    assert isinstance(registry.get_comparator_for(expected, actual), DOMNodeComparator)


@pytest.mark.parametrize(
    "node",
    [
        etree.ProcessingInstruction("p", "x"),
        etree.Entity("amp"),
        etree.fromstring("<a><?p x?><b/></a>")[0],
    ],
    ids=["processing-instruction", "entity", "nested-processing-instruction"],
)
def test_non_element_nodes_fall_back_to_empty_document(node: etree._Element) -> None:
    assert node_to_text(node, canonicalize=True, ignore_case=False) == EMPTY_DOCUMENT_TEXT


def test_non_element_nodes_compare_without_raising() -> None:
    DOMNodeComparator().assert_equals(
        etree.ProcessingInstruction("p", "one"),
        etree.ProcessingInstruction("p", "two"),
    )


def test_element_containing_entity_reference_falls_back_to_empty_document() -> None:
    element = etree.Element("a")
    element.append(etree.Entity("amp"))

    assert node_to_text(element, canonicalize=True, ignore_case=False) == EMPTY_DOCUMENT_TEXT


def test_processing_instruction_inside_element_is_kept() -> None:
    with pytest.raises(ComparisonFailure):
        DOMNodeComparator().assert_equals(
            _document("<a><?p one?><b/></a>"),
            _document("<a><?p two?><b/></a>"),
        )


@pytest.mark.parametrize(
    ("expected", "actual"),
    [
        ("<?pi one?><r/>", "<?pi two?><r/>"),
        ('<?pi one?><x:r xmlns:x="urn:t"/>', '<?pi two?><x:r xmlns:x="urn:t"/>'),
        ('<x:r xmlns:x="urn:t"/><?pi one?>', '<x:r xmlns:x="urn:t"/><?pi two?>'),
    ],
    ids=["prolog", "namespaced-prolog", "namespaced-epilog"],
)
def test_nodes_beside_the_root_are_compared(expected: str, actual: str) -> None:
    with pytest.raises(ComparisonFailure) as exc_info:
        DOMNodeComparator().assert_equals(_document(expected), _document(actual))

    assert "<?pi one?>" in exc_info.value.expected_as_string
    assert "<?pi two?>" in exc_info.value.actual_as_string


def test_namespaced_document_keeps_prolog_order() -> None:
    document = _document('<?first a?><?second b?><x:r xmlns:x="urn:t"><x:c/></x:r><?third c?>')

    text = node_to_text(document, canonicalize=True, ignore_case=False)

    assert text.index("<?first a?>") < text.index("<?second b?>") < text.index("<ns0:r")
    assert text.index("</ns0:r>") < text.index("<?third c?>")


def test_namespaced_documents_with_same_prolog_are_equal() -> None:
    DOMNodeComparator().assert_equals(
        _document('<?pi same?><x:r xmlns:x="urn:t"><x:c/></x:r>'),
        _document('<?pi same?><y:r xmlns:y="urn:t"><y:c/></y:r>'),
    )
