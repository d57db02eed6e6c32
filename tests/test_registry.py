"""Tests for DEF/USE resolution and graph attachment."""

import pytest

from x3g.core.document import X3dDocument
from x3g.core.models import GeometryKind, NodeElement, NodeKind
from x3g.core.registry import ReferenceRegistry
from x3g.utils.errors import (
    X3gAttributeValueError,
    X3gDuplicateDefinitionError,
    X3gKindMismatchError,
    X3gMissingReferenceError,
    X3gReferenceError,
    X3gValidationError,
)
from x3g.x3d.geometry2d import read_geometry2d


def test_registry_define_and_resolve() -> None:
    reg = ReferenceRegistry()
    el = NodeElement(kind=GeometryKind.CIRCLE2D)

    reg.define("C", el)
    reg.define(None, NodeElement(kind=GeometryKind.CIRCLE2D))
    reg.define("", NodeElement(kind=GeometryKind.CIRCLE2D))

    assert len(reg) == 1
    assert "C" in reg
    assert el.identifier == "C"
    assert reg.resolve("C", GeometryKind.CIRCLE2D) is el


def test_registry_errors() -> None:
    reg = ReferenceRegistry()
    reg.define("R", NodeElement(kind=GeometryKind.RECTANGLE2D))

    with pytest.raises(X3gMissingReferenceError) as missing:
        reg.resolve("nope", GeometryKind.RECTANGLE2D)
    assert missing.value.identifier == "nope"

    with pytest.raises(X3gKindMismatchError):
        reg.resolve("R", GeometryKind.DISK2D)

    with pytest.raises(X3gDuplicateDefinitionError):
        reg.define("R", NodeElement(kind=GeometryKind.RECTANGLE2D))

    assert issubclass(X3gKindMismatchError, X3gReferenceError)


def test_use_returns_same_element(node) -> None:
    doc = X3dDocument()
    first = read_geometry2d(doc, node('<Disk2D DEF="D" innerRadius="0.5"/>'), GeometryKind.DISK2D)
    vertices = list(first.vertices)

    reused = read_geometry2d(doc, node('<Disk2D USE="D" innerRadius="9"/>'), GeometryKind.DISK2D)

    assert reused is first
    assert reused.vertices == vertices
    assert doc.root.children == [first]
    assert doc.elements == [first]


def test_use_is_not_reattached(import_scene) -> None:
    doc = import_scene(
        '<Shape DEF="S1"><Circle2D DEF="C" radius="2"/></Shape>'
        '<Shape DEF="S2"><Circle2D USE="C"/></Shape>'
    )

    circle = doc.find("C")
    assert doc.geometry() == [circle]
    assert circle.parent is doc.find("S1")
    assert doc.find("S2").children == []


def test_use_kind_mismatch(import_scene) -> None:
    with pytest.raises(X3gKindMismatchError):
        import_scene('<Shape><Circle2D DEF="C"/></Shape><Shape><Disk2D USE="C"/></Shape>')


def test_use_missing_and_forward_reference(import_scene) -> None:
    with pytest.raises(X3gMissingReferenceError):
        import_scene('<Shape><Rectangle2D USE="R"/></Shape><Shape><Rectangle2D DEF="R"/></Shape>')


def test_duplicate_def(import_scene) -> None:
    with pytest.raises(X3gDuplicateDefinitionError):
        import_scene('<Shape><Circle2D DEF="X"/></Shape><Shape><Arc2D DEF="X"/></Shape>')


def test_def_and_use_together(node) -> None:
    doc = X3dDocument()
    with pytest.raises(X3gValidationError):
        read_geometry2d(doc, node('<Circle2D DEF="A" USE="B"/>'), GeometryKind.CIRCLE2D)


def test_failed_element_is_not_registered_or_attached(node) -> None:
    doc = X3dDocument()

    with pytest.raises(X3gAttributeValueError):
        read_geometry2d(doc, node('<Disk2D DEF="D" innerRadius="2" outerRadius="1"/>'), GeometryKind.DISK2D)

    assert "D" not in doc.registry
    assert doc.root.children == []
    assert doc.elements == []


def test_failed_metadata_child_unregisters_element(node) -> None:
    doc = X3dDocument()
    xml = (
        '<Circle2D DEF="C">'
        '<MetadataString DEF="ok" value=\'"a"\'/>'
        '<MetadataInteger value="x"/>'
        "</Circle2D>"
    )

    with pytest.raises(X3gAttributeValueError) as ei:
        read_geometry2d(doc, node(xml), GeometryKind.CIRCLE2D)

    assert ei.value.tag == "MetadataInteger"
    assert "C" not in doc.registry
    assert "ok" not in doc.registry
    assert len(doc.registry) == 0
    assert doc.root.children == []
    assert doc.elements == []


def test_registry_rollback_keeps_earlier_entries() -> None:
    reg = ReferenceRegistry()
    kept = NodeElement(kind=GeometryKind.CIRCLE2D)
    reg.define("A", kept)
    reg.track(kept)

    mark = reg.mark()
    dropped = NodeElement(kind=GeometryKind.ARC2D)
    reg.define("B", dropped)
    reg.track(dropped)
    reg.rollback(mark)

    assert reg.lookup("A") is kept
    assert "B" not in reg
    assert reg.elements == [kept]


def test_new_element_parent_is_current_container(node) -> None:
    doc = X3dDocument()
    group = NodeElement(kind=NodeKind.GROUP)
    doc.attach(group)

    with doc.open_container(group):
        el = read_geometry2d(doc, node("<Polypoint2D point='1 1'/>"), GeometryKind.POLYPOINT2D)

    assert el.parent is group
    assert group.children == [el]
    assert doc.current_container() is doc.root
