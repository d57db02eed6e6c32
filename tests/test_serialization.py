"""Tests for the JSON geometry dump."""

import json

from x3g.core.serialization import geometry_to_dict, save_geometry_json


def test_geometry_to_dict(import_scene) -> None:
    doc = import_scene(
        '<Shape DEF="S"><Rectangle2D DEF="R" solid="true">'
        '<MetadataString name="nota" value=\'"hola"\'/>'
        "</Rectangle2D></Shape>"
    )

    d = geometry_to_dict(doc)

    assert d["arc_segments"] == 10
    (rect,) = d["geometry"]
    assert rect["kind"] == "Rectangle2D"
    assert rect["id"] == "R"
    assert rect["parent"] == "Group:S"
    assert rect["primitive_arity"] == 4
    assert rect["solid"] is True
    assert rect["vertices"][0] == [1.0, -1.0, 0.0]
    assert rect["metadata"] == [{"tag": "MetadataString", "name": "nota", "values": ["hola"]}]


def test_save_geometry_json_forces_extension(tmp_path, import_scene) -> None:
    doc = import_scene("<Shape><Polypoint2D point='1 2'/></Shape>")

    out = save_geometry_json(doc, tmp_path / "out" / "dump.txt")

    assert out.name == "dump.json"
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["geometry"][0]["vertices"] == [[1.0, 2.0, 0.0]]
    assert not list(out.parent.glob("*.tmp"))
