import xml.etree.ElementTree as ET

import pytest

from x3g.core.document import X3dDocument
from x3g.core.settings import ImportSettings
from x3g.x3d.importer import parse_x3d_string


def wrap_scene(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<X3D profile="Immersive" version="3.3">'
        "<head><meta name='title' content='test'/></head>"
        f"<Scene>{body}</Scene>"
        "</X3D>"
    )


@pytest.fixture
def import_scene():
    def _run(body: str, settings: ImportSettings | None = None) -> X3dDocument:
        return parse_x3d_string(wrap_scene(body), settings)

    return _run


@pytest.fixture
def node():
    def _make(xml: str) -> ET.Element:
        return ET.fromstring(xml)

    return _make
