"""
Tests for the ElementTree-backed SVG scene adapter.
"""

import pytest

from svganimation.engine import AnimatedObject, AnimationEngine, ManualFrameScheduler
from svganimation.models import EngineSettings, Matrix
from svganimation.scene import SvgDocument

SOURCE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="200px" height="100">'
    '<g id="planet" transform="translate(10, 0) rotate(90)" fill="blue"><circle r="4"/></g>'
    '<circle id="moon" r="2"/>'
    '</svg>'
)


@pytest.fixture
def document():
    return SvgDocument.from_string(SOURCE)


class TestSvgDocument:

    def test_view_box_from_width_and_height(self, document):
        assert document.view_box == (0, 0, 200, 100)

    def test_view_box_attribute_wins(self):
        doc = SvgDocument.from_string('<svg xmlns="http://www.w3.org/2000/svg" viewBox="-5 -5 10 10" width="90"/>')

        assert doc.view_box == (-5, -5, 10, 10)

    def test_root_must_be_svg(self):
        with pytest.raises(ValueError):
            SvgDocument.from_string("<html/>")

    def test_node_lookup(self, document):
        assert document.require_node("moon").name == "moon"
        assert document.get_node("sun") is None
        assert [n.name for n in document.iter_nodes()] == ["planet", "moon"]
        with pytest.raises(KeyError):
            document.require_node("sun")

    def test_node_identity(self, document):
        assert document.require_node("moon") == document.require_node("moon")
        assert len({document.require_node("moon"), document.require_node("moon")}) == 1

    def test_node_attributes(self, document):
        node = document.require_node("planet")

        node.set_attribute("opacity", 0.5)
        node.remove_attribute("fill")

        assert node.get_attributes()["opacity"] == "0.5"
        assert "fill" not in node.get_attributes()

    def test_transform_round_trip(self, document):
        node = document.require_node("moon")

        node.set_transform(Matrix(a=2, d=2, e=1.5))

        assert node.get_transforms() == [Matrix(a=2, d=2, e=1.5)]

    def test_write_and_read_back(self, document, tmp_path):
        path = tmp_path / "out.svg"
        document.write(path)

        again = SvgDocument.from_file(path)

        assert again.require_node("planet").get_attributes()["fill"] == "blue"
        assert "<svg" in again.to_string()


class TestAnimatingSvg:

    def test_engine_animates_document_nodes(self, document):
        scheduler = ManualFrameScheduler()
        engine = AnimationEngine(EngineSettings(show_interface=False), scheduler=scheduler)
        planet = AnimatedObject(document.require_node("planet"), {"transform": {"scale": lambda t: 1 + t}})
        moon = AnimatedObject(document.require_node("moon"), {"r": lambda t: 2 * t})

        engine.init([planet, moon])
        engine.play()
        scheduler.advance(1.0)

        # rotate(90) from the node's transform list is kept
        assert planet.node.get_attributes()["transform"] == "matrix(0 2 -2 0 10 0)"
        assert moon.node.get_attributes()["r"] == "2"

    def test_refresh_restores_transform_list_text(self, document):
        scheduler = ManualFrameScheduler()
        engine = AnimationEngine(EngineSettings(show_interface=False), scheduler=scheduler)
        planet = AnimatedObject(document.require_node("planet"), {"transform": {"scale": lambda t: 3}})
        engine.init(planet)
        assert planet.node.get_attributes()["transform"] == "matrix(0 1 -1 0 10 0)"

        engine.play()
        scheduler.advance(1.0)
        engine.refresh()

        assert planet.node.get_attributes()["transform"] == "translate(10, 0) rotate(90)"
        assert planet.matrix.as_tuple() == pytest.approx((0, 1, -1, 0, 10, 0), abs=1e-9)
