"""
Tests for the typer CLI (render and settings commands).
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from svganimation.cli import app
from svganimation.scene import SvgDocument

SAMPLES = Path(__file__).parent.parent / "samples" / "planet_orbits"

runner = CliRunner()


@pytest.fixture
def scene(tmp_path):
    svg = tmp_path / "scene.svg"
    svg.write_text(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">'
        '<circle id="moon" r="0" transform="translate(50 50)"/></svg>',
        encoding="utf-8",
    )
    descriptors = tmp_path / "moon_descriptors.py"
    descriptors.write_text(
        "DESCRIPTORS = {'moon': {'r': lambda t: 2 * t}}\n"
        "BROKEN = {'moon': {'r': lambda t: 1 / 0}}\n"
        "MISSING = {'sun': {'r': lambda t: t}}\n"
        "def make():\n"
        "    return DESCRIPTORS\n",
        encoding="utf-8",
    )
    return svg, descriptors


class TestRender:

    def test_writes_one_file_per_frame(self, scene, tmp_path):
        svg, descriptors = scene
        out = tmp_path / "frames"

        result = runner.invoke(app, [
            "render", str(svg), f"{descriptors}:DESCRIPTORS",
            "--out", str(out), "--fps", "4", "--duration", "1", "--no-interface",
        ])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == [f"frame_{i:05d}.svg" for i in range(5)]
        last = SvgDocument.from_file(out / "frame_00004.svg")
        assert last.require_node("moon").get_attributes()["r"] == "2"
        assert '"frames": 5' in result.output

    def test_callable_descriptor_source(self, scene, tmp_path):
        svg, descriptors = scene

        result = runner.invoke(app, [
            "render", str(svg), f"{descriptors}:make",
            "--out", str(tmp_path / "frames"), "--fps", "2", "--duration", "1",
        ])

        assert result.exit_code == 0, result.output
        first = (tmp_path / "frames" / "frame_00000.svg").read_text(encoding="utf-8")
        assert "svganimation-arrow" in first

    def test_failing_equation_exits_with_error(self, scene, tmp_path):
        svg, descriptors = scene

        result = runner.invoke(app, [
            "render", str(svg), f"{descriptors}:BROKEN", "--out", str(tmp_path / "frames"), "--fps", "2",
        ])

        assert result.exit_code == 1
        assert "EQUATION_FAILED" in result.output

    def test_unknown_element_id(self, scene, tmp_path):
        svg, descriptors = scene

        result = runner.invoke(app, [
            "render", str(svg), f"{descriptors}:MISSING", "--out", str(tmp_path / "frames"),
        ])

        assert result.exit_code == 2

    def test_bad_descriptor_reference(self, scene, tmp_path):
        svg, _ = scene

        result = runner.invoke(app, ["render", str(svg), "no_colon_here", "--out", str(tmp_path / "frames")])

        assert result.exit_code == 2

    def test_planet_orbits_sample(self, tmp_path):
        out = tmp_path / "orbits"

        result = runner.invoke(app, [
            "render", str(SAMPLES / "planet_orbits.svg"), f"{SAMPLES / 'descriptors.py'}:DESCRIPTORS",
            "--config", str(SAMPLES / "config.yaml"), "--duration", "0.5", "--out", str(out),
        ])

        assert result.exit_code == 0, result.output
        assert len(list(out.glob("frame_*.svg"))) == 16


class TestSettingsCommand:

    def test_defaults(self):
        result = runner.invoke(app, ["settings"])

        assert result.exit_code == 0
        assert json.loads(result.output)["showInterface"] is True

    def test_from_sample_config(self):
        result = runner.invoke(app, ["settings", "--config", str(SAMPLES / "config.yaml")])

        data = json.loads(result.output)
        assert data["fps"] == 30
        assert data["interfaceColor"] == "#9cc4ee"
        assert data["interfaceAnimation"] is False
