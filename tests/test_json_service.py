"""
Tests for diagram JSON persistence and PNG snapshot export.
"""

import json

import numpy as np
import pytest
from PIL import Image

from config.constants import DEFAULT_COLOR_MAP, DEFAULT_LAYERS
from models.layer import Layer
from models.view_settings_model import ViewSettingsModel
from services.json_service import DiagramFormatError, JsonService
from services.snapshot_export import SnapshotExport


@pytest.fixture()
def service():
    return JsonService()


class TestSaveLoad:
    def test_save_then_load(self, service, tmp_path):
        settings = ViewSettingsModel()
        settings.update({"gap": 3.5, "font_family": "Georgia", "show_label_box": False})
        layers = [Layer("Input (x)", 180, 320, 2), Layer("self.conv1", 42, 77, 8, color=0x112233)]
        colors = {"Input": 0x4285F4, "Conv": 0xF4B400}

        path = service.save(tmp_path / "net.json", layers, colors, settings)
        document = service.load(path)

        assert document.layers == layers
        assert document.color_map == [("Input", 0x4285F4), ("Conv", 0xF4B400)]
        assert document.settings["gap"] == 3.5
        assert document.settings["font_family"] == "Georgia"
        assert document.settings["show_label_box"] is False

    def test_colors_are_written_as_hex(self, service, tmp_path):
        path = service.save(
            tmp_path / "net.json", [Layer("a", 1, 1, 1, color=0xFF0000)], {"A": 0x00FF00}, ViewSettingsModel()
        )
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["layers"][0]["color"] == "#ff0000"
        assert data["color_map"] == {"A": "#00ff00"}


class TestParse:
    def test_missing_sections_use_defaults(self, service):
        document = service.parse({})
        assert len(document.layers) == len(DEFAULT_LAYERS)
        assert document.color_map == list(DEFAULT_COLOR_MAP.items())
        assert document.settings == {}

    def test_bare_layer_list(self, service):
        document = service.parse([{"name": "a", "H": 2, "W": 3, "C": 4}])
        assert document.layers == [Layer("a", 2, 3, 4)]

    def test_integer_colors_accepted(self, service):
        document = service.parse({"layers": [], "color_map": {"X": 255}})
        assert document.color_map == [("X", 255)]

    @pytest.mark.parametrize(
        "data",
        [
            "layers",
            {"layers": {"a": 1}},
            {"layers": [{"name": "a", "H": 1, "W": 1}]},
            {"layers": [{"name": "a", "H": "big", "W": 1, "C": 1}]},
            {"layers": [{"name": "a", "H": 0, "W": 1, "C": 1}]},
            {"layers": [], "color_map": {"A": "blue"}},
            {"layers": [], "color_map": []},
            {"layers": [], "settings": {"gap": "wide"}},
            {"layers": [{"name": "a", "H": float("inf"), "W": 1, "C": 1}]},
            {"layers": [], "settings": {"label_font_size": float("inf")}},
            {"layers": [], "settings": {"show_label_box": "false"}},
            {"layers": [], "settings": {"show_name_labels": 0}},
        ],
    )
    def test_invalid_documents_raise(self, service, data):
        with pytest.raises(DiagramFormatError):
            service.parse(data)

    def test_not_json(self, service, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            service.load(path)

    def test_huge_number_in_file_is_a_format_error(self, service, tmp_path):
        path = tmp_path / "huge.json"
        path.write_text('{"layers": [{"name": "a", "H": 1e400, "W": 1, "C": 1}]}', encoding="utf-8")
        with pytest.raises(DiagramFormatError):
            service.load(path)

    def test_not_utf8(self, service, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes('{"layers": [{"name": "Entrée", "H": 1, "W": 1, "C": 1}]}'.encode("latin-1"))
        with pytest.raises(ValueError):
            service.load(path)


class TestSnapshotExport:
    def test_writes_png(self, tmp_path):
        rgba = np.zeros((4, 6, 4), dtype=np.uint8)
        rgba[..., 0] = 255
        rgba[..., 3] = 255

        path = SnapshotExport().save_png(tmp_path / "shot", rgba)

        assert path.suffix == ".png"
        with Image.open(path) as image:
            assert image.size == (6, 4)
            assert image.getpixel((0, 0))[:3] == (255, 0, 0)

    def test_rejects_flat_array(self, tmp_path):
        with pytest.raises(ValueError):
            SnapshotExport().save_png(tmp_path / "bad.png", np.zeros((4, 4)))
