"""
Tests for mapping files, config parsing and the headless renderer.
"""
import json
import os

import pytest

from app_window.config_mixin import default_config, parse_config
from models.coord import INF
from models.state import MappingSet, SamplePointMapping
from services.file_operations import (
    build_mapping_document, load_mapping_from_file, save_mapping_to_file
)
from services.wire_format import WireFormatError


# ══════════════════════════════════════════════════════════════════════════
# Mapping Files
# ══════════════════════════════════════════════════════════════════════════

class TestMappingFiles:

    def test_save_then_load(self, tmp_path, identity_points):
        points = identity_points.replace('val1', SamplePointMapping(INF, 2 - 1j))
        path = str(tmp_path / "mapping.json")
        save_mapping_to_file(points, ['polar', 'cartesian'], path)

        loaded_points, families = load_mapping_from_file(path)
        assert loaded_points == points
        assert families == ['cartesian', 'polar']

    def test_document_layout(self, identity_points):
        document = build_mapping_document(identity_points, ['apollonian'])
        assert document['curve_families'] == ['apollonian']
        assert document['points']['val3'] == {'in': [0.0, 5.0], 'out': [0.0, 5.0]}

    def test_families_default_when_missing(self, tmp_path):
        path = tmp_path / "mapping.json"
        path.write_text(json.dumps({'points': build_mapping_document(MappingSet.default(), [])['points']}))
        _, families = load_mapping_from_file(str(path))
        assert families == ['cartesian']

    @pytest.mark.parametrize("content", [
        "{not json",
        json.dumps({'curve_families': []}),
        json.dumps({'points': {}, 'curve_families': []}),
        json.dumps({'points': {'val1': {'in': [0, 0], 'out': [0, 0]},
                               'val2': {'in': [1, 0], 'out': [1, 0]},
                               'val3': {'in': [0, 1], 'out': [0, 1]}},
                    'curve_families': ['spiral']}),
    ])
    def test_invalid_files(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content)
        with pytest.raises(WireFormatError):
            load_mapping_from_file(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_mapping_from_file(str(tmp_path / "nope.json"))


# ══════════════════════════════════════════════════════════════════════════
# Config
# ══════════════════════════════════════════════════════════════════════════

class TestConfig:

    def test_defaults(self):
        config = default_config()
        assert config['theme'] == 'dark'
        assert config['curve_families'] == ['cartesian']
        assert config['points'] == MappingSet.default()

    def test_parse_valid(self):
        config = parse_config({
            'theme': 'light',
            'curve_families': ['polar', 'spiral'],
            'points': {'val1': {'in': 'inf', 'out': [1, 1]},
                       'val2': {'in': [1, 0], 'out': [1, 0]},
                       'val3': {'in': [0, 1], 'out': [0, 1]}},
            'recent_files': ['/tmp/a.json', 7],
        })
        assert config['theme'] == 'light'
        assert config['curve_families'] == ['polar']
        assert config['points'].val1 == SamplePointMapping(INF, 1 + 1j)
        assert config['recent_files'] == ['/tmp/a.json']

    def test_bad_entries_fall_back(self):
        config = parse_config({'theme': 'neon', 'points': {'val1': 3}})
        assert config['theme'] == 'dark'
        assert config['points'] == MappingSet.default()

    def test_not_an_object(self):
        assert parse_config([1, 2])['theme'] == 'dark'


# ══════════════════════════════════════════════════════════════════════════
# Headless CLI
# ══════════════════════════════════════════════════════════════════════════

class TestHeadless:

    def test_renders_png(self, qapp, tmp_path, identity_points, capsys):
        import headless

        mapping = str(tmp_path / "identity.json")
        save_mapping_to_file(identity_points, ['cartesian', 'polar'], mapping)
        out_dir = tmp_path / "renders"

        code = headless.main([mapping, '-o', str(out_dir), '--width', '64', '--height', '48', '--theme', 'light'])
        assert code == 0
        assert os.path.isfile(out_dir / "identity.png")

        from PyQt5.QtGui import QImage
        image = QImage(str(out_dir / "identity.png"))
        assert (image.width(), image.height()) == (64, 48)

    def test_singular_mapping_still_renders(self, qapp, tmp_path, singular_points, capsys):
        import headless

        mapping = str(tmp_path / "singular.json")
        save_mapping_to_file(singular_points, ['cartesian'], mapping)
        code = headless.main([mapping, '-o', str(tmp_path)])
        assert code == 0
        assert "no transformation" in capsys.readouterr().out

    def test_missing_input(self, tmp_path, capsys):
        import headless

        code = headless.main([str(tmp_path / "missing.json"), '-o', str(tmp_path)])
        assert code == 1
        assert "not found" in capsys.readouterr().out

    def test_bad_input_counts_as_failure(self, qapp, tmp_path, capsys):
        import headless

        bad = tmp_path / "bad.json"
        bad.write_text("[]")
        code = headless.main([str(bad), '-o', str(tmp_path)])
        assert code == 1
        assert "[FAIL]" in capsys.readouterr().out
