"""
Smoke Tests for the topograph-export CLI
"""

import json

import yaml

from topograph.cli import main
from topograph.core.metis_reader import read_metis


class TestExportCli:
    """Tests for topograph.cli.main."""

    def test_metis_export(self, word_count_file, temp_dir, capsys):
        output = temp_dir / "wc.graph"
        assert main([str(word_count_file), "--output", str(output)]) == 0
        summary = read_metis(output)
        assert (summary.vertex_count, summary.edge_count) == (11, 25)
        assert "Success!" in capsys.readouterr().out

    def test_metis_flags(self, word_count_file, temp_dir):
        output = temp_dir / "wc.graph"
        assert main([str(word_count_file), "--output", str(output), "--edge-weights", "--vertex-weights"]) == 0
        assert output.read_text().splitlines()[0] == "11 25 011"

    def test_json_export(self, word_count_file, temp_dir):
        output = temp_dir / "wc.json"
        assert main([str(word_count_file), "--output", str(output), "--format", "json"]) == 0
        assert len(json.loads(output.read_text())["edges"]) == 25

    def test_default_output_dir(self, word_count_file, temp_dir, monkeypatch):
        monkeypatch.setenv("TOPOGRAPH_OUTPUT_DIR", str(temp_dir / "out"))
        assert main([str(word_count_file)]) == 0
        assert (temp_dir / "out" / "word-count.graph").exists()

    def test_dangling_reference_fails(self, temp_dir, capsys):
        path = temp_dir / "bad.yaml"
        path.write_text(yaml.safe_dump({
            "name": "bad",
            "spouts": [{"name": "s", "parallelism": 1}],
            "bolts": [{"name": "b", "parallelism": 1, "inputs": ["ghost"]}],
        }))
        assert main([str(path), "--output", str(temp_dir / "bad.graph")]) == 1
        assert "ghost" in capsys.readouterr().err
        assert not (temp_dir / "bad.graph").exists()

    def test_bad_name_fails(self, temp_dir):
        path = temp_dir / "bad.json"
        path.write_text(json.dumps({"spouts": [{"name": "bad:name", "parallelism": 1}]}))
        assert main([str(path), "--output", str(temp_dir / "bad.graph")]) == 1

    def test_missing_topology_file(self, temp_dir):
        assert main([str(temp_dir / "missing.json")]) == 1
