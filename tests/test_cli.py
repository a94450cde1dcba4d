"""
CLI Tests
=========

Tests for the `slopes` command line.
"""

import json

import pytest


SMALL_ARGS = [
    "--width", "200",
    "--height", "160",
    "--vertical-margin", "10",
    "--horizontal-margin", "10",
    "--samples-per-row", "40",
    "--num-rows", "6",
    "--jitter-seed", "5",
]


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("generation:\n  distance_between_rows: 4\n")
    return str(path)


class TestGenerateCommand:
    """Tests for `slopes generate`."""

    def test_writes_svg(self, tmp_path, config_file):
        from slopes.cli import main

        output = tmp_path / "drawing.svg"
        code = main(["--config", config_file, "generate", "-o", str(output), *SMALL_ARGS])

        assert code == 0
        assert "<polyline" in output.read_text()

    def test_format_from_extension(self, tmp_path, config_file):
        from slopes.cli import main

        output = tmp_path / "drawing.json"
        assert main(["--config", config_file, "generate", "-o", str(output), *SMALL_ARGS]) == 0

        data = json.loads(output.read_text())
        assert data["stats"]["rows"] == 6

    def test_explicit_format_wins(self, tmp_path, config_file):
        from slopes.cli import main

        output = tmp_path / "drawing.out"
        args = ["--config", config_file, "generate", "-o", str(output), "--format", "json"]
        assert main(args + SMALL_ARGS) == 0

        assert json.loads(output.read_text())["width"] == 200

    def test_seeded_runs_match(self, tmp_path, config_file):
        from slopes.cli import main

        first = tmp_path / "a.json"
        second = tmp_path / "b.json"
        main(["--config", config_file, "generate", "-o", str(first), *SMALL_ARGS])
        main(["--config", config_file, "generate", "-o", str(second), *SMALL_ARGS])

        assert json.loads(first.read_text())["polylines"] == json.loads(second.read_text())["polylines"]

    def test_invalid_configuration_exit_code(self, tmp_path, config_file):
        from slopes.cli import main

        output = tmp_path / "drawing.svg"
        args = ["--config", config_file, "generate", "-o", str(output), *SMALL_ARGS]
        code = main(args + ["--vertical-margin", "100"])

        assert code == 2
        assert not output.exists()

    def test_output_required(self):
        from slopes.cli import main

        with pytest.raises(SystemExit):
            main(["generate"])
