"""Tests for the command line entry point."""
import pytest

from hexmosaic.__main__ import main, build_parser


class TestMain:
    def test_svg_output(self, tmp_path):
        out = tmp_path / "mosaic.svg"
        assert main(["--width", "300", "--height", "200", "--frames", "5",
                     "--seed", "1", "--output", str(out)]) == 0
        text = out.read_text(encoding="utf-8")
        assert text.startswith("<svg")
        assert '<polygon class="cell"' in text

    def test_memory_backend(self):
        assert main(["--backend", "memory", "--frames", "3", "--seed", "2",
                     "--width", "200", "--height", "200"]) == 0

    def test_output_needs_svg(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["--backend", "memory", "--frames", "1",
                  "--output", str(tmp_path / "x.svg")])

    def test_invalid_radius(self):
        assert main(["--radius", "-1"]) == 2

    def test_config_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"radius": 40, "snap": 2}')
        assert main(["--config", str(path), "--frames", "2",
                     "--width", "200", "--height", "150"]) == 0

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.backend == "svg"
        assert args.frames == 100
