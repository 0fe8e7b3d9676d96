from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from polyview.config import ENV_HEIGHT, ENV_HIT_TOLERANCE, ENV_WIDTH, PaddingRatios, ViewerConfig
from polyview.errors import ConfigError


class ViewerConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = ViewerConfig()
        self.assertEqual((config.canvas_width, config.canvas_height), (800, 600))
        self.assertEqual(config.padding, PaddingRatios(right=0.25, left=0.25, top=0.20, bottom=0.10))
        self.assertEqual(config.hit_tolerance_px, 5.0)
        self.assertEqual(config.label_offset_px, (5, -5))

    def test_from_toml_reads_viewer_table(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "viewer.toml"
            path.write_text(
                "[viewer]\n"
                "canvas_width = 1024\n"
                "hit_tolerance_px = 3\n"
                "background = [10, 20, 30]\n"
                "[viewer.padding]\n"
                "top = 0.5\n",
                encoding="utf-8",
            )
            config = ViewerConfig.from_toml(path)
        self.assertEqual(config.canvas_width, 1024)
        self.assertEqual(config.canvas_height, 600)
        self.assertEqual(config.hit_tolerance_px, 3.0)
        self.assertEqual(config.background, (10, 20, 30, 255))
        self.assertEqual(config.padding.top, 0.5)
        self.assertEqual(config.padding.right, 0.25)

    def test_from_toml_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            ViewerConfig.from_toml("/nonexistent/viewer.toml")

    def test_invalid_toml_and_values(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "viewer.toml"
            path.write_text("[viewer\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                ViewerConfig.from_toml(path)
        with self.assertRaisesRegex(ConfigError, "unknown viewer settings: zoom_speed"):
            ViewerConfig.from_mapping({"zoom_speed": 2})
        with self.assertRaises(ConfigError):
            ViewerConfig.from_mapping({"canvas_width": "wide"})
        with self.assertRaises(ConfigError):
            ViewerConfig.from_mapping({"line_color": [0, 0, 300]})
        with self.assertRaises(ConfigError):
            ViewerConfig.from_mapping({"padding": {"middle": 0.1}})
        with self.assertRaises(ConfigError):
            ViewerConfig(hit_tolerance_px=0.0)

    def test_nan_spans_and_tolerances_are_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            ViewerConfig(min_span=float("nan"))
        with self.assertRaises(ConfigError):
            ViewerConfig(hit_tolerance_px=float("nan"))
        with self.assertRaises(ConfigError):
            ViewerConfig(min_span=float("inf"))
        with self.assertRaises(ConfigError):
            ViewerConfig().with_env_overrides({ENV_HIT_TOLERANCE: "nan"})

    def test_env_overrides(self) -> None:
        env = {ENV_WIDTH: "1280", ENV_HEIGHT: " 720 ", ENV_HIT_TOLERANCE: "7.5"}
        config = ViewerConfig().with_env_overrides(env)
        self.assertEqual((config.canvas_width, config.canvas_height), (1280, 720))
        self.assertEqual(config.hit_tolerance_px, 7.5)
        base = ViewerConfig()
        self.assertIs(base.with_env_overrides({}), base)
        with self.assertRaises(ConfigError):
            base.with_env_overrides({ENV_WIDTH: "big"})


if __name__ == "__main__":
    unittest.main()
