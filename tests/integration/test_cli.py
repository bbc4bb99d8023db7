"""
Integration tests for the command line interface.
"""

import unittest
import argparse
import json
import os
import tempfile
from contextlib import redirect_stderr
from io import StringIO

import pygame

from autoviz.main import build_camera, main, parse_canvas_size
from autoviz.config import reset_config, reset_settings
from autoviz.rendering import SceneFollowCamera, TargetFollowCamera
from autoviz.scene import parse_scene


SCENE = {
    "background": "#202020",
    "vehicles": [
        {"id": 1, "x": 0.0, "y": 0.0, "theta": 0.0, "color": "car_ego"},
        {"id": 2, "x": 15.0, "y": 3.5, "theta": 0.1},
    ],
    "lane_vehicles": [{"id": "lane-car", "s": 40.0}],
}


class TestCommandLine(unittest.TestCase):
    """Test running the autoviz command end to end."""

    def setUp(self):
        reset_config()
        reset_settings()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.scene_path = os.path.join(self.temp_dir.name, "scene.json")
        with open(self.scene_path, 'w', encoding='utf-8') as f:
            json.dump(SCENE, f)

    def tearDown(self):
        self.temp_dir.cleanup()
        reset_config()
        reset_settings()

    def _run(self, *args):
        stderr = StringIO()
        with redirect_stderr(stderr):
            code = main([self.scene_path, *args])
        return code, stderr.getvalue()

    def _output(self, name):
        return os.path.join(self.temp_dir.name, name)

    def test_render_png(self):
        output = self._output("scene.png")
        code, _ = self._run("-o", output, "--canvas-size", "320x240", "--log-level", "WARNING")

        self.assertEqual(code, 0)
        self.assertEqual(pygame.image.load(output).get_size(), (320, 240))

    def test_target_follow(self):
        output = self._output("follow.png")
        code, _ = self._run("-o", output, "--camera", "target-follow", "--target-id", "2",
                            "--zoom", "12", "--canvas-size", "200x100", "--log-level", "ERROR")

        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(output))

    def test_config_file(self):
        config_path = self._output("config.json")
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump({"rendering": {"canvas_width": 128, "canvas_height": 64}}, f)
        output = self._output("configured.png")

        code, _ = self._run("-o", output, "--config", config_path, "--log-level", "ERROR")

        self.assertEqual(code, 0)
        self.assertEqual(pygame.image.load(output).get_size(), (128, 64))

    def test_unsupported_extension(self):
        code, err = self._run("-o", self._output("scene.gif"), "--log-level", "CRITICAL")
        self.assertEqual(code, 1)
        self.assertIn("gif", err)

    def test_missing_scene(self):
        os.remove(self.scene_path)
        code, err = self._run("-o", self._output("scene.png"), "--log-level", "CRITICAL")
        self.assertEqual(code, 1)
        self.assertIn("Error:", err)

    def test_unknown_target(self):
        code, _ = self._run("-o", self._output("scene.png"), "--camera", "target-follow",
                            "--target-id", "99", "--log-level", "CRITICAL")
        self.assertEqual(code, 1)

    def test_target_id_required(self):
        code, err = self._run("-o", self._output("scene.png"), "--camera", "target-follow",
                              "--log-level", "CRITICAL")
        self.assertEqual(code, 1)
        self.assertIn("--target-id", err)


class TestArgumentHelpers(unittest.TestCase):
    """Test argument parsing helpers."""

    def setUp(self):
        reset_config()
        reset_settings()
        self.frame = parse_scene(SCENE).frame

    def tearDown(self):
        reset_config()
        reset_settings()

    def _args(self, **kwargs):
        values = {"camera": "fit", "zoom": None, "rotation": 0.0, "x": None, "y": None,
                  "target_id": None}
        values.update(kwargs)
        return argparse.Namespace(**values)

    def test_parse_canvas_size(self):
        self.assertEqual(parse_canvas_size("800x600"), (800, 600))
        self.assertEqual(parse_canvas_size("64X32"), (64, 32))
        for bad in ("800", "0x10", "axb", "10x-1"):
            with self.subTest(size=bad):
                with self.assertRaises(ValueError):
                    parse_canvas_size(bad)

    def test_fit_has_no_camera(self):
        self.assertIsNone(build_camera(self._args(), self.frame))

    def test_target_id_matches_scene_ids(self):
        camera = build_camera(self._args(camera="target-follow", target_id="2"), self.frame)
        self.assertIsInstance(camera, TargetFollowCamera)
        self.assertEqual(camera.target_id, 2)
        self.assertEqual(camera.state.position.to_tuple(), (15.0, 3.5))

        camera = build_camera(self._args(camera="target-follow", target_id="lane-car"), self.frame)
        self.assertEqual(camera.state.position.to_tuple(), (40.0, 0.0))

    def test_scene_follow_pinned_axis(self):
        camera = build_camera(self._args(camera="scene-follow", y=-2.0, zoom=3.0), self.frame)
        self.assertIsInstance(camera, SceneFollowCamera)
        self.assertEqual(camera.state.position.y, -2.0)
        self.assertEqual(camera.state.zoom, 3.0)

    def test_static_camera(self):
        camera = build_camera(self._args(camera="static", x=4.0, zoom=2.0), self.frame)
        self.assertEqual(camera.state.position.to_tuple(), (4.0, 0.0))
        self.assertEqual(camera.state.zoom, 2.0)


if __name__ == '__main__':
    unittest.main()
