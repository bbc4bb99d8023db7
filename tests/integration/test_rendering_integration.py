"""
Integration tests for the rendering pipeline.

Renders scenes onto real surfaces and inspects the resulting pixels and
files.
"""

import unittest
import os
import tempfile

import pygame

from autoviz.rendering import (
    CameraState, Circle, ComposedCamera, ImageCanvas, RoundRect, StandardColors,
    TargetFollowCamera, Text, ZoomingCamera, render, update_camera, write
)
from autoviz.core.exceptions import RenderingError, SurfaceTypeMismatchError
from autoviz.scene import Entity, Frame, Pose2D, VehicleDef, VehicleState

try:
    from autoviz.rendering.vector import CairoStreamCanvas, PDFCanvas, SVGCanvas
except (ImportError, OSError):
    # cairocffi needs the cairo shared library
    CairoStreamCanvas = SVGCanvas = PDFCanvas = None


BACKGROUND = StandardColors.BLACK


def make_frame():
    return Frame([
        Entity(VehicleState(Pose2D(0.0, 0.0)), VehicleDef(4.0, 2.0), id=1, color=StandardColors.BLUE),
        Entity(VehicleState(Pose2D(30.0, 3.5, 0.2)), VehicleDef(4.0, 2.0), id=2, color="red"),
    ])


class TestImageRendering(unittest.TestCase):
    """Test rendering onto the pygame raster canvas."""

    def setUp(self):
        self.state = CameraState(position=(0.0, 0.0), zoom=10.0, canvas_width=200, canvas_height=100)

    def test_background_and_circle(self):
        surface = render([Circle(0.0, 0.0, 2.0, color=StandardColors.RED)],
                         camera=self.state, background_color=BACKGROUND)

        self.assertIsInstance(surface, ImageCanvas)
        self.assertEqual((surface.width, surface.height), (200, 100))
        self.assertEqual(surface.get_pixel(100, 50), StandardColors.RED)
        self.assertEqual(surface.get_pixel(0, 0), BACKGROUND)
        self.assertEqual(surface.get_pixel(199, 99), BACKGROUND)

    def test_vehicle_footprint(self):
        surface = render([make_frame()], camera=self.state, background_color=BACKGROUND)

        # 4 m x 2 m at 10 pix/m around the canvas center
        self.assertEqual(surface.get_pixel(85, 45), StandardColors.BLUE)
        self.assertEqual(surface.get_pixel(85, 30), BACKGROUND)
        self.assertEqual(surface.get_pixel(130, 50), BACKGROUND)

    def test_overlay_ignores_camera(self):
        far_away = CameraState(position=(500.0, -300.0), zoom=2.0, canvas_width=200, canvas_height=100)
        surface = render(
            [(RoundRect(0.5, 0.5, 0.2, 0.2, color=StandardColors.GREEN), "camera_relative"),
             (Circle(10.0, 10.0, 3.0, color=StandardColors.YELLOW), "camera_pixels")],
            camera=far_away, background_color=BACKGROUND
        )

        self.assertEqual(surface.get_pixel(100, 50), StandardColors.GREEN)
        self.assertEqual(surface.get_pixel(10, 10), StandardColors.YELLOW)

    def test_later_instructions_paint_over(self):
        surface = render([Circle(0.0, 0.0, 2.0, color=StandardColors.RED),
                          Circle(0.0, 0.0, 1.0, color=StandardColors.WHITE)],
                         camera=self.state, background_color=BACKGROUND)
        self.assertEqual(surface.get_pixel(100, 50), StandardColors.WHITE)

    def test_empty_scene_placeholder(self):
        surface = render([], camera=CameraState(canvas_width=400, canvas_height=200))

        # no background is painted for the placeholder
        self.assertEqual(surface.get_pixel(0, 0).a, 0)
        drawn = [
            surface.get_pixel(x, y)
            for x in range(50, 350)
            for y in range(90, 110)
            if surface.get_pixel(x, y).a > 0
        ]
        self.assertTrue(drawn)
        self.assertTrue(all(c.g == 0 and c.b == 0 for c in drawn))
        self.assertTrue(any(c.r > 200 for c in drawn))

    def test_text_labels(self):
        surface = render([Text("ego", 0.0, 0.0, font_size=20, color="white", align_center=True)],
                         camera=self.state, background_color=BACKGROUND)
        lit = [
            (x, y) for x in range(80, 120) for y in range(40, 60)
            if surface.get_pixel(x, y) != BACKGROUND
        ]
        self.assertTrue(lit)

    def test_camera_follows_target(self):
        frame = make_frame()
        camera = ComposedCamera(
            [TargetFollowCamera(2), ZoomingCamera(zoom_target=10.0, dz=20.0)],
            state=CameraState(canvas_width=200, canvas_height=100)
        )
        update_camera(camera, frame)

        surface = render([frame], camera=camera, background_color=BACKGROUND)

        # rear half of the body, clear of the heading marker
        self.assertEqual(surface.get_pixel(90, 52), StandardColors.RED)
        self.assertEqual(surface.get_pixel(5, 50), BACKGROUND)

    def test_auto_fit_shows_all_vehicles(self):
        surface = render([make_frame()], canvas_width=300, canvas_height=100,
                         background_color=BACKGROUND)

        colors = {surface.get_pixel(x, y) for x in range(300) for y in range(100)}
        self.assertIn(StandardColors.BLUE, colors)
        self.assertIn(StandardColors.RED, colors)


class TestImageOutput(unittest.TestCase):
    """Test writing raster surfaces."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_write_png(self):
        surface = render([make_frame()], canvas_width=320, canvas_height=240,
                         background_color=BACKGROUND)
        path = write(surface, os.path.join(self.temp_dir.name, "scene.png"))

        self.assertTrue(path.exists())
        self.assertEqual(pygame.image.load(str(path)).get_size(), (320, 240))

    def test_image_to_vector_extension(self):
        surface = render([make_frame()], canvas_width=64, canvas_height=64)
        with self.assertRaises(SurfaceTypeMismatchError):
            write(surface, os.path.join(self.temp_dir.name, "scene.svg"))
        self.assertFalse(os.path.exists(os.path.join(self.temp_dir.name, "scene.svg")))


@unittest.skipIf(SVGCanvas is None, "cairo library not available")
class TestVectorOutput(unittest.TestCase):
    """Test SVG and PDF stream surfaces."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _render(self, surface):
        return render([make_frame(), (Text("t = 0.0 s", 10, 20), "camera_pixels")],
                      surface=surface, canvas_width=surface.width,
                      canvas_height=surface.height, background_color=BACKGROUND)

    def test_stream_base_needs_a_format(self):
        self.assertIn("_create_surface", CairoStreamCanvas.__abstractmethods__)
        with self.assertRaises(TypeError):
            CairoStreamCanvas(300, 200)

    def test_svg(self):
        surface = self._render(SVGCanvas(300, 200))
        path = write(surface, os.path.join(self.temp_dir.name, "scene.svg"))

        with open(path, 'rb') as f:
            data = f.read()
        self.assertIn(b"<svg", data)
        self.assertTrue(surface.finished)

    def test_pdf(self):
        surface = self._render(PDFCanvas(300, 200))
        path = write(surface, os.path.join(self.temp_dir.name, "scene.pdf"))

        with open(path, 'rb') as f:
            self.assertTrue(f.read().startswith(b"%PDF"))

    def test_mismatched_extension(self):
        surface = self._render(SVGCanvas(100, 100))
        with self.assertRaises(SurfaceTypeMismatchError):
            write(surface, os.path.join(self.temp_dir.name, "scene.pdf"))
        with self.assertRaises(SurfaceTypeMismatchError):
            write(surface, os.path.join(self.temp_dir.name, "scene.png"))

    def test_no_drawing_after_finish(self):
        surface = self._render(SVGCanvas(100, 100))
        surface.getvalue()
        with self.assertRaises(RenderingError):
            surface.draw_circle(0, 0, 1, "white")


if __name__ == '__main__':
    unittest.main()
