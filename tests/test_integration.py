"""End-to-end tests: preset scene to image file."""

import numpy as np
from PIL import Image as PILImage

from src.pathtracer.core.scheduler import RenderSettings, render_with_settings
from src.pathtracer.preview.export import save_image
from src.pathtracer.scene.presets import create_scene


class TestEndToEnd:
    """Render small images of the presets and write them out."""

    def test_three_spheres_to_ppm(self, tmp_path):
        settings = RenderSettings.for_aspect_ratio(
            16, 2.0, samples_per_pixel=2, max_depth=5, num_threads=2, seed=1337
        )
        scene = create_scene("three_spheres", 2.0)

        buffer = render_with_settings(scene, settings, strict=True)
        path = save_image(buffer, tmp_path / "three_spheres.ppm")

        lines = path.read_text(encoding="ascii").splitlines()
        assert lines[:3] == ["P3", "16 8", "256"]
        assert len(lines) == 3 + 16 * 8
        for line in lines[3:]:
            values = [int(v) for v in line.split()]
            assert len(values) == 3
            assert all(0 <= v <= 255 for v in values)

    def test_one_weekend_to_png(self, tmp_path):
        settings = RenderSettings(
            width=12, height=6, samples_per_pixel=1, max_depth=4, num_threads=3, seed=7
        )
        scene = create_scene("one_weekend", 2.0, np.random.default_rng(7))

        buffer = render_with_settings(scene, settings)
        path = save_image(buffer, tmp_path / "one_weekend.png")

        assert buffer.is_complete
        with PILImage.open(path) as img:
            assert img.size == (12, 6)
            pixels = np.asarray(img)
        # The top of the frame looks at the sky, which is never black
        assert pixels[0].min() > 0
