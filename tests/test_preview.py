"""
Tests for animation grid previews
"""

import base64
from io import BytesIO

import pytest
from PIL import Image

from md3kit import pack
from md3kit.texturing import preview_to_base64, render_preview


class TestRenderPreview:

    def test_size_matches_grid(self, surface_factory):
        grid = pack(surface_factory(10, 3), 4)
        image = render_preview(grid)
        assert image.mode == 'RGBA'
        assert image.size == (4, 9)

    def test_scale(self, surface_factory):
        grid = pack(surface_factory(5, 2))
        assert render_preview(grid, scale=3).size == (15, 6)

    def test_channels_span_full_range(self, surface_factory):
        grid = pack(surface_factory(5, 4))
        image = render_preview(grid)
        red = [image.getpixel((x, y))[0] for y in range(grid.height) for x in range(grid.width)]
        assert min(red) == 0
        assert max(red) == 255

    def test_constant_channel_is_zero(self, surface_factory):
        surface = surface_factory(1, 1)
        image = render_preview(pack(surface))
        assert image.getpixel((0, 0)) == (0, 0, 0, 0)

    def test_invalid_scale(self, surface_factory):
        with pytest.raises(ValueError):
            render_preview(pack(surface_factory(2, 1)), scale=0)

    def test_base64_png(self, surface_factory):
        encoded = preview_to_base64(pack(surface_factory(4, 2)), scale=2)
        image = Image.open(BytesIO(base64.b64decode(encoded)))
        assert image.format == 'PNG'
        assert image.size == (8, 4)
