"""Tests for SVG to matrix conversion."""

import logging

import numpy as np
import pytest

from iconmatrix import (
    RasterizeOptions,
    SUPERSAMPLE_FACTOR,
    SvgLoadError,
    create_svg_from_icon,
    downsample,
    icon_to_matrix,
    preview_icon_as_matrix,
    render_svg,
    svg_to_matrix,
    svg_to_matrix_async,
)

BLACK_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">'
    '<rect width="10" height="10" fill="black"/></svg>'
)

LEFT_HALF_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="10mm" height="10mm" viewBox="0 0 10 10">'
    '<rect width="5" height="10" fill="#000"/></svg>'
)

NO_VIEWBOX_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
    '<rect width="10" height="10" fill="black"/></svg>'
)

NO_VIEWBOX_CORNER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="10px" height="10px">'
    '<rect x="5" y="5" width="5" height="5" fill="black"/></svg>'
)

EMPTY_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"></svg>'


def _block_image(rows, cols, cell, black_counts):
    """Gray image of rows x cols blocks with the given number of black pixels per block."""
    image = np.full((rows * cell, cols * cell), 255, dtype=np.uint8)
    for r in range(rows):
        for c in range(cols):
            block = image[r * cell:(r + 1) * cell, c * cell:(c + 1) * cell].reshape(-1)
            block[:black_counts[r][c]] = 0
            image[r * cell:(r + 1) * cell, c * cell:(c + 1) * cell] = block.reshape(cell, cell)
    return image


class TestRasterizeOptions:
    """Option defaults and validation."""

    def test_defaults(self):
        options = RasterizeOptions()
        assert options.threshold == 0.1
        assert not options.invert
        assert options.smooth

    def test_threshold_clamped(self):
        assert RasterizeOptions(threshold=0.9).threshold == 0.5
        assert RasterizeOptions(threshold=-1).threshold == 0.0

    def test_supersample_factor(self):
        assert SUPERSAMPLE_FACTOR == 8


class TestDownsample:
    """Box averaging of supersampled pixels."""

    def test_black_and_white(self):
        image = _block_image(2, 2, 8, [[64, 0], [0, 64]])
        frame = downsample(image, 2, 2)
        assert frame.to_list() == [[1.0, 0.0], [0.0, 1.0]]

    def test_partial_coverage(self):
        image = _block_image(1, 2, 8, [[32, 16]])
        frame = downsample(image, 1, 2)
        assert frame.to_list() == [[0.5, 0.25]]

    def test_rounded_to_two_decimals(self):
        image = _block_image(1, 1, 3, [[3]])  # 3 of 9 pixels
        assert downsample(image, 1, 1)[0, 0] == 0.33

    def test_threshold_suppresses_haze(self):
        image = _block_image(1, 2, 8, [[4, 8]])  # 0.0625 and 0.125
        frame = downsample(image, 1, 2, RasterizeOptions(threshold=0.1))
        assert frame[0, 0] == 0.0
        assert frame[0, 1] == pytest.approx(0.13)

    def test_threshold_zero_keeps_everything(self):
        image = _block_image(1, 1, 8, [[4]])
        frame = downsample(image, 1, 1, RasterizeOptions(threshold=0.0))
        assert frame[0, 0] == pytest.approx(0.06)

    def test_invert(self):
        image = _block_image(1, 2, 8, [[64, 0]])
        frame = downsample(image, 1, 2, RasterizeOptions(invert=True))
        assert frame.to_list() == [[0.0, 1.0]]

    def test_invert_complements(self):
        image = _block_image(2, 3, 8, [[0, 13, 27], [40, 51, 64]])
        options = RasterizeOptions(threshold=0.0)
        plain = downsample(image, 2, 3, options).pixels
        inverted = downsample(image, 2, 3, RasterizeOptions(threshold=0.0, invert=True)).pixels
        assert inverted == pytest.approx(1.0 - plain, abs=0.011)

    def test_binarize(self):
        image = _block_image(1, 3, 8, [[40, 24, 4]])  # 0.625, 0.375, 0.0625
        frame = downsample(image, 1, 3, RasterizeOptions(smooth=False))
        assert frame.to_list() == [[1.0, 0.0, 0.0]]

    def test_luminance_weights(self):
        """Pure red is darker than pure green on the ink scale."""
        image = np.zeros((1, 2, 3), dtype=np.uint8)
        image[0, 0] = (255, 0, 0)
        image[0, 1] = (0, 255, 0)
        frame = downsample(image, 1, 2, RasterizeOptions(threshold=0.0))
        assert frame[0, 0] == pytest.approx(0.7)
        assert frame[0, 1] == pytest.approx(0.41)

    def test_transparent_pixels_are_white(self):
        image = np.zeros((8, 8, 4), dtype=np.uint8)
        assert downsample(image, 1, 1)[0, 0] == 0.0

    def test_indivisible_size(self):
        with pytest.raises(ValueError):
            downsample(np.zeros((10, 10), dtype=np.uint8), 3, 3)


class TestRenderSvg:
    """Rendering with resvg."""

    def test_render_size(self):
        pixels = render_svg(BLACK_SVG, 32, 16)
        assert pixels.shape == (16, 32, 3)
        assert pixels.dtype == np.uint8

    def test_background_is_white(self):
        pixels = render_svg(EMPTY_SVG, 16, 16)
        assert pixels.min() == 255

    def test_black_rect_lights_every_cell(self):
        frame = svg_to_matrix(BLACK_SVG, 3, 3)
        assert frame.shape == (3, 3)
        assert all(v == pytest.approx(1.0, abs=0.01) for row in frame for v in row)

    def test_empty_svg_is_dark(self):
        frame = svg_to_matrix(EMPTY_SVG, 4, 4)
        assert frame == frame.filled(0.0)

    def test_physical_units_normalized(self):
        frame = svg_to_matrix(LEFT_HALF_SVG, 2, 2)
        assert frame[0, 0] == pytest.approx(1.0, abs=0.01)
        assert frame[1, 0] == pytest.approx(1.0, abs=0.01)
        assert frame[0, 1] == pytest.approx(0.0, abs=0.01)

    def test_missing_viewbox_scales_content(self):
        """A root without viewBox is scaled to the render size, not cropped."""
        frame = svg_to_matrix(NO_VIEWBOX_SVG, 2, 2)
        assert all(v == pytest.approx(1.0, abs=0.01) for row in frame for v in row)

    def test_missing_viewbox_keeps_positions(self):
        frame = svg_to_matrix(NO_VIEWBOX_CORNER_SVG, 2, 2)
        assert frame[1, 1] == pytest.approx(1.0, abs=0.01)
        assert frame[0, 0] == pytest.approx(0.0, abs=0.01)
        assert frame[0, 1] == pytest.approx(0.0, abs=0.01)

    def test_non_square_grid(self):
        frame = svg_to_matrix(LEFT_HALF_SVG, 3, 5)
        assert frame.shape == (3, 5)

    def test_preview(self):
        assert preview_icon_as_matrix(BLACK_SVG, 5).shape == (5, 5)

    @pytest.mark.parametrize("content", ["", "   ", "<svg", "not svg at all", "<html></html>"])
    def test_invalid_svg(self, content):
        with pytest.raises(SvgLoadError):
            svg_to_matrix(content, 9, 9)

    def test_invalid_svg_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="iconmatrix.rasterize"):
            with pytest.raises(SvgLoadError):
                svg_to_matrix("<svg", 9, 9)
        assert "Could not convert SVG" in caplog.text

    @pytest.mark.asyncio
    async def test_async_conversion(self):
        frame = await svg_to_matrix_async(BLACK_SVG, 2, 2)
        assert frame == svg_to_matrix(BLACK_SVG, 2, 2)

    @pytest.mark.asyncio
    async def test_async_invalid_svg(self):
        with pytest.raises(SvgLoadError):
            await svg_to_matrix_async("<svg", 2, 2)


class TestIconConversion:
    """Restyling and converting stroke icons."""

    def test_restyle(self, square_svg):
        styled = create_svg_from_icon(square_svg, 9)
        assert 'width="72"' in styled
        assert 'viewBox="0 0 24 24"' in styled
        assert "stroke:black" in styled
        assert "fill:none" in styled

    def test_stroke_scaled_for_small_grids(self, square_svg):
        styled = create_svg_from_icon(square_svg, 12, stroke_width=2.0)
        assert "stroke-width:3.2" in styled

    def test_restyle_invalid(self):
        with pytest.raises(SvgLoadError):
            create_svg_from_icon("<svg", 9)

    def test_square_outline(self, square_svg):
        frame = icon_to_matrix(square_svg, 9)
        assert frame.shape == (9, 9)
        assert frame[4, 4] == 0.0
        assert frame[1, 4] > 0.5
        assert frame[4, 1] > 0.5
