# IconMatrix - Rasterizer
"""SVG to brightness-matrix conversion using resvg.

The icon is rendered at SUPERSAMPLE_FACTOR times the target grid size onto a
white background and each cell is box-averaged down to one brightness value.
Dark ink on the white background becomes lit cells: a black stroke yields
brightness 1, white or transparent areas yield 0.

Rendering directly at e.g. 9x9 pixels turns thin-stroke icons into aliased
blobs. Rendering at 8x and averaging keeps strokes visible.
"""

from __future__ import annotations

import asyncio
import io
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

import numpy as np
from PIL import Image
from resvg_py import svg_to_bytes

from .config import settings
from .errors import SvgLoadError
from .frame import Frame

logger = logging.getLogger(__name__)

SUPERSAMPLE_FACTOR = settings.SUPERSAMPLE_FACTOR
"Render at this multiple of the target grid size"

LUMINANCE_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)
"Perceptual RGB weights used to compute per-pixel luminance"

ICON_VIEWBOX_SIZE = 24
"Edge length of the viewBox of the supported stroke icon sets"

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
SHAPE_TAGS = {"path", "line", "circle", "rect", "polyline", "polygon", "ellipse"}


@dataclass(frozen=True)
class RasterizeOptions:
    """Options for converting an SVG to a frame.

    :ivar threshold: Cells darker than this become exactly 0, clamped to
        [0, 0.5]. Suppresses faint anti-aliasing haze.
    :ivar invert: Map light source pixels to lit cells instead
    :ivar smooth: Keep gradual brightness values. If False every cell is
        binarized to 0 or 1.
    :ivar stroke_width: Stroke width used when restyling icons with
        :func:`create_svg_from_icon`
    """

    threshold: float = settings.DEFAULT_THRESHOLD
    invert: bool = False
    smooth: bool = True
    stroke_width: float = 2.0

    def __post_init__(self):
        object.__setattr__(self, "threshold", max(0.0, min(0.5, self.threshold)))


UNIT_TO_PX = {
    "": 1.0,
    "px": 1.0,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
    "mm": 96.0 / 25.4,
    "cm": 96.0 / 2.54,
    "in": 96.0,
}
"CSS pixels per unit of absolute SVG lengths"


def _parse_length(svg_tag: str, name: str) -> float | None:
    """Returns an absolute root length attribute in pixels, None if missing or relative."""
    match = re.search(
        rf'\s{name}\s*=\s*["\']\s*([0-9]*\.?[0-9]+)\s*([a-zA-Z]*)\s*["\']', svg_tag
    )
    if not match:
        return None
    factor = UNIT_TO_PX.get(match.group(2).lower())
    if factor is None:
        return None
    return float(match.group(1)) * factor


def _add_missing_viewbox(svg_tag: str) -> str:
    """Adds a viewBox spanning the intrinsic size to a root tag without one.

    Without a viewBox, replacing width and height would crop the content
    instead of scaling it to the new size.
    """
    if re.search(r'\sviewBox\s*=', svg_tag):
        return svg_tag
    width = _parse_length(svg_tag, "width")
    height = _parse_length(svg_tag, "height")
    if not width or not height:
        return svg_tag
    return re.sub(
        r'^<svg', f'<svg viewBox="0 0 {width:g} {height:g}"', svg_tag, count=1, flags=re.IGNORECASE
    )


def _normalize_svg_dimensions(svg_content: str, width: int, height: int) -> str:
    """Replaces the width and height of the root <svg> element by pixel values.

    Some SVGs use units like mm, cm or pt, or no size at all, which resvg does
    not map to the requested output size.

    :param svg_content: Raw SVG string
    :param width: Target width in pixels
    :param height: Target height in pixels
    :return: SVG string with pixel dimensions
    """
    svg_tag_match = re.search(r'(<svg[^>]*>)', svg_content, re.IGNORECASE | re.DOTALL)
    if not svg_tag_match:
        return svg_content

    svg_tag = svg_tag_match.group(1)
    new_svg_tag = _add_missing_viewbox(svg_tag)
    new_svg_tag = re.sub(
        r'\swidth\s*=\s*["\'][^"\']*["\']', f' width="{width}"', new_svg_tag, count=1
    )
    new_svg_tag = re.sub(
        r'\sheight\s*=\s*["\'][^"\']*["\']', f' height="{height}"', new_svg_tag, count=1
    )

    # Add missing attributes directly after the tag name
    if not re.search(r'\swidth\s*=', new_svg_tag):
        new_svg_tag = re.sub(r'^<svg', f'<svg width="{width}"', new_svg_tag, count=1, flags=re.IGNORECASE)
    if not re.search(r'\sheight\s*=', new_svg_tag):
        new_svg_tag = re.sub(r'^<svg', f'<svg height="{height}"', new_svg_tag, count=1, flags=re.IGNORECASE)

    return svg_content.replace(svg_tag, new_svg_tag, 1)


def _validate_svg(svg_content: str) -> None:
    """Raises an SvgLoadError unless the string is a well-formed SVG document."""
    if not svg_content or not svg_content.strip():
        raise SvgLoadError("Failed to load SVG: document is empty")
    try:
        root = ET.fromstring(svg_content)
    except ET.ParseError as e:
        raise SvgLoadError(f"Failed to load SVG: {e}") from e
    if _local_name(root.tag) != "svg":
        raise SvgLoadError(f"Failed to load SVG: root element is <{_local_name(root.tag)}>")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def render_svg(svg_content: str, width: int, height: int) -> np.ndarray:
    """Renders an SVG string onto a white background.

    :param svg_content: SVG document
    :param width: Output width in pixels
    :param height: Output height in pixels
    :return: RGB uint8 array of shape (height, width, 3)

    Raises an SvgLoadError if the document can not be parsed or rendered
    """
    _validate_svg(svg_content)
    svg_content = _normalize_svg_dimensions(svg_content, width, height)
    try:
        png_bytes = svg_to_bytes(svg_string=svg_content, width=width, height=height)
        image = Image.open(io.BytesIO(bytes(png_bytes)))
        image = image.convert("RGBA")
    except Exception as e:
        raise SvgLoadError(f"Failed to render SVG: {e}") from e

    if image.size != (width, height):
        image = image.resize((width, height), Image.Resampling.LANCZOS)

    background = Image.new("RGBA", (width, height), (255, 255, 255, 255))
    background.alpha_composite(image)
    return np.array(background.convert("RGB"), dtype=np.uint8)


def _to_rgb_on_white(pixels: np.ndarray) -> np.ndarray:
    """Converts a gray, RGB or RGBA array to float RGB over a white background."""
    pixels = np.asarray(pixels, dtype=np.float64)
    if pixels.ndim == 2:
        return np.repeat(pixels[:, :, np.newaxis], 3, axis=2)
    if pixels.shape[2] == 4:
        alpha = pixels[:, :, 3:4] / 255.0
        return pixels[:, :, :3] * alpha + 255.0 * (1.0 - alpha)
    return pixels[:, :, :3]


def downsample(
    pixels: np.ndarray,
    rows: int,
    cols: int,
    options: RasterizeOptions | None = None,
) -> Frame:
    """Reduces a supersampled image to a rows x cols brightness frame.

    Each cell is the mean ink value ``1 - luminance / 255`` of its block of
    pixels. The result is then inverted, thresholded and binarized according
    to the options and rounded to two decimals.

    :param pixels: Gray, RGB or RGBA uint8 image whose height and width are
        multiples of rows and cols
    :param rows: Target rows
    :param cols: Target columns
    :param options: Conversion options
    :return: The frame
    """
    options = options or RasterizeOptions()
    rgb = _to_rgb_on_white(pixels)
    height, width = rgb.shape[:2]
    if height % rows or width % cols:
        raise ValueError(
            f"Image of {width}x{height} pixels can not be split into {cols}x{rows} cells"
        )
    ink = 1.0 - (rgb @ LUMINANCE_WEIGHTS) / 255.0
    cell_h = height // rows
    cell_w = width // cols
    brightness = ink.reshape(rows, cell_h, cols, cell_w).mean(axis=(1, 3))
    return Frame(_postprocess(brightness, options))


def _postprocess(brightness: np.ndarray, options: RasterizeOptions) -> np.ndarray:
    if options.invert:
        brightness = 1.0 - brightness
    below = brightness < options.threshold
    if not options.smooth:
        brightness = np.where(brightness > 0.5, 1.0, 0.0)
    brightness = np.where(below, 0.0, brightness)
    # Round half up to two decimals
    return np.floor(brightness * 100.0 + 0.5) / 100.0


def svg_to_matrix(
    svg_content: str,
    rows: int,
    cols: int,
    options: RasterizeOptions | None = None,
) -> Frame:
    """Converts an SVG string to a frame of brightness values.

    :param svg_content: SVG document
    :param rows: Target rows
    :param cols: Target columns
    :param options: Conversion options
    :return: The frame

    Raises an SvgLoadError if the SVG can not be loaded. No fallback frame is
    produced in this case.
    """
    factor = SUPERSAMPLE_FACTOR
    try:
        pixels = render_svg(svg_content, cols * factor, rows * factor)
    except SvgLoadError as e:
        logger.warning("Could not convert SVG to %dx%d matrix: %s", rows, cols, e)
        raise
    return downsample(pixels, rows, cols, options)


async def svg_to_matrix_async(
    svg_content: str,
    rows: int,
    cols: int,
    options: RasterizeOptions | None = None,
) -> Frame:
    """Converts an SVG string to a frame without blocking the event loop.

    See :func:`svg_to_matrix`.
    """
    return await asyncio.to_thread(svg_to_matrix, svg_content, rows, cols, options)


def preview_icon_as_matrix(
    svg_content: str,
    size: int,
    options: RasterizeOptions | None = None,
) -> Frame:
    """Converts an SVG to a square size x size frame."""
    return svg_to_matrix(svg_content, size, size, options)


def create_svg_from_icon(
    svg_content: str,
    target_size: int,
    stroke_width: float = 2.0,
) -> str:
    """Restyles a 24x24 stroke icon for conversion to a target_size grid.

    Every shape is drawn as a black, round-capped outline without fill. The
    stroke is widened for small grids, e.g. a 9x9 target gets roughly twice
    the nominal stroke width.

    :param svg_content: The icon's SVG document
    :param target_size: Edge length of the target grid
    :param stroke_width: The nominal stroke width
    :return: The restyled SVG document
    """
    _validate_svg(svg_content)
    ET.register_namespace("", SVG_NAMESPACE)
    root = ET.fromstring(svg_content)

    render_size = str(target_size * SUPERSAMPLE_FACTOR)
    root.set("width", render_size)
    root.set("height", render_size)
    root.set("viewBox", f"0 0 {ICON_VIEWBOX_SIZE} {ICON_VIEWBOX_SIZE}")

    scaled_stroke_width = stroke_width * (ICON_VIEWBOX_SIZE / target_size) * 0.8
    for element in root.iter():
        if _local_name(element.tag) in SHAPE_TAGS:
            element.set(
                "style",
                "fill:none;stroke:black;"
                f"stroke-width:{scaled_stroke_width:g};"
                "stroke-linecap:round;stroke-linejoin:round",
            )
    root.set("style", f"fill:none;stroke:black;stroke-width:{scaled_stroke_width:g}")

    return ET.tostring(root, encoding="unicode")


def icon_to_matrix(
    svg_content: str,
    size: int,
    options: RasterizeOptions | None = None,
) -> Frame:
    """Restyles a stroke icon and converts it to a size x size frame.

    :param svg_content: The icon's SVG document
    :param size: Edge length of the target grid
    :param options: Conversion options, stroke_width is used for restyling
    :return: The frame
    """
    options = options or RasterizeOptions()
    styled = create_svg_from_icon(svg_content, size, options.stroke_width)
    return svg_to_matrix(styled, size, size, options)


__all__ = [
    "SUPERSAMPLE_FACTOR",
    "RasterizeOptions",
    "render_svg",
    "downsample",
    "svg_to_matrix",
    "svg_to_matrix_async",
    "preview_icon_as_matrix",
    "create_svg_from_icon",
    "icon_to_matrix",
]
