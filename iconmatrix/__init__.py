"""
IconMatrix - Core of a pixel-matrix icon editor: frames, tweening, flood fill,
SVG rasterization and animation playback
"""

from .config import Settings, settings
from .errors import MatrixError, DimensionMismatchError, OutOfBoundsError, SvgLoadError
from .frame import (
    Frame,
    PixelUpdate,
    empty_frame,
    clone_frame,
    resize_frame,
    frames_equal,
)
from .easing import TweenEasing, EASING_FUNCTIONS, get_easing
from .tween import TweenResult, interpolate_frames, generate_tween, generate_tween_frames
from .fill import flood_fill, apply_updates
from .animation import Animation
from .rasterize import (
    SUPERSAMPLE_FACTOR,
    RasterizeOptions,
    render_svg,
    downsample,
    svg_to_matrix,
    svg_to_matrix_async,
    preview_icon_as_matrix,
    create_svg_from_icon,
    icon_to_matrix,
)
from .playback import (
    PlaybackClock,
    PlaybackState,
    FrameScheduler,
    ManualScheduler,
    ThreadScheduler,
    AsyncioScheduler,
)
from .export import (
    Palette,
    format_frame,
    format_frames,
    generate_pattern_code,
    generate_frames_code,
    frame_to_svg,
)
from .patterns import vu_meter
from .editor import EditorState, Tool, OnionSkinMode, OnionSkinLayer, History

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "Settings",
    "settings",
    # Errors
    "MatrixError",
    "DimensionMismatchError",
    "OutOfBoundsError",
    "SvgLoadError",
    # Frames
    "Frame",
    "PixelUpdate",
    "empty_frame",
    "clone_frame",
    "resize_frame",
    "frames_equal",
    "Animation",
    # Easing & tweening
    "TweenEasing",
    "EASING_FUNCTIONS",
    "get_easing",
    "TweenResult",
    "interpolate_frames",
    "generate_tween",
    "generate_tween_frames",
    # Fill
    "flood_fill",
    "apply_updates",
    # Rasterization
    "SUPERSAMPLE_FACTOR",
    "RasterizeOptions",
    "render_svg",
    "downsample",
    "svg_to_matrix",
    "svg_to_matrix_async",
    "preview_icon_as_matrix",
    "create_svg_from_icon",
    "icon_to_matrix",
    # Playback
    "PlaybackClock",
    "PlaybackState",
    "FrameScheduler",
    "ManualScheduler",
    "ThreadScheduler",
    "AsyncioScheduler",
    # Export & patterns
    "Palette",
    "format_frame",
    "format_frames",
    "generate_pattern_code",
    "generate_frames_code",
    "frame_to_svg",
    "vu_meter",
    # Editor
    "EditorState",
    "Tool",
    "OnionSkinMode",
    "OnionSkinLayer",
    "History",
    "__version__",
]
