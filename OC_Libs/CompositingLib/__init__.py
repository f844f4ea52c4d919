"""
CompositingLib - Background compositing and export

This module provides background spec types, the background painter
registry, the compositor and PNG/JPEG export for Open Cutout.
"""

from OC_Libs.CompositingLib.backgrounds import (
    BackgroundSpec,
    ColorBackground,
    GradientBackground,
    ImageBackground,
    TransparentBackground,
    background_from_dict,
    parse_background_spec,
    parse_color,
)
from OC_Libs.CompositingLib.background_registry import (
    BackgroundPainterRegistry,
    get_default_registry,
    register_default_painters,
)
from OC_Libs.CompositingLib.compositor import (
    Compositor,
    flatten_for_opaque_export,
    make_checkerboard,
)
from OC_Libs.CompositingLib.export import (
    ExportConfig,
    default_export_filename,
    export_image,
    normalize_format,
    save_export,
)

__all__ = [
    "BackgroundSpec",
    "ColorBackground",
    "GradientBackground",
    "ImageBackground",
    "TransparentBackground",
    "background_from_dict",
    "parse_background_spec",
    "parse_color",
    "BackgroundPainterRegistry",
    "get_default_registry",
    "register_default_painters",
    "Compositor",
    "flatten_for_opaque_export",
    "make_checkerboard",
    "ExportConfig",
    "default_export_filename",
    "export_image",
    "normalize_format",
    "save_export",
]
