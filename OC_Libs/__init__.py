"""
OC_Libs - Open Cutout Library Modules

This package contains core functionality for the Open Cutout editor,
organized into specialized sub-packages:

- MaskEditingLib: Pixel buffer, brush tips, strokes, coordinate mapping and history
- CompositingLib: Background specs, compositing and export
- SessionLib: Image import, segmentation contract and the edit session
"""

__version__ = "0.1.0"
