"""Output module for exporting rendered images.

Components:
    export: Buffer to array conversion and image file output (Pillow)
"""

from .export import buffer_to_array, save_png

__all__ = ["buffer_to_array", "save_png"]
