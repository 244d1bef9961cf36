"""Camera module for view and ray generation.

Components:
    thin_lens: Thin-lens perspective camera with depth of field

Camera responsibilities:
    - Transform (s, t) film coordinates to world-space rays
    - Support look-at positioning with an up vector
    - Derive the viewport from the vertical field of view
    - Sample the lens aperture for defocus blur

Ray generation uses normalized film coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import Camera, CameraConfig

__all__ = ["Camera", "CameraConfig"]
