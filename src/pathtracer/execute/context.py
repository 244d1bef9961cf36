"""Per-render parameters shared read-only by all workers."""

from __future__ import annotations

from dataclasses import dataclass

from pathtracer.camera.thin_lens import Camera


@dataclass(frozen=True)
class RenderContext:
    """Immutable render parameters.

    The tile ``[start_x, end_x) x [start_y, end_y)`` selects the pixels a
    strategy renders. The full image size comes from the camera film.

    Attributes:
        camera: Camera bound to the output image size.
        max_depth: Maximum number of bounces per path.
        samples: Number of samples averaged per pixel.
        start_x: First pixel column of the tile.
        start_y: First pixel row of the tile.
        end_x: One past the last pixel column of the tile.
        end_y: One past the last pixel row of the tile.
    """

    camera: Camera
    max_depth: int
    samples: int
    start_x: int
    start_y: int
    end_x: int
    end_y: int

    def __post_init__(self) -> None:
        if not 0 <= self.start_x <= self.end_x <= self.width:
            raise ValueError(
                f"Tile columns [{self.start_x}, {self.end_x}) do not fit an image "
                f"of width {self.width}"
            )
        if not 0 <= self.start_y <= self.end_y <= self.height:
            raise ValueError(
                f"Tile rows [{self.start_y}, {self.end_y}) do not fit an image "
                f"of height {self.height}"
            )

    @classmethod
    def full_frame(cls, camera: Camera, max_depth: int, samples: int) -> RenderContext:
        """Create a context covering the whole image."""
        return cls(
            camera=camera,
            max_depth=max_depth,
            samples=samples,
            start_x=0,
            start_y=0,
            end_x=camera.film_width,
            end_y=camera.film_height,
        )

    @property
    def width(self) -> int:
        return self.camera.film_width

    @property
    def height(self) -> int:
        return self.camera.film_height

    @property
    def tile_width(self) -> int:
        return self.end_x - self.start_x

    @property
    def tile_height(self) -> int:
        return self.end_y - self.start_y
