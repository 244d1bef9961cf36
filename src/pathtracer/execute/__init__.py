"""Execution module: render context, errors and dispatch strategies.

Components:
    context: Immutable per-render parameters (camera, depth, samples, tile)
    errors: The RendererError hierarchy
    dispatch: Naive, row-parallel and column-parallel strategies
"""

from .context import RenderContext
from .dispatch import (
    PixelOp,
    partition_columns,
    pixel_view,
    render_columns,
    render_naive,
    render_rows,
)
from .errors import (
    BufferSizeError,
    CommunicationError,
    ComputeError,
    InvalidParameterError,
    InvalidSceneError,
    RendererError,
    ThreadPanickedError,
)

__all__ = [
    "RenderContext",
    "PixelOp",
    "partition_columns",
    "pixel_view",
    "render_naive",
    "render_rows",
    "render_columns",
    "RendererError",
    "InvalidParameterError",
    "BufferSizeError",
    "InvalidSceneError",
    "ComputeError",
    "ThreadPanickedError",
    "CommunicationError",
]
