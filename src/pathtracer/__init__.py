"""CPU Monte Carlo path tracer.

This package renders a raster image from a sphere scene by stochastic ray
tracing, with support for:
- Lambertian, metal and dielectric materials
- A thin-lens camera with depth of field
- Single-threaded, row-parallel and column-parallel dispatch strategies
- JSON scene files and PNG output

Subpackages:
    core: Vector math, rays, bounding boxes and the path integrator
    camera: Thin-lens camera and its configuration
    materials: Scattering models (Lambertian, metal, dielectric)
    geometry: Hit records, the Hittable interface and spheres
    scene: The Region scene graph, loaders and builders
    execute: Render context, error taxonomy and dispatch strategies
    output: Image export utilities
"""

from .render import ComputeMode, RenderStats, render

__version__ = "0.1.0"

__all__ = ["ComputeMode", "RenderStats", "render", "__version__"]
