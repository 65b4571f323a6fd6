"""Deformable triangular mesh templates, Laplacian curvature and point-cloud tools."""

__version__ = "0.1.0"

__all__ = [
    "node",
    "edge",
    "facet",
    "template",
    "triangular_mesh",
    "laplacian_mesh",
    "template_generator",
    "normals",
    "smoothing",
    "settings",
]