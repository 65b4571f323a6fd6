[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deformesh"
version = "0.1.0"
description = "Deformable triangular mesh templates with Laplacian curvature, barycentric point embedding and point-cloud utilities"
requires-python = ">=3.10"
keywords = [
    "mesh",
    "template",
    "laplacian",
    "curvature",
    "barycentric",
    "point cloud",
    "normals",
    "moving least squares",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["deformesh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
