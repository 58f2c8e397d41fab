[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fractview"
version = "1.0.0"
description = "Interactive Mandelbrot, Julia and Tricorn fractal explorer"
requires-python = ">=3.10"
keywords = ["fractal", "mandelbrot", "julia", "tricorn", "xpm", "visualization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
fractview = "fractview.app:main"
fractview-bonus = "fractview.app:main_bonus"

[tool.hatch.build.targets.wheel]
packages = ["fractview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
