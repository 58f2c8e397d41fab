"""Interactive explorer for Mandelbrot, Julia and Tricorn fractals, with an XPM reader."""

__version__ = "1.0.0"