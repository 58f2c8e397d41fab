# fractview

An interactive fractal explorer. It draws the Mandelbrot set, Julia sets
and, in the extended viewer, the Tricorn in a 1280x720 window. While it runs
you can pan, zoom, change the colours and change the iteration limit.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

The plain viewer draws the Mandelbrot set or a Julia set:

```
fractview Mandelbrot
fractview Julia -0.8 0.156
```

A Julia set needs two numbers, the real and the imaginary part of its
constant. Each is a decimal number with an optional leading `+` or `-` and
at most one decimal point, and it must not begin or end with the point:
`0.285`, `-0.01` and `1` are accepted, `.5` and `3.` are not.

The extended viewer adds the Tricorn and a clickable sidebar:

```
fractview-bonus Tricorn
fractview-bonus Mandelbrot
fractview-bonus Julia 0.285 0.01
```

The plain viewer's window is titled "ART FRACTAL"; the extended viewer's
window takes the name of the fractal. Wrong arguments print a usage message
on standard error and the command exits with status 1.

The extended viewer reads its sidebar images from `.sidebar.xpm`,
`.hover.xpm` and `.click.xpm` in a `.assets` directory under the current
working directory. If any of them cannot be read, it runs without a sidebar.

## Controls

| Input                          | Effect                                          |
|--------------------------------|-------------------------------------------------|
| Arrow keys (held)              | Pan the view                                    |
| Mouse wheel                    | Zoom in / out around the pointer                |
| Left button drag               | Drag the view                                   |
| Left Shift + `c`               | Shift the colours                               |
| Left Shift + keypad `+`        | Raise the iteration limit by 5 (while below 999) |
| Left Shift + keypad `-`        | Lower the iteration limit by 5                  |
| Left Shift + `r`               | Reset view, colours and iteration limit         |
| Escape, or closing the window  | Quit                                            |

Releasing the left mouse button also stops any arrow-key panning.

In the extended viewer the sidebar buttons, from top to bottom, shift the
colours, raise and lower the iteration limit by one step, zoom in and out
around the centre of the drawing area, reset the view, and quit. They act
on every frame while the button is held down.

## Library use

The parts behind the viewer can be used on their own:

- `fractview.fractal.escape_time` counts the iterations of a point and
  `fractview.fractal.shade` turns that count into a colour.
- `fractview.args.parse_args` turns an argument vector into a `Config`,
  raising `UsageError` or `NumberError` on bad input.
- `fractview.explorer.Explorer` holds the view state (`View`, `Settings`),
  reacts to key and mouse events, and renders a frame into a
  `fractview.image.Image` with `Explorer.draw`.
- `fractview.xpm.read_xpm` and `fractview.xpm.xpm_to_image` load XPM
  pictures; named colours are resolved by `fractview.colors.lookup_color`.
- `fractview.app.build_explorer` and `fractview.app.run` set up and run the
  window yourself.

## What it does not do

The viewer only shows fractals on screen. It does not save images, and it
does not remember the view between runs.