# disarray

A small, dependency-free toolkit for simple games: 4×4 matrices and
vectors, 2D collision tests, a TGA reader and writer, a 2D particle
emitter, triangle meshes and animated multi-subset model files, and the
rules of two sample games (a match-three brawler and a lava-escape mining
game) that run without any window or renderer.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

| Module | What it offers |
| --- | --- |
| `disarray.matrix` | `Vector3D` (immutable, with `length`, `normalize`, `dot`, `cross`, `transform`), `Matrix` (16 row-major values, `row`, `rows`, `m[row, col]`, `@`), `identity`, `multiply`, `translation`, `scaling`, `translation_scale`, `rotation_y`, `rotation_axis`, `look_at`, `perspective`, `ortho`, `quaternion_to_matrix`, `rigid_inverse`, `inverse`, `unproject`, `format_matrix` |
| `disarray.mathtools` | `collision_circle_circle`, `collision_circle_rectangle`, `collision_rectangle_rectangle`, `collision_circle_segment`, `segment_intersection` (returns a `SegmentIntersection` or `None`), `make_vector`, `reflect_2d`, `lerp`, `round_half_away` |
| `disarray.entity` | `Entity`: a position with direction, up and right vectors that can `move`, `strafe`, `fly`, `yaw`, `pitch`, `roll`, and produce its `matrix()` or a `billboard()` transform |
| `disarray.image` | `Image` (`to_tga_bytes`, `save_tga`), `parse_tga`, `load_tga`, `TgaError` |
| `disarray.ostools` | `encode_lithuanian`, `read_file_data`, `home_path`, `list_files`, `list_directories`, `make_dir` |
| `disarray.particles` | `Color`, `Particle`, `Particle2DSystem` |
| `disarray.ratmodel` | `RatModel`: an indexed triangle mesh with loading from a binary stream, unindexing, smooth normal computation and a text `dump` |
| `disarray.modelcollection` | `ModelCollection`, `AnimationSet`, `ModelFormatError` |
| `disarray.match3` | `Match3Game`, `Gopnik`, `Animation`, `ChainElement`, `GameMode`, `Touches` |
| `disarray.fps` | `FpsCounter` |
| `disarray.minegame` | `MineGame`, `Tile` |

## Examples

Matrices and vectors:

```python
import math
from disarray.matrix import Vector3D, rotation_axis, translation, inverse

v = Vector3D(1.0, 0.0, 0.0).transform(rotation_axis(math.pi / 2, Vector3D(0.0, 0.0, 1.0)))
m = translation(1.0, 2.0, 3.0) @ translation(0.0, 0.0, 1.0)
back = inverse(m)          # raises ValueError for a singular matrix
```

Collisions:

```python
from disarray.mathtools import collision_circle_circle, segment_intersection

collision_circle_circle(0, 0, 1, 1.5, 0, 1)      # True
hit = segment_intersection(0, 0, 2, 2, 0, 2, 2, 0)
if hit is not None and hit.intersects:
    print(hit.r, hit.s)
```

TGA images: `parse_tga` and `load_tga` read uncompressed and RLE
compressed images of 24 or 32 bits and return pixels in RGB or RGBA order;
`TgaError` is raised for anything else. Writing always produces an
uncompressed 32-bit file, so `to_tga_bytes` and `save_tga` need RGBA data of
`width * height * 4` bytes:

```python
from disarray.image import load_tga

image = load_tga("picture.tga")
if image.bits == 32:
    image.save_tga("copy.tga")
```

Particles are emitted one per `update()`; drawing goes through a callback
`draw_sprite(pic_index, x, y, size, color)`:

```python
from disarray.matrix import Vector3D
from disarray.particles import Color, Particle2DSystem

system = Particle2DSystem()
system.set_direction_intervals(Vector3D(0.0, 0.0, 1.0), 10)
system.set_colors(Color(1, 1, 0, 1), Color(1, 0, 0, 0))
system.set_particle_lifetime(30)
system.update()
system.draw(lambda index, x, y, size, color: print(x, y, size), 0)
```

Game rules are advanced one frame at a time:

```python
from disarray.match3 import Match3Game, Touches
from disarray.minegame import MineGame, KEY_RIGHT

match3 = Match3Game()
match3.update(Touches(up=[(100.0, 500.0)]), 1 / 60)   # leaves the title screen

mine = MineGame()
mine.step({KEY_RIGHT})
```

Both game classes accept a `random.Random` instance for repeatable play.

## What the package does not do

It has no window, renderer, shader, sprite batching, font or audio
support, and no command-line program: the sample games are rule sets only,
and drawing is left to the caller (`Particle2DSystem.draw` takes a callback,
`Gopnik.hud_bar` and `Match3Game.chain_geometry` return shapes to draw).