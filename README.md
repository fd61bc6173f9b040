# intvcore

Pure-Python building blocks for emulating a classic home video game console:
its programmable sound generator, an audio mixer, moving-object (sprite)
helpers, and the settings, input mapping and menu logic of a handheld
front end. There are no runtime dependencies.

## Modules

### `intvcore.psg` – sound generator

- `PSG` – three tone channels, a noise generator and an envelope generator,
  driven through sixteen registers with `poke(location, value)` and
  `peek(location)` (only the low four address bits are decoded). Registers
  `0x0E` and `0x0F` go to the two I/O ports. `tick(minimum)` generates
  samples until at least `minimum` clocks have passed and returns the clocks
  used; each sample is a multiple of `clocks_per_sample()`
  (`clock_divisor << 4`). `reset()` returns the chip to its power-on state.
- `Channel` – one tone channel; `advance(clocks)` runs its counter down and
  toggles the square wave.
- `PSGPort` – an I/O port with `output_value` and `input_value`.

`PSG` is an `AudioProducer`, so it can be attached to an `AudioMixer`.

### `intvcore.mixer` – audio mixer

- `AudioProducer` – abstract base: a `clock_speed` property and
  `clocks_per_sample()`.
- `AudioOutputLine` – accumulates the samples a producer plays with
  `play_sample(sample)`.
- `AudioMixer` – holds up to ten producers (`add_producer`,
  `remove_producer`, `remove_all`). `init(sample_rate)` sets the output rate,
  `reset()` computes the common clock of all producers, and `tick(minimum)`
  writes `minimum` resampled, averaged samples into the `samples` ring buffer
  (256 positions, at `write_index`). Setting `muted` makes `tick` produce
  nothing; `single_producer` mixes only the first producer.
- `clip_sample(sample)` clamps a value to the signed 16-bit range.

### `intvcore.mobs` – moving objects

- `Mob` – register state of one sprite, with `card_rows`, `pixel_height` and
  `bounds` (a `MobRect`).
- `MobRect` – a rectangle with `intersects(other)`.
- `mob_line(data, horizontal_mirror, double_width)` – one card row byte to a
  16-bit sprite line.
- `render_mob_buffer(mob, card_rows)` – the 128-line shape buffer of a sprite.
- `mobs_collide(buffer0, rect0, buffer1, rect1)` – pixel-exact overlap test.

### `intvcore.config` – per-game settings

- `Config` – one game's settings keyed by cartridge `crc`; `pack()` and
  `Config.unpack(data)` convert to and from the 52-byte little-endian record.
- `ConfigDatabase(path)` – 300 slots stored in one file. `load()` reads it,
  creating it if missing and rebuilding it when the version does not match;
  `save()` writes it; `find(crc)` returns a copy of a stored config or
  `None`; `store(config)` puts it in its matching or first free slot.
- `sound_clock_divisor(config)` – the sound clock divisor a config selects.

### `intvcore.controls` – input mapping

- `Keys` – the handheld's button bits, an `IntFlag`.
- `map_inputs(config, keys, touch=None)` returns `ControllerInputs`: pressed
  keypad/side buttons and disc directions per controller, plus the
  `MenuAction` touched, if any.
- `touch_keypad(x, y)` and `touch_menu(x, y)` locate touch-screen presses.

### `intvcore.menu` – options menu, palette and text

- `OPTIONS`, a tuple of `Option` entries bound to `Config` fields;
  `cycle_option(config, index, step)` and `format_option(config, index)`.
- `palette_rgb15()` – the 256-entry 15-bit palette of the game colors.
- `text_tile_index(ch)` – the font tile used to draw a character.

## Example

```python
from intvcore.config import Config
from intvcore.menu import format_option
from intvcore.mixer import AudioMixer
from intvcore.psg import PSG

mixer = AudioMixer()
mixer.init(15360)

psg = PSG()
mixer.add_producer(psg)
psg.reset()
mixer.reset()

psg.poke(0x00, 0x40)   # channel A period, low byte
psg.poke(0x08, 0x38)   # tone on for all channels, noise off
psg.poke(0x0B, 0x0F)   # channel A at full volume

psg.tick(psg.clocks_per_sample() * 64)
mixer.tick(64)

print(format_option(Config(), 0))   # " OVERLAY     : GENERIC       "
```

## What it does not do

This package is not a runnable emulator. It has no CPU, no video interface
chip or background/frame rendering, no cartridge or ROM loading, no file
browser, and no audio or screen output: the mixer fills an in-memory buffer
and the sprite helpers return plain lists of integers. There is no command
to run.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```