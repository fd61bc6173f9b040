"""Moving objects (sprites): their shape buffers, bounds and collisions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, fields

MOB_COUNT = 8
MOB_BUFFER_LINES = 128
# Screen position of a MOB's left/top edge when its location register is 0.
LOCATION_OFFSET = 8

_STRETCH = (
    0x00, 0x03, 0x0C, 0x0F, 0x30, 0x33, 0x3C, 0x3F,
    0xC0, 0xC3, 0xCC, 0xCF, 0xF0, 0xF3, 0xFC, 0xFF,
)
_REVERSE = (
    0x0, 0x8, 0x4, 0xC, 0x2, 0xA, 0x6, 0xE,
    0x1, 0x9, 0x5, 0xD, 0x3, 0xB, 0x7, 0xF,
)


@dataclass(frozen=True)
class MobRect:
    """A MOB's area in background coordinates (160x96)."""

    x: int
    y: int
    width: int
    height: int

    def intersects(self, other: MobRect) -> bool:
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.y + other.height
            and other.y < self.y + self.height
        )


@dataclass
class Mob:
    """Register state of one moving object."""

    x_location: int = 0
    y_location: int = 0
    foreground_color: int = 0
    card_number: int = 0
    collision_register: int = 0
    is_grom: bool = True
    visible: bool = False
    double_width: bool = False
    double_y_resolution: bool = False
    double_height: bool = False
    quad_height: bool = False
    flag_collisions: bool = False
    horizontal_mirror: bool = False
    vertical_mirror: bool = False
    behind_foreground: bool = False
    shape_changed: bool = True

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, f.default)

    @property
    def card_rows(self) -> int:
        """Number of card rows the MOB is drawn from (8, or 16 at double resolution)."""
        return 16 if self.double_y_resolution else 8

    @property
    def pixel_height(self) -> int:
        """Buffer lines laid down for each card row."""
        return (4 if self.quad_height else 1) * (2 if self.double_height else 1)

    @property
    def bounds(self) -> MobRect:
        lines = self.card_rows * self.pixel_height
        return MobRect(
            self.x_location - LOCATION_OFFSET,
            self.y_location - LOCATION_OFFSET,
            16 if self.double_width else 8,
            lines // 2,
        )


def mob_line(data: int, horizontal_mirror: bool, double_width: bool) -> int:
    """Turn one card row byte into a 16-bit MOB line, leftmost pixel in bit 15."""
    data &= 0xFF
    if horizontal_mirror:
        data = (_REVERSE[data & 0x0F] << 4) | _REVERSE[(data & 0xF0) >> 4]
    if double_width:
        return (_STRETCH[(data & 0xF0) >> 4] << 8) | _STRETCH[data & 0x0F]
    return data << 8


def render_mob_buffer(mob: Mob, card_rows: Sequence[int]) -> list[int]:
    """Render the MOB's card rows into a 128-line shape buffer."""
    needed = mob.card_rows
    rows = list(card_rows)
    if len(rows) < needed:
        raise ValueError(f"MOB needs {needed} card rows, got {len(rows)}")
    rows = rows[:needed]
    if mob.vertical_mirror:
        rows.reverse()

    buffer: list[int] = []
    for row in rows:
        line = mob_line(row, mob.horizontal_mirror, mob.double_width)
        buffer.extend([line] * mob.pixel_height)
    buffer.extend([0] * (MOB_BUFFER_LINES - len(buffer)))
    return buffer


def mobs_collide(
    buffer0: Sequence[int],
    rect0: MobRect,
    buffer1: Sequence[int],
    rect1: MobRect,
) -> bool:
    """Return whether any lit pixels of two MOBs overlap."""
    if not rect0.intersects(rect1):
        return False

    starting_x = max(rect0.x, rect1.x)
    offset_x0 = starting_x - rect0.x
    offset_x1 = starting_x - rect1.x

    starting_y = max(rect0.y, rect1.y)
    offset_y0 = (starting_y - rect0.y) * 2
    offset_y1 = (starting_y - rect1.y) * 2
    overlap = (min(rect0.y + rect0.height, rect1.y + rect1.height) - starting_y) * 2

    return any(
        (buffer0[offset_y0 + y] << offset_x0) & (buffer1[offset_y1 + y] << offset_x1)
        for y in range(overlap)
    )