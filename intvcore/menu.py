"""The options menu, the game palette and the on-screen text font lookup."""

from __future__ import annotations

from dataclasses import dataclass

from .config import Config

_KEY_CHOICES = (
    "KEY-1", "KEY-2", "KEY-3", "KEY-4", "KEY-5", "KEY-6", "KEY-7", "KEY-8",
    "KEY-9", "KEY-CLR", "KEY-0", "KEY-ENT", "FIRE", "R-ACT", "L-ACT",
)


@dataclass(frozen=True)
class Option:
    """One line of the options menu, bound to a field of ``Config``."""

    label: str
    choices: tuple[str, ...]
    field: str

    @property
    def count(self) -> int:
        return len(self.choices)


OPTIONS: tuple[Option, ...] = (
    Option(
        "OVERLAY",
        ("GENERIC", "MINOTAUR", "ADVENTURE", "ASTROSMASH", "SPACE SPARTAN",
         "B-17 BOMBER", "ATLANTIS", "BOMB SQUAD", "UTOPIA", "SWORD & SERPT"),
        "overlay_selected",
    ),
    Option("A BUTTON", _KEY_CHOICES, "key_A_map"),
    Option("B BUTTON", _KEY_CHOICES, "key_B_map"),
    Option("X BUTTON", _KEY_CHOICES, "key_X_map"),
    Option("Y BUTTON", _KEY_CHOICES, "key_Y_map"),
    Option("L BUTTON", _KEY_CHOICES, "key_L_map"),
    Option("R BUTTON", _KEY_CHOICES, "key_R_map"),
    Option("START BTN", _KEY_CHOICES, "key_START_map"),
    Option("SELECT BTN", _KEY_CHOICES, "key_SELECT_map"),
    Option(
        "CONTROLLER",
        ("LEFT/PLAYER1", "RIGHT/PLAYER2", "DUAL-ACTION A", "DUAL-ACTION B"),
        "controller_type",
    ),
    Option("FRAMESKIP", ("OFF", "ON"), "frame_skip_opt"),
    Option(
        "SOUND DIV",
        ("20 (HIGHQ)", "24 (LOW/FAST)", "28 (LOWEST)", "DISABLED"),
        "sound_clock_div",
    ),
    Option("FPS", ("OFF", "ON", "ON-TURBO"), "show_fps"),
)

GAME_PALETTE = (
    0x000000, 0x002DFF, 0xFF3D10, 0xC9CFAB,
    0x386B3F, 0x00A756, 0xFAEA50, 0xFFFCFF,
    0xBDACC8, 0x24B8FF, 0xFFB41F, 0x546E00,
    0xFF4E57, 0xA496FF, 0x75CC80, 0xB51A58,
) * 2

PALETTE_SIZE = 256


def _option(index: int) -> Option:
    if not 0 <= index < len(OPTIONS):
        raise IndexError(f"no option {index}")
    return OPTIONS[index]


def cycle_option(config: Config, index: int, step: int) -> int:
    """Move option ``index`` of ``config`` by ``step``, wrapping; return the new value."""
    option = _option(index)
    value = (getattr(config, option.field) + step) % option.count
    setattr(config, option.field, value)
    return value


def format_option(config: Config, index: int) -> str:
    """Return the menu line for option ``index`` as shown on screen."""
    option = _option(index)
    value = getattr(config, option.field)
    if not 0 <= value < option.count:
        raise ValueError(f"{option.label} has no choice {value}")
    return f" {option.label:<11} : {option.choices[value]:<13} "


def palette_rgb15() -> list[int]:
    """Return the 256-entry 15-bit BGR palette built from the game colors."""
    palette = []
    for index in range(PALETTE_SIZE):
        color = GAME_PALETTE[index % len(GAME_PALETTE)]
        r = (color & 0xFF0000) >> 19
        g = (color & 0x00FF00) >> 11
        b = (color & 0x0000FF) >> 3
        palette.append(r | (g << 5) | (b << 10))
    return palette


def text_tile_index(ch: str) -> int:
    """Return the font tile offset used to draw ``ch``; unknown characters use tile 0."""
    if len(ch) != 1:
        raise ValueError("expected a single character")
    if "a" <= ch <= "z":
        ch = ch.upper()
    code = ord(ch)
    if ch == "|" or code < ord(" ") or code > ord("_"):
        return 0
    if code < ord("@"):
        return code - ord(" ")
    return 32 + code - ord("@")