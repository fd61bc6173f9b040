"""Translation of handheld buttons and touch-screen presses into console input."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .config import Config

CONTROLLERS = 3
INPUTS_PER_CONTROLLER = 16
SIDE_BUTTON_THRESHOLD = 11


class Keys(enum.IntFlag):
    """Bits of the handheld's key state."""

    A = 1 << 0
    B = 1 << 1
    SELECT = 1 << 2
    START = 1 << 3
    RIGHT = 1 << 4
    LEFT = 1 << 5
    UP = 1 << 6
    DOWN = 1 << 7
    R = 1 << 8
    L = 1 << 9
    X = 1 << 10
    Y = 1 << 11
    TOUCH = 1 << 12


class MenuAction(enum.Enum):
    """Buttons drawn on the left of the touch screen."""

    RESET = "reset"
    LOAD = "load"
    CONFIG = "config"
    HIGHSCORES = "highscores"
    QUIT = "quit"


def _blank() -> list[list[bool]]:
    return [[False] * INPUTS_PER_CONTROLLER for _ in range(CONTROLLERS)]


@dataclass
class ControllerInputs:
    """Pressed keypad/side buttons and disc directions for each controller."""

    keys: list[list[bool]] = field(default_factory=_blank)
    disc: list[list[bool]] = field(default_factory=_blank)
    menu: MenuAction | None = None


_KEYPAD_COLUMNS = ((120, 155), (158, 192), (195, 230))
_KEYPAD_ROWS = ((30, 60), (65, 95), (101, 135), (140, 175))

_MENU_X = (23, 82)
_MENU_ROWS = (
    ((25, 46), MenuAction.RESET),
    ((55, 76), MenuAction.LOAD),
    ((86, 106), MenuAction.CONFIG),
    ((116, 136), MenuAction.HIGHSCORES),
    ((145, 170), MenuAction.QUIT),
)


def _inside(value: int, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    return low < value < high


def touch_keypad(x: int, y: int) -> int | None:
    """Return the keypad index (0-11) under a touch, or ``None``."""
    for row, row_bounds in enumerate(_KEYPAD_ROWS):
        if not _inside(y, row_bounds):
            continue
        for column, column_bounds in enumerate(_KEYPAD_COLUMNS):
            if _inside(x, column_bounds):
                return row * 3 + column
    return None


def touch_menu(x: int, y: int) -> MenuAction | None:
    """Return the menu button under a touch, or ``None``."""
    if not _inside(x, _MENU_X):
        return None
    return next((action for bounds, action in _MENU_ROWS if _inside(y, bounds)), None)


def _controller_roles(controller_type: int) -> tuple[int, int, int]:
    """Return the (disc, side buttons, keypad) controller indexes."""
    if controller_type == 2:
        return 0, 0, 1
    if controller_type == 3:
        return 0, 1, 1
    if controller_type in (0, 1):
        return controller_type, controller_type, controller_type
    raise ValueError(f"invalid controller type {controller_type}")


def _disc_direction(keys: Keys) -> int | None:
    if keys & Keys.UP:
        if keys & Keys.RIGHT:
            return 2
        if keys & Keys.LEFT:
            return 14
        return 0
    if keys & Keys.DOWN:
        if keys & Keys.RIGHT:
            return 6
        if keys & Keys.LEFT:
            return 10
        return 8
    if keys & Keys.RIGHT:
        return 4
    if keys & Keys.LEFT:
        return 12
    return None


def map_inputs(
    config: Config,
    keys: Keys | int,
    touch: tuple[int, int] | None = None,
) -> ControllerInputs:
    """Map the handheld's state to console controller inputs."""
    keys = Keys(keys)
    disc_ctrl, side_ctrl, keys_ctrl = _controller_roles(config.controller_type)
    inputs = ControllerInputs()

    direction = _disc_direction(keys)
    if direction is not None:
        inputs.disc[disc_ctrl][direction] = True

    button_maps = (
        (Keys.A, config.key_A_map),
        (Keys.B, config.key_B_map),
        (Keys.X, config.key_X_map),
        (Keys.Y, config.key_Y_map),
        (Keys.L, config.key_L_map),
        (Keys.R, config.key_R_map),
        (Keys.START, config.key_START_map),
        (Keys.SELECT, config.key_SELECT_map),
    )
    for button, mapped in button_maps:
        if not keys & button:
            continue
        if not 0 <= mapped < INPUTS_PER_CONTROLLER:
            raise ValueError(f"invalid key mapping {mapped}")
        target = side_ctrl if mapped > SIDE_BUTTON_THRESHOLD else keys_ctrl
        inputs.keys[target][mapped] = True

    if keys & Keys.TOUCH and touch is not None:
        x, y = touch
        pad = touch_keypad(x, y)
        if pad is not None:
            inputs.keys[keys_ctrl][pad] = True
        inputs.menu = touch_menu(x, y)

    return inputs