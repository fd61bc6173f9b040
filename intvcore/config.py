"""Per-game settings and the fixed-size database file that stores them."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass, replace
from pathlib import Path
from typing import ClassVar

CONFIG_VER = 0x0001
MAX_CONFIGS = 300
DEFAULT_PATH = Path("/data/NINTV-DS.DAT")
SOUND_DIVISORS = (8, 12, 16, 20, 24, 28, 64)

_RECORD = struct.Struct("<I24H")


@dataclass
class Config:
    """Settings for one game, keyed by the cartridge CRC."""

    crc: int = 0x00000000
    frame_skip_opt: int = 1
    overlay_selected: int = 0
    key_A_map: int = 12
    key_B_map: int = 12
    key_X_map: int = 13
    key_Y_map: int = 14
    key_L_map: int = 0
    key_R_map: int = 1
    key_START_map: int = 2
    key_SELECT_map: int = 3
    controller_type: int = 0
    sound_clock_div: int = 1
    show_fps: int = 0
    spare0: int = 0
    spare1: int = 0
    spare2: int = 0
    spare3: int = 0
    spare4: int = 0
    spare5: int = 0
    spare6: int = 1
    spare7: int = 1
    spare8: int = 1
    spare9: int = 2
    config_ver: int = CONFIG_VER

    SIZE: ClassVar[int] = _RECORD.size

    def pack(self) -> bytes:
        """Serialise to the little-endian on-disk record."""
        try:
            return _RECORD.pack(*astuple(self))
        except struct.error as exc:
            raise ValueError(f"configuration value out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> Config:
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        return cls(*_RECORD.unpack(data))


def _blank_config() -> Config:
    blank = Config(*([0] * (len(astuple(Config())))))
    blank.config_ver = CONFIG_VER
    return blank


def sound_clock_divisor(config: Config) -> int:
    """Return the sound chip clock divisor selected by ``config``."""
    if not 0 <= config.sound_clock_div < len(SOUND_DIVISORS):
        raise ValueError(f"invalid sound clock setting {config.sound_clock_div}")
    return SOUND_DIVISORS[config.sound_clock_div]


class ConfigDatabase:
    """A fixed table of per-game configurations backed by one file."""

    def __init__(self, path: str | Path = DEFAULT_PATH) -> None:
        self.path = Path(path)
        self.slots: list[Config] = [_blank_config() for _ in range(MAX_CONFIGS)]

    def _wipe(self) -> None:
        self.slots = [_blank_config() for _ in range(MAX_CONFIGS)]

    def load(self) -> None:
        """Read the file; create it, or rebuild it on a version mismatch."""
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            self._wipe()
            self.save()
            return

        size = Config.SIZE
        whole = min(len(data) // size, MAX_CONFIGS)
        for slot in range(whole):
            self.slots[slot] = Config.unpack(data[slot * size:(slot + 1) * size])

        if self.slots[0].config_ver != CONFIG_VER:
            self._wipe()
            self.save()

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(b"".join(slot.pack() for slot in self.slots))

    def find(self, crc: int) -> Config | None:
        """Return a copy of the first configuration stored for ``crc``."""
        return next((replace(slot) for slot in self.slots if slot.crc == crc), None)

    def store(self, config: Config) -> int:
        """Put ``config`` in its matching or first free slot; return the slot."""
        for index, slot in enumerate(self.slots):
            if slot.crc == config.crc or slot.crc == 0:
                self.slots[index] = replace(config)
                return index
        raise ValueError("configuration database is full")