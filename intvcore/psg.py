"""The programmable sound generator: three tone channels, noise and an envelope."""

from __future__ import annotations

from dataclasses import dataclass

from .mixer import AudioProducer

CLOCK_SPEED = 3579545
DEFAULT_ADDRESS = 0x01F0
DEFAULT_CLOCK_DIVISOR = 8

AMPLITUDES = (
    0x003C, 0x0055, 0x0079, 0x00AB, 0x00F1, 0x0155, 0x01E3, 0x02AA,
    0x03C5, 0x0555, 0x078B, 0x0AAB, 0x0E16, 0x1355, 0x152B, 0x20AA,
)

TONE_PERIOD_DEFAULT = 0x1000
NOISE_PERIOD_DEFAULT = 0x0040
ENVELOPE_PERIOD_DEFAULT = 0x20000
NOISE_FEEDBACK = 0x14000
REGISTER_COUNT = 0x0E


@dataclass
class PSGPort:
    """One of the chip's two 8-bit I/O ports."""

    output_value: int = 0
    input_value: int = 0


@dataclass
class Channel:
    """State of one square-wave tone channel."""

    period: int = 0
    period_value: int = TONE_PERIOD_DEFAULT
    volume: int = 0
    tone_counter: int = TONE_PERIOD_DEFAULT
    tone: bool = False
    envelope: bool = False
    tone_disabled: bool = False
    noise_disabled: bool = False
    is_dirty: bool = True

    def reset(self) -> None:
        self.period = 0
        self.period_value = TONE_PERIOD_DEFAULT
        self.volume = 0
        self.tone_counter = TONE_PERIOD_DEFAULT
        self.tone = False
        self.envelope = False
        self.tone_disabled = False
        self.noise_disabled = False
        self.is_dirty = True

    def advance(self, clocks: int) -> None:
        """Run the tone counter down by ``clocks``, toggling at each expiry."""
        self.tone_counter -= clocks
        while self.tone_counter <= 0:
            self.tone_counter += self.period_value
            self.tone = not self.tone

    def _set_period(self, period: int) -> None:
        self.period = period
        self.period_value = period or TONE_PERIOD_DEFAULT


class PSG(AudioProducer):
    """The sound chip, mapped at ``address`` with sixteen registers."""

    def __init__(
        self,
        address: int = DEFAULT_ADDRESS,
        io0: PSGPort | None = None,
        io1: PSGPort | None = None,
        clock_divisor: int = DEFAULT_CLOCK_DIVISOR,
    ) -> None:
        self.address = address
        self.io0 = io0 if io0 is not None else PSGPort()
        self.io1 = io1 if io1 is not None else PSGPort()
        self.clock_divisor = clock_divisor
        self.channels = (Channel(), Channel(), Channel())
        self.registers = [0] * REGISTER_COUNT
        self.reset()

    @property
    def clock_speed(self) -> int:
        return CLOCK_SPEED

    @property
    def sample_rate(self) -> int:
        return CLOCK_SPEED

    def clocks_per_sample(self) -> int:
        return self.clock_divisor << 4

    def reset(self) -> None:
        """Return the chip and its registers to their power-on state."""
        self.registers = [0] * REGISTER_COUNT

        self.noise_period = 0
        self.noise_period_value = NOISE_PERIOD_DEFAULT
        self.noise_counter = self.noise_period_value
        self.random = 1
        self.noise = True
        self.noise_idle = True

        self.envelope_idle = True
        self.envelope_period = 0
        self.envelope_period_value = ENVELOPE_PERIOD_DEFAULT
        self.envelope_counter = self.envelope_period_value
        self.envelope_volume = 0
        self.envelope_hold = False
        self.envelope_altr = False
        self.envelope_atak = False
        self.envelope_cont = False

        self.output = 0
        for channel in self.channels:
            channel.reset()

    def _set_envelope_period(self, period: int) -> None:
        self.envelope_period = period
        self.envelope_period_value = (period << 1) if period else ENVELOPE_PERIOD_DEFAULT

    def poke(self, location: int, value: int) -> None:
        """Write a register; only the low four address bits are decoded."""
        location &= 0x0F
        if location <= 0x02:
            value &= 0x00FF
            channel = self.channels[location]
            channel._set_period((channel.period & 0x0F00) | value)
        elif location == 0x03:
            value &= 0x00FF
            self._set_envelope_period((self.envelope_period & 0xFF00) | value)
        elif location <= 0x06:
            value &= 0x000F
            channel = self.channels[location - 0x04]
            channel._set_period((channel.period & 0x00FF) | (value << 8))
        elif location == 0x07:
            value &= 0x00FF
            self._set_envelope_period((self.envelope_period & 0x00FF) | (value << 8))
        elif location == 0x08:
            value &= 0x00FF
            for bit, channel in enumerate(self.channels):
                channel.tone_disabled = bool(value & (0x01 << bit))
                channel.noise_disabled = bool(value & (0x08 << bit))
                channel.is_dirty = True
            self.noise_idle = all(ch.noise_disabled for ch in self.channels)
        elif location == 0x09:
            value &= 0x001F
            self.noise_period = value
            self.noise_period_value = (value << 1) if value else NOISE_PERIOD_DEFAULT
        elif location == 0x0A:
            value &= 0x000F
            self.envelope_hold = bool(value & 0x0001)
            self.envelope_altr = bool(value & 0x0002)
            self.envelope_atak = bool(value & 0x0004)
            self.envelope_cont = bool(value & 0x0008)
            self.envelope_volume = 0 if self.envelope_atak else 15
            self.envelope_counter = self.envelope_period_value
            self.envelope_idle = False
        elif location <= 0x0D:
            value &= 0x003F
            channel = self.channels[location - 0x0B]
            channel.envelope = bool(value & 0x0010)
            channel.volume = value & 0x000F
            channel.is_dirty = True
        elif location == 0x0E:
            self.io1.output_value = value
            return
        else:
            self.io0.output_value = value
            return
        self.registers[location] = value

    def peek(self, location: int) -> int:
        location &= 0x0F
        if location == 0x0E:
            return self.io1.input_value
        if location == 0x0F:
            return self.io0.input_value
        return self.registers[location]

    def _step_envelope(self) -> None:
        self.envelope_counter -= self.clock_divisor
        while self.envelope_counter <= 0:
            self.envelope_counter += self.envelope_period_value
            if self.envelope_idle:
                continue
            self.envelope_volume += 1 if self.envelope_atak else -1
            if 0 <= self.envelope_volume <= 15:
                continue
            if not self.envelope_cont:
                self.envelope_volume = 0
                self.envelope_idle = True
            elif self.envelope_hold:
                self.envelope_volume = 0 if self.envelope_atak == self.envelope_altr else 15
                self.envelope_idle = True
            else:
                self.envelope_atak = self.envelope_atak != self.envelope_altr
                self.envelope_volume = 0 if self.envelope_atak else 15

    def _step_noise(self) -> None:
        self.noise_counter -= self.clock_divisor
        while self.noise_counter <= 0:
            self.noise_counter += self.noise_period_value
            if not self.noise_idle:
                self.random = (self.random >> 1) ^ (NOISE_FEEDBACK if self.noise else 0)
                self.noise = bool(self.random & 1)

    def _channel_amplitude(self, channel: Channel) -> int:
        sounding = (channel.tone_disabled or channel.tone) and (
            channel.noise_disabled or self.noise
        )
        if not sounding:
            return AMPLITUDES[0]
        level = self.envelope_volume if channel.envelope else channel.volume
        return AMPLITUDES[level]

    def tick(self, minimum: int) -> int:
        """Generate samples until at least ``minimum`` clocks have passed."""
        total_ticks = 0
        while True:
            self._step_envelope()
            self._step_noise()
            for channel in self.channels:
                channel.advance(self.clock_divisor)

            self.output = sum(self._channel_amplitude(ch) for ch in self.channels)
            if self.audio_output_line is not None:
                self.audio_output_line.play_sample(self.output)

            total_ticks += self.clocks_per_sample()
            if total_ticks >= minimum:
                return total_ticks