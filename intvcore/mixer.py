"""Mixing of several sample-producing chips into a single audio stream."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

MAX_AUDIO_PRODUCERS = 10
# The write position into the output ring is an 8-bit counter.
RING_SIZE = 256


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _to_int16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def clip_sample(sample: int) -> int:
    """Clamp a sample to the signed 16-bit range."""
    return max(-32768, min(32767, int(sample)))


@dataclass
class AudioOutputLine:
    """Accumulates the samples one producer emits between mixer ticks."""

    sample_buffer: int = 0
    previous_sample: int = 0
    current_sample: int = 0
    common_clock_counter: int = 0
    common_clocks_per_sample: int = 0

    def reset(self) -> None:
        self.sample_buffer = 0
        self.previous_sample = 0
        self.current_sample = 0
        self.common_clock_counter = 0
        self.common_clocks_per_sample = 0

    def play_sample(self, sample: int) -> None:
        """Record a new 16-bit sample from the producer."""
        self.sample_buffer += self.current_sample * self.common_clocks_per_sample
        self.common_clock_counter += self.common_clocks_per_sample
        self.previous_sample = self.current_sample
        self.current_sample = _to_int16(sample)


class AudioProducer(ABC):
    """A chip that emits samples onto the output line a mixer gives it."""

    audio_output_line: AudioOutputLine | None = None

    @property
    @abstractmethod
    def clock_speed(self) -> int:
        """Clock rate of the producer in Hz."""

    @abstractmethod
    def clocks_per_sample(self) -> int:
        """Number of producer clocks per emitted sample."""


class AudioMixer:
    """Resamples and averages the output of all producers into a ring buffer."""

    def __init__(self, buffer_size: int = RING_SIZE) -> None:
        if buffer_size < RING_SIZE:
            raise ValueError(f"buffer size must be at least {RING_SIZE}")
        self.buffer_size = buffer_size
        self.samples = [0] * buffer_size
        self.write_index = 0
        self.producers: list[AudioProducer] = []
        self.clock_speed = 0
        self.common_clocks_per_tick = 0
        self.sample_size = 0
        self.sample_count = 0
        self.muted = False
        self.single_producer = False
        self._initialized = False

    def add_producer(self, producer: AudioProducer) -> None:
        """Attach a producer and give it a fresh output line."""
        if len(self.producers) >= MAX_AUDIO_PRODUCERS:
            raise ValueError(f"at most {MAX_AUDIO_PRODUCERS} audio producers")
        producer.audio_output_line = AudioOutputLine()
        self.producers.append(producer)

    def remove_producer(self, producer: AudioProducer) -> None:
        """Detach a producer; unknown producers are ignored."""
        for index, existing in enumerate(self.producers):
            if existing is producer:
                producer.audio_output_line = None
                del self.producers[index]
                return

    def remove_all(self) -> None:
        while self.producers:
            self.remove_producer(self.producers[0])

    def init(self, sample_rate: int) -> None:
        """Prepare the mixer to output at ``sample_rate`` Hz."""
        self.release()
        self.clock_speed = sample_rate
        self.sample_size = int(sample_rate / 60.0)
        self.samples = [0] * self.buffer_size
        self._initialized = True

    def release(self) -> None:
        if self._initialized:
            self.sample_size = 0
            self.sample_count = 0

    def reset(self) -> None:
        """Clear all state and compute the common clock of all producers."""
        if not self.clock_speed:
            raise RuntimeError("audio mixer has not been initialised")
        self.common_clocks_per_tick = 0
        self.sample_count = 0
        self.samples = [0] * self.buffer_size

        total_clock_speed = self.clock_speed
        for producer in self.producers:
            producer.audio_output_line.reset()
            total_clock_speed = math.lcm(total_clock_speed, producer.clock_speed)

        self.common_clocks_per_tick = total_clock_speed // self.clock_speed
        for producer in self.producers:
            producer.audio_output_line.common_clocks_per_sample = (
                total_clock_speed // producer.clock_speed
            ) * producer.clocks_per_sample()

    def tick(self, minimum: int) -> int:
        """Emit ``minimum`` mixed samples and return the ticks consumed."""
        if self.muted:
            return minimum

        active = self.producers[:1] if self.single_producer else self.producers
        per_tick = self.common_clocks_per_tick

        for _ in range(minimum):
            total_sample = 0
            for producer in active:
                line = producer.audio_output_line
                missing_clocks = per_tick - line.common_clock_counter
                sample_to_use = (
                    line.previous_sample if missing_clocks < 0 else line.current_sample
                )

                # fill in for a producer that has been idle since the last tick
                missing_count = _tdiv(missing_clocks, line.common_clocks_per_sample)
                if missing_count:
                    filled = missing_count * line.common_clocks_per_sample
                    line.sample_buffer += missing_count * sample_to_use * line.common_clocks_per_sample
                    line.common_clock_counter += filled
                    missing_clocks -= filled
                partial_sample = sample_to_use * missing_clocks

                total_sample += _to_int16(
                    _tdiv(line.sample_buffer + partial_sample, per_tick)
                )

                line.sample_buffer = -partial_sample
                line.common_clock_counter = -missing_clocks

            if len(active) > 1:
                total_sample = _tdiv(total_sample, len(active))

            self.samples[self.write_index] = _to_int16(total_sample)
            self.write_index = (self.write_index + 1) % RING_SIZE

            self.sample_count += 1
            if self.sample_count == self.buffer_size:
                self.sample_count = 0

        return minimum

    def flush_audio(self) -> None:
        self.sample_count = 0