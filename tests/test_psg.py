import pytest

from intvcore.mixer import AudioMixer
from intvcore.psg import (
    AMPLITUDES,
    ENVELOPE_PERIOD_DEFAULT,
    NOISE_PERIOD_DEFAULT,
    PSG,
    TONE_PERIOD_DEFAULT,
    Channel,
    PSGPort,
)


@pytest.fixture
def psg():
    return PSG()


def test_channel_reset_restores_defaults():
    channel = Channel(period=5, period_value=5, volume=9, tone=True, is_dirty=False)
    channel.reset()
    assert channel.period_value == 0x1000
    assert channel.tone_counter == 0x1000
    assert channel.volume == 0
    assert channel.tone is False
    assert channel.is_dirty is True


def test_channel_advance_toggles_at_expiry():
    channel = Channel()
    channel.advance(TONE_PERIOD_DEFAULT - 1)
    assert channel.tone is False
    channel.advance(1)
    assert channel.tone is True
    assert channel.tone_counter == TONE_PERIOD_DEFAULT


def test_channel_advance_multiple_periods():
    channel = Channel(period_value=4, tone_counter=4)
    channel.advance(8)
    assert channel.tone is False
    assert 0 < channel.tone_counter <= 4


def test_tone_period_low_and_high(psg):
    psg.poke(0x00, 0x34)
    psg.poke(0x04, 0x02)
    assert psg.channels[0].period == 0x234
    assert psg.channels[0].period_value == 0x234


def test_zero_period_uses_default(psg):
    psg.poke(0x01, 0x10)
    psg.poke(0x01, 0x00)
    assert psg.channels[1].period_value == TONE_PERIOD_DEFAULT


def test_register_values_are_masked(psg):
    psg.poke(0x00, 0x1FF)
    psg.poke(0x04, 0xFF)
    psg.poke(0x09, 0xFF)
    assert psg.peek(0x00) == 0xFF
    assert psg.peek(0x04) == 0x0F
    assert psg.peek(0x09) == 0x1F


def test_address_decoding_uses_low_nibble(psg):
    psg.poke(0x1F2, 0x42)
    assert psg.peek(0x02) == 0x42
    assert psg.peek(0x1F2) == 0x42
    assert psg.channels[2].period == 0x42


def test_envelope_period(psg):
    assert psg.envelope_period_value == ENVELOPE_PERIOD_DEFAULT
    psg.poke(0x03, 0x05)
    psg.poke(0x07, 0x01)
    assert psg.envelope_period == 0x105
    assert psg.envelope_period_value == psg.envelope_period << 1


def test_noise_period(psg):
    psg.poke(0x09, 0x00)
    assert psg.noise_period_value == NOISE_PERIOD_DEFAULT
    psg.poke(0x09, 0x03)
    assert psg.noise_period == 3
    assert psg.noise_period_value == psg.noise_period << 1


def test_enable_register(psg):
    psg.poke(0x08, 0x38)
    assert psg.noise_idle is True
    assert all(ch.noise_disabled for ch in psg.channels)
    psg.poke(0x08, 0x09)
    assert psg.noise_idle is False
    assert psg.channels[0].tone_disabled is True
    assert psg.channels[0].noise_disabled is True
    assert psg.channels[1].tone_disabled is False


def test_volume_register(psg):
    psg.poke(0x0C, 0x1A)
    assert psg.channels[1].envelope is True
    assert psg.channels[1].volume == 0x0A
    assert psg.peek(0x0C) == 0x1A


def test_io_ports():
    io0, io1 = PSGPort(input_value=0x7F), PSGPort(input_value=0x11)
    psg = PSG(io0=io0, io1=io1)
    psg.poke(0x0E, 0xAB)
    psg.poke(0x0F, 0xCD)
    assert io1.output_value == 0xAB
    assert io0.output_value == 0xCD
    assert psg.peek(0x0E) == 0x11
    assert psg.peek(0x0F) == 0x7F


def test_tick_returns_clock_multiple(psg):
    assert psg.tick(1) == psg.clocks_per_sample()
    consumed = psg.tick(1000)
    assert consumed >= 1000
    assert consumed % psg.clocks_per_sample() == 0


def test_default_clocks_per_sample(psg):
    assert psg.clocks_per_sample() == 128


def test_silent_output_after_reset(psg):
    psg.tick(1)
    assert psg.output == 3 * AMPLITUDES[0]


def test_full_volume_channel(psg):
    psg.poke(0x08, 0x3F)
    psg.poke(0x0B, 0x0F)
    psg.tick(1)
    assert psg.output == AMPLITUDES[15] + 2 * AMPLITUDES[0]


def test_envelope_one_shot_goes_idle(psg):
    psg.poke(0x03, 0x01)
    psg.poke(0x0A, 0x04)
    assert psg.envelope_idle is False
    assert psg.envelope_volume == 0
    psg.tick(10000)
    assert psg.envelope_idle is True
    assert psg.envelope_volume == 0


def test_envelope_hold_stays_high(psg):
    psg.poke(0x03, 0x01)
    psg.poke(0x0A, 0x0D)
    psg.tick(10000)
    assert psg.envelope_idle is True
    assert psg.envelope_volume == 15


def test_envelope_continuous_stays_in_range(psg):
    psg.poke(0x03, 0x01)
    psg.poke(0x0A, 0x0E)
    for _ in range(50):
        psg.tick(1)
        assert 0 <= psg.envelope_volume <= 15
    assert psg.envelope_idle is False


def test_noise_generator_invariant(psg):
    psg.poke(0x08, 0x07)
    psg.poke(0x09, 0x01)
    psg.tick(5000)
    assert psg.random != 1
    assert psg.noise == bool(psg.random & 1)


def test_reset_clears_registers(psg):
    psg.poke(0x0B, 0x0F)
    psg.poke(0x0A, 0x04)
    psg.reset()
    assert psg.peek(0x0B) == 0
    assert psg.channels[0].volume == 0
    assert psg.envelope_idle is True


def test_plays_into_mixer_line(psg):
    mixer = AudioMixer()
    mixer.add_producer(psg)
    mixer.init(psg.clock_speed // psg.clocks_per_sample())
    mixer.reset()
    psg.poke(0x08, 0x3F)
    psg.poke(0x0B, 0x0F)
    psg.tick(1)
    assert psg.audio_output_line.current_sample == psg.output
    assert psg.audio_output_line.common_clock_counter == (
        psg.audio_output_line.common_clocks_per_sample
    )