"""Sound generator, audio mixer, sprite helpers and front-end settings for a console emulator."""

__version__ = "1.0.0"
__all__ = ["config", "controls", "menu", "mixer", "mobs", "psg"]