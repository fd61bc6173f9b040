[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "intvcore"
version = "1.0.0"
description = "Sound chip, audio mixer, sprite helpers and front-end settings for a home video game console emulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "psg", "sound", "audio", "mixer", "sprites", "console"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["intvcore"]

[tool.pytest.ini_options]
addopts = "-ra"
