[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voicedictation"
version = "0.1.0"
description = "Text post-processing, voice activity detection and desktop helpers for voice dictation"
requires-python = ">=3.10"
keywords = ["dictation", "speech", "voice", "transcription", "vad", "hyprland"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Speech",
    "Topic :: Text Processing :: Filters",
]
dependencies = [
    "platformdirs",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["voicedictation"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
