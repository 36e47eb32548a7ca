[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "algendado"
version = "0.1.0"
description = "A personal command-line agenda with a local web calendar, ICS export and desktop reminders"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["agenda", "calendar", "ics", "reminders", "notifications", "scheduling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
algen = "algendado.cli:main"
algen-server = "algendado.server:main"
algen-notify = "algendado.popup:popup_main"
algen-stack = "algendado.popup:stack_main"
algen-debug = "algendado.debug:main"

[tool.hatch.build.targets.wheel]
packages = ["algendado"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
