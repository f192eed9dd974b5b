[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deskkit"
version = "0.1.0"
description = "Desktop status line components, a terminal system summary and box-drawing geometry helpers"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["status bar", "system information", "monitoring", "fetch", "box drawing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
deskkit-status = "deskkit.statusbar:main"
deskkit-fetch = "deskkit.fetch.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["deskkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
