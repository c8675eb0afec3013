[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "waybargraphs"
version = "0.1.0"
description = "Small status modules for Waybar: CPU, memory, network and temperature graphs, package update counts and a page matcher"
requires-python = ">=3.10"
dependencies = [
    "psutil",
    "requests",
]
keywords = ["waybar", "status bar", "monitoring", "cpu", "memory", "network", "temperature", "pacman"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
waybar-archupdates = "waybargraphs.archupdates:main"
waybar-cpugraph = "waybargraphs.cpugraph:main"
waybar-memgraph = "waybargraphs.memgraph:main"
waybar-netgraph = "waybargraphs.netgraph:main"
waybar-tempgraph = "waybargraphs.tempgraph:main"
waybar-stocks = "waybargraphs.stocks:main"

[tool.hatch.build.targets.wheel]
packages = ["waybargraphs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
