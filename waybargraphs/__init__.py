"""Waybar modules: CPU, memory, network and temperature graphs, update counts and a page matcher."""

__version__ = "0.1.0"
__all__ = ["archupdates", "cpugraph", "memgraph", "netgraph", "tempgraph", "stocks"]