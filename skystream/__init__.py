"""SkyStream: live and simulated aircraft positions for an interactive map."""

__version__ = "0.1.0"
