"""zoektd - Declarative Zoekt code search daemon for launchd and systemd."""

__version__ = "0.1.0"
