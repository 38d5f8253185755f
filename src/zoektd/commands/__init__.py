"""zoektd CLI commands - Subcommand implementations (loaded lazily)."""
