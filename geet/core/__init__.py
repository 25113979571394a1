"""Core utilities: logging, configuration, errors and the command line."""
