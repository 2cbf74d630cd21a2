"""Core infrastructure: configuration, extensions, logging, errors, wiring."""
