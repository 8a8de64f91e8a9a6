"""Core copy-engine building blocks: paths, settings, sanitizing, errors."""
