"""Console, logging and subprocess helpers."""
