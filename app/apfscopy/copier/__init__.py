"""Fault-tolerant tree copy engine."""

from apfscopy.copier.runner import probe_source, run_copy
from apfscopy.copier.tree import TreeCopier

__all__ = ["TreeCopier", "probe_source", "run_copy"]
