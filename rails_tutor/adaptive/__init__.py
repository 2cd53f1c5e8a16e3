"""Adaptive: prerequisite-aware ordering of tutorials."""

from .path_sequencer import PathSequencer

__all__ = ["PathSequencer"]
