"""The Cue-rator - music cue sheets from DAW EDL exports."""

__version__ = "0.1.0"
