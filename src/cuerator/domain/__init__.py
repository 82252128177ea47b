"""Domain layer: EDL parsing, metadata enrichment and cue sheet reporting."""
