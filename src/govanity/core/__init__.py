"""Core resolution and rendering for vanity import paths."""
