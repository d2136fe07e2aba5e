"""Output renderers for reading records."""
