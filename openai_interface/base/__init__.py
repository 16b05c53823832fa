"""Core layer: data model, streaming pipeline, errors and ambient utilities."""
