"""Core curriculum models, validation and serialization."""
