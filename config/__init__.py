"""Configuration for the form defense pipeline."""
