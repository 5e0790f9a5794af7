"""Textual inspector for documentation notes."""
