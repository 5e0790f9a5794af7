"""Markdown documentation notes with links, rendered in the terminal."""
