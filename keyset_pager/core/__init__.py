"""Core pagination engine, settings and exceptions."""
