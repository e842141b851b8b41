"""Headless command-line commands."""
