"""Textual applications built on the viewer framework."""
