"""Shared staghorn utilities."""

from .io import atomic_write, ensure_parent_dir, read_text, read_yaml, write_text, write_yaml

__all__ = ["atomic_write", "ensure_parent_dir", "read_text", "read_yaml", "write_text", "write_yaml"]
