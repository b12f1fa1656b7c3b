"""Top-level staghorn commands (one module per command)."""
