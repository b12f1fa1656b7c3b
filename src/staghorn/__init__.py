"""
Staghorn - layered CLAUDE.md management

Staghorn composes a shared team baseline, a personal overlay and an optional
project overlay into one managed markdown document, and can split an edited
merged document back into its source layers.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
