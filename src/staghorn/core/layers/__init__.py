"""Layer stack resolution for staghorn.

Default stack (low -> high precedence):
  team (cached repo CLAUDE.md) -> personal (~/.config/staghorn) -> project (<repo>/.staghorn)
"""

from .stack import (
    LayerSpec,
    LayerStack,
    collect_layers,
    resolve_layer_stack,
    strip_instructional_comments,
)

__all__ = [
    "LayerSpec",
    "LayerStack",
    "collect_layers",
    "resolve_layer_stack",
    "strip_instructional_comments",
]
