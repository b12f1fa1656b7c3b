from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from staghorn.core.config.manager import Config
from staghorn.core.config.paths import Paths, ProjectPaths
from staghorn.core.exceptions import CacheNotFoundError, LayerNotFoundError
from staghorn.core.language.loader import LanguageFile, list_available_languages, load_language_files
from staghorn.core.merge.merge import Layer
from staghorn.core.utils.io import read_text, write_text

logger = logging.getLogger(__name__)

LAYER_ORDER = ("team", "personal", "project")

INSTRUCTIONAL_PREFIX = "<!-- [staghorn]"


def strip_instructional_comments(content: str) -> str:
    """Remove ``<!-- [staghorn] ... -->`` guidance lines and collapse blank runs."""
    result: List[str] = []
    prev_blank = False
    for line in content.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith(INSTRUCTIONAL_PREFIX) and trimmed.endswith("-->"):
            continue
        is_blank = trimmed == ""
        if is_blank and prev_blank:
            continue
        prev_blank = is_blank
        result.append(line)

    while result and not result[0].strip():
        result.pop(0)
    while result and not result[-1].strip():
        result.pop()
    return "\n".join(result)


def collect_layers(
    team: Optional[str] = None,
    personal: Optional[str] = None,
    project: Optional[str] = None,
) -> List[Layer]:
    """Build the ordered layer list, skipping absent sources."""
    layers: List[Layer] = []
    for source, content in zip(LAYER_ORDER, (team, personal, project)):
        if content is not None:
            layers.append(Layer(content=content, source=source))
    return layers


@dataclass(frozen=True)
class LayerSpec:
    """A single layer: its markdown source file and language directory."""

    id: str
    path: Path
    languages_dir: Optional[Path] = None


@dataclass(frozen=True)
class LayerStack:
    """Resolved layer stack (low -> high precedence)."""

    layers: Tuple[LayerSpec, ...]
    source_repo: str = ""

    def layer_by_id(self, layer_id: str) -> Optional[LayerSpec]:
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def read_layers(self) -> List[Layer]:
        """Read every layer file.

        Raises:
            CacheNotFoundError: If the team layer is configured but missing
        """
        contents: Dict[str, Optional[str]] = {}
        for spec in self.layers:
            text = read_text(spec.path)
            if text is None:
                if spec.id == "team":
                    raise CacheNotFoundError(self.source_repo or "team", str(spec.path))
                logger.debug("No %s layer at %s", spec.id, spec.path)
                continue
            if spec.id != "team":
                text = strip_instructional_comments(text)
            contents[spec.id] = text
        return collect_layers(
            team=contents.get("team"),
            personal=contents.get("personal"),
            project=contents.get("project"),
        )

    def available_languages(self) -> List[str]:
        return list_available_languages(*(spec.languages_dir for spec in self.layers))

    def load_language_files(self, languages: List[str]) -> Dict[str, List[LanguageFile]]:
        dirs = {spec.id: spec.languages_dir for spec in self.layers}
        return load_language_files(
            languages,
            team_dir=dirs.get("team"),
            personal_dir=dirs.get("personal"),
            project_dir=dirs.get("project"),
        )

    def write_layer(self, layer_id: str, content: str) -> Path:
        """Write recovered content back to a layer's source file."""
        spec = self.layer_by_id(layer_id)
        if spec is None:
            raise LayerNotFoundError(f"cannot apply to layer: {layer_id}", context={"layer": layer_id})
        if not content.strip():
            raise LayerNotFoundError(f"refusing to write empty content to {layer_id} layer")
        write_text(spec.path, content.strip() + "\n")
        logger.info("Wrote %s layer to %s", layer_id, spec.path)
        return spec.path

    def write_language(self, layer_id: str, language: str, content: str) -> Path:
        spec = self.layer_by_id(layer_id)
        if spec is None or spec.languages_dir is None:
            raise LayerNotFoundError(
                f"layer {layer_id} has no languages directory",
                context={"layer": layer_id, "language": language},
            )
        if not content.strip():
            raise LayerNotFoundError(f"refusing to write empty {language} content to {layer_id} layer")
        target = spec.languages_dir / f"{language}.md"
        write_text(target, content.strip() + "\n")
        logger.info("Wrote %s %s language file to %s", layer_id, language, target)
        return target


def resolve_layer_stack(
    cfg: Config,
    paths: Optional[Paths] = None,
    project_root: Optional[Path] = None,
    team_override: Optional[Path] = None,
) -> LayerStack:
    """Resolve the layer stack from config and filesystem conventions.

    The team layer comes from ``team_override`` when given, else from the
    cache file for ``cfg.source``. Without either, there is no team layer.
    """
    paths = paths or Paths.from_env()
    specs: List[LayerSpec] = []

    if team_override is not None:
        team_override = Path(team_override)
        specs.append(LayerSpec(id="team", path=team_override, languages_dir=team_override.parent / "languages"))
    elif cfg.source:
        owner, repo = cfg.owner_repo()
        specs.append(
            LayerSpec(
                id="team",
                path=paths.cache_file(owner, repo),
                languages_dir=paths.team_languages_dir(owner, repo),
            )
        )

    specs.append(LayerSpec(id="personal", path=paths.personal_md, languages_dir=paths.personal_languages))

    if project_root is not None:
        project = ProjectPaths(Path(project_root))
        specs.append(LayerSpec(id="project", path=project.source_md, languages_dir=project.languages_dir))

    return LayerStack(layers=tuple(specs), source_repo=cfg.source)


__all__ = [
    "LAYER_ORDER",
    "LayerSpec",
    "LayerStack",
    "collect_layers",
    "resolve_layer_stack",
    "strip_instructional_comments",
]
