from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class StaghornError(Exception):
    """Base exception for staghorn.

    Carries an optional user-facing ``hint`` describing how to recover.
    """

    context: Dict[str, Any]
    hint: Optional[str]

    def __init__(
        self,
        message: str = "",
        *,
        hint: Optional[str] = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.hint = hint
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    @property
    def code(self) -> str:
        return self.__class__.__name__

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        payload: Dict[str, Any] = {
            "message": str(self),
            "code": self.code,
            "context": self.context,
        }
        if self.hint:
            payload["hint"] = self.hint
        return payload


class ConfigNotFoundError(StaghornError, FileNotFoundError):
    """Raised when the configuration file does not exist."""

    def __init__(self, path: str, *, context: Mapping[str, Any] | None = None) -> None:
        message = f"config file not found: {path}"
        StaghornError.__init__(
            self,
            message,
            hint="Create ~/.config/staghorn/config.yaml with a 'source: owner/repo' entry",
            context={"path": path, **dict(context or {})},
        )
        FileNotFoundError.__init__(self, message)


class ConfigInvalidError(StaghornError, ValueError):
    """Raised when the configuration fails to parse or validate."""

    def __init__(
        self,
        reason: str,
        *,
        hint: Optional[str] = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        message = f"invalid config: {reason}"
        StaghornError.__init__(
            self,
            message,
            hint=hint or "Check your config file at ~/.config/staghorn/config.yaml",
            context=context,
        )
        ValueError.__init__(self, message)


class InvalidRepoError(StaghornError, ValueError):
    """Raised for malformed ``owner/repo`` strings."""

    def __init__(self, repo: str) -> None:
        message = f"invalid repository format: {repo}"
        StaghornError.__init__(
            self,
            message,
            hint="Use format: github.com/owner/repo or owner/repo",
            context={"repo": repo},
        )
        ValueError.__init__(self, message)


class CacheNotFoundError(StaghornError):
    """Raised when no cached team config exists for a repository."""

    def __init__(self, repo: str, path: str) -> None:
        super().__init__(
            f"no cached config for {repo}",
            hint=f"Place the team CLAUDE.md at {path} or pass --team",
            context={"repo": repo, "path": path},
        )


class LayerNotFoundError(StaghornError):
    """Raised when a requested layer has no content to read or write."""


class NoProvenanceError(StaghornError):
    """Raised when a merged document carries no provenance markers."""

    def __init__(self, message: str = "no provenance markers found in merged content") -> None:
        super().__init__(
            message,
            hint="Provenance markers look like: <!-- staghorn:source:team -->. "
            "Re-run 'staghorn sync' with annotation enabled before splitting.",
        )


__all__ = [
    "StaghornError",
    "ConfigNotFoundError",
    "ConfigInvalidError",
    "InvalidRepoError",
    "CacheNotFoundError",
    "LayerNotFoundError",
    "NoProvenanceError",
]
