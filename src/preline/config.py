"""ContextVar-based preprocessing configuration for preline.

Provides context-local configuration using Python's ContextVars (PEP 567).
Config is set once per Preprocessor call, read by every parser and lexer
created during that call, including those for included files.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Direct usage
    from preline.config import config_context, PreprocessConfig
    from preline.commenters import CommenterRegistry, CPP_COMMENT

    config = PreprocessConfig(commenters=CommenterRegistry([CPP_COMMENT]))
    with config_context(config):
        root = parse_string("main", source)

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from preline.commenters import Commenter, CommenterRegistry

DEFAULT_TRIGGER = "#"
DEFAULT_MAX_INCLUDE_DEPTH = 128


@dataclass(frozen=True, slots=True)
class PreprocessConfig:
    """Immutable preprocessing configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        trigger: String that begins a directive line
        max_include_depth: Maximum number of nested files, the top-level
            file included. Guards against include loops.
        commenters: Ordered comment styles recognized by the lexer

    """

    trigger: str = DEFAULT_TRIGGER
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH
    commenters: CommenterRegistry = field(default_factory=CommenterRegistry)

    def __post_init__(self) -> None:
        if not self.trigger:
            msg = "trigger must not be empty"
            raise ValueError(msg)
        if any(ch.isspace() for ch in self.trigger):
            msg = f"trigger must not contain whitespace: {self.trigger!r}"
            raise ValueError(msg)
        if self.max_include_depth < 1:
            msg = f"max_include_depth must be at least 1, got {self.max_include_depth}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> PreprocessConfig:
        """Create PreprocessConfig from dictionary.

        Only includes keys that are valid PreprocessConfig fields; unknown keys
        are silently ignored. Commenters may be given as Commenter objects or
        as mappings with ``begin``, ``end`` and ``strip`` keys.

        Args:
            config_dict: Dictionary with config values.

        Returns:
            New PreprocessConfig instance with values from dict.

        Example:
            >>> config = PreprocessConfig.from_dict({
            ...     "trigger": "%",
            ...     "commenters": [{"begin": "//", "strip": True}],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.trigger
            '%'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        raw_commenters = filtered.get("commenters")
        if raw_commenters is not None and not isinstance(raw_commenters, CommenterRegistry):
            filtered["commenters"] = CommenterRegistry(
                c if isinstance(c, Commenter) else Commenter.from_dict(c)
                for c in raw_commenters
            )
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: PreprocessConfig = PreprocessConfig()

_preprocess_config: ContextVar[PreprocessConfig] = ContextVar(
    "preprocess_config",
    default=_DEFAULT_CONFIG,
)


def get_config() -> PreprocessConfig:
    """Get current preprocessing configuration (context-local).

    Returns:
        The active PreprocessConfig for this thread/context.

    """
    return _preprocess_config.get()


def set_config(config: PreprocessConfig) -> None:
    """Set preprocessing configuration for current context.

    Args:
        config: PreprocessConfig instance to use for this context.

    """
    _preprocess_config.set(config)


def reset_config() -> None:
    """Reset to default configuration."""
    _preprocess_config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: PreprocessConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: PreprocessConfig to use within the context.

    Yields:
        None

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _preprocess_config.get()
    _preprocess_config.set(config)
    try:
        yield
    finally:
        _preprocess_config.set(previous)


__all__ = [
    "DEFAULT_MAX_INCLUDE_DEPTH",
    "DEFAULT_TRIGGER",
    "PreprocessConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
]
