"""ContextVar-based parse configuration for rfctree.

Provides context-local configuration using Python's ContextVars (PEP 567).
The active config decides which matchers the dispatcher uses.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Direct parser usage
    from rfctree.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(disabled_matchers=frozenset({"abnf"}))):
        doc = parse(lines)

    # Or per call, overriding the ambient config
    doc = parse(lines, config=ParseConfig(source_file="rfc6749.txt"))

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rfctree.errors import MatcherRegistryError

if TYPE_CHECKING:
    from rfctree.matchers.protocol import Matcher

# Paragraph is the fallback every line can end up in.
REQUIRED_MATCHERS = frozenset({"paragraph"})


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        extra_matchers: Custom matchers added to the default set, sorted
            with it by priority
        disabled_matchers: Names of default matchers to leave out
        source_file: Name shown in error messages

    """

    extra_matchers: tuple[Matcher, ...] = ()
    disabled_matchers: frozenset[str] = field(default_factory=frozenset)
    source_file: str | None = None

    def __post_init__(self) -> None:
        required = self.disabled_matchers & REQUIRED_MATCHERS
        if required:
            msg = f"Matcher '{sorted(required)[0]}' cannot be disabled"
            raise MatcherRegistryError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are ignored. Sequences are coerced to the field types.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "disabled_matchers": ["abnf"],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.disabled_matchers
            frozenset({'abnf'})

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "extra_matchers" in filtered:
            filtered["extra_matchers"] = tuple(filtered["extra_matchers"])
        if "disabled_matchers" in filtered:
            filtered["disabled_matchers"] = frozenset(filtered["disabled_matchers"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (context-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(source_file="draft.txt")):
        ...     doc = parse(lines)
        >>> # Previous config is active again

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
