"""Environment-driven configuration for selection sessions."""

from __future__ import annotations

from dataclasses import dataclass

from .telemetry import env

DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_LANGUAGE = "rust"


@dataclass(frozen=True, slots=True)
class ClimberConfig:
    """Knobs shared by every session of a ``SelectionSessions`` registry."""

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")
        object.__setattr__(self, "language", self.language.strip().lower())
        # Imported lazily; the grammar profiles pull in the climbing package.
        from tree_climber.climbing.grammars import available_profiles

        if self.language not in available_profiles():
            raise ValueError(
                f"Unsupported language '{self.language}'; "
                f"expected one of {sorted(available_profiles())}"
            )

    @classmethod
    def from_env(cls) -> "ClimberConfig":
        raw_iterations = env("MAX_ITERATIONS")
        try:
            max_iterations = (
                int(raw_iterations) if raw_iterations else DEFAULT_MAX_ITERATIONS
            )
        except ValueError as exc:
            raise ValueError(
                f"TREE_CLIMBER_MAX_ITERATIONS must be an integer, got {raw_iterations!r}"
            ) from exc
        language = env("LANGUAGE") or DEFAULT_LANGUAGE
        return cls(max_iterations=max_iterations, language=language)


__all__ = ["ClimberConfig", "DEFAULT_MAX_ITERATIONS", "DEFAULT_LANGUAGE"]
