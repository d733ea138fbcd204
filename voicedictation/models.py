"""Speech recognition models and engines available to the daemon."""

from __future__ import annotations

from typing import List

_PARAKEET_DEFAULT = "parakeet:default"


def list_models() -> List[str]:
    """List available models; Parakeet is the only engine."""
    return [_PARAKEET_DEFAULT]


def list_preview_models(language: str = "en") -> List[str]:
    """List preview (fast) models; the same as the final models."""
    return list_models()


def list_final_models(language: str = "en") -> List[str]:
    """List final (accurate) models; the same as the preview models."""
    return list_models()


def engine_summary() -> str:
    """Short summary of the available engines for display."""
    return "parakeet"