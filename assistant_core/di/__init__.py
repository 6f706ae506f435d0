"""Dependency injection container (composition root)."""

from __future__ import annotations

from .container import AssistantContainer, build_backend, build_container

__all__ = ["AssistantContainer", "build_backend", "build_container"]
