"""Rendering of recorded board frames (matplotlib)."""

from .renderer import SceneRenderer

__all__ = ['SceneRenderer']
