"""Textual adapter: controller importable without the ``textual`` package."""

from .controller import EditorAdapter, EditorHooks

__all__ = ["EditorAdapter", "EditorHooks"]
