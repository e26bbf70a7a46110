"""Finalization listener base class."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from enterprise_build.module import Module


class FinalizeListener:
    """Base listener with default no-op hooks.

    Hooks are called around each group of deferred actions during module
    finalization. ``owner`` is the convention id the group belongs to, or
    None for actions the module registered itself.
    """

    def before(self, module: Module, owner: str | None) -> None:
        """Called before the deferred actions of ``owner`` run."""

    def after(self, module: Module, owner: str | None) -> None:
        """Called after the deferred actions of ``owner`` completed."""

    def on_error(self, module: Module, owner: str | None, error: Exception) -> None:
        """Called when a deferred action of ``owner`` raised ``error``."""
