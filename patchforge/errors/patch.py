from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.result import PatchResult


class PatchError(Exception):
    """Base class for errors raised by patchforge."""


class PatchRejectedError(PatchError):
    """A patch produced no usable change. Raised on request, never by the engine itself."""

    def __init__(self, result: "PatchResult"):
        self.result = result
        super().__init__(result.reason or "patch rejected")
