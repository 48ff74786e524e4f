"""
Model listing entry returned by ``CompletionClient.list_models``.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelInfo:
    """A model advertised by a vendor's ``/models`` endpoint.

    Attributes:
        id: Identifier to place in ``Configuration.model``.
        name: Display name; ``"<id> (<owned_by>)"`` when the owner is known.
    """

    id: str
    name: str


__all__ = ["ModelInfo"]
