"""
Outbound request built by a provider adapter.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class PreparedRequest:
    """URL, headers and JSON body of one completion request.

    The transfer layer posts ``body`` as JSON to ``url`` with ``headers``;
    nothing else about the request is vendor-specific.
    """

    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def stream(self) -> bool:
        return bool(self.body.get("stream"))


__all__ = ["PreparedRequest"]
