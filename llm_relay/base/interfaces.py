"""ProviderAdapter Protocol.

Defines the contract every vendor adapter implements. Adapters are pure: they
build requests and extract text from decoded JSON, and never perform I/O or
keep per-request state, so one instance serves every subscription.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from .models import Configuration, Message, ModelInfo, PreparedRequest, Vendor


@runtime_checkable
class ProviderAdapter(Protocol):
    """Vendor-specific translation between the pipeline and a vendor's JSON."""

    @property
    def vendor(self) -> Vendor:
        """The vendor tag this adapter serves."""
        ...

    @property
    def endpoint_suffix(self) -> str:
        """Path appended to the normalized base URL (e.g. ``/messages``)."""
        ...

    def build_headers(self, configuration: Configuration) -> Dict[str, str]:
        """Content type plus the vendor's authentication headers."""
        ...

    def build_request(
        self, configuration: Configuration, messages: Sequence[Message], stream: bool
    ) -> PreparedRequest:
        """Return the URL, auth headers and JSON body for one completion."""
        ...

    def extract_stream_text(self, event: Any) -> Optional[str]:
        """Return the incremental text of one decoded SSE event, or ``None``.

        Must not raise on structurally foreign events.
        """
        ...

    def extract_completion_text(self, body: Any) -> Optional[str]:
        """Return the completion text of a decoded single-shot body, or ``None``."""
        ...

    def models_url(self, configuration: Configuration) -> Optional[str]:
        """URL of the vendor's model listing, or ``None`` when it has none."""
        ...

    def parse_models(self, body: Mapping[str, Any]) -> List[ModelInfo]:
        """Convert a decoded model listing into ``ModelInfo`` entries."""
        ...


__all__ = ["ProviderAdapter"]
