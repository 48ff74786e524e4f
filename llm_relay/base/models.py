"""Core value types (public surface).

Re-exports the dataclasses under ``llm_relay.base.models_parts`` so callers
can import them from a single stable path.
"""

from .models_parts import Configuration, Message, ModelInfo, PreparedRequest, Role, Vendor

__all__ = ["Configuration", "Message", "ModelInfo", "PreparedRequest", "Role", "Vendor"]
