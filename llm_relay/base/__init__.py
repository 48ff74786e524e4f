"""Vendor-agnostic building blocks: models, errors, logging, transport, streaming."""
