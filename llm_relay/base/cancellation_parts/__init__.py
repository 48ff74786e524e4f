"""Cancellation implementation parts (see ``llm_relay.base.cancellation``)."""
