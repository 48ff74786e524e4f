"""Request orchestration: the completion client, its transfers and the CLI."""

from .client import CompletionClient
from .model_listing import fetch_models
from .transfer import run_single_shot, run_streaming

__all__ = ["CompletionClient", "fetch_models", "run_single_shot", "run_streaming"]
