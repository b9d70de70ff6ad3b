"""Batching of trigger events before delivery."""

from .alert_batcher import AlertBatcher, BatchCallback

__all__ = ["AlertBatcher", "BatchCallback"]
