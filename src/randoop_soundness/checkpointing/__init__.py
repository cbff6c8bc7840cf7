"""Checkpointing domain exports."""

from .checkpoint_manager import DEFAULT_SNAPSHOT_DIRNAME, CheckpointError, checkpoint

__all__ = ["DEFAULT_SNAPSHOT_DIRNAME", "CheckpointError", "checkpoint"]
