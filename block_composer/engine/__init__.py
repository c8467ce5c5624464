"""Moteur — séquence, insertion, duplication, suppression, médias, réordonnancement."""
from .store import BlockStore, reindex, renumber_media
from .insertion import InsertionPlanner
from .duplication import DuplicationService
from .deletion import (
    DeletionGuard, DeletionRequest, DeletionState,
    RemovalScheduler, removal_key, requires_confirmation,
)
from .timers import APSchedulerTimer, ImmediateTimer, RemovalTimer
from .media import MediaAttachmentManager, to_media_item
from .storage import StorageInfo, format_bytes, storage_info, total_bytes
from .gestures import Control, GestureOrigin, Verdict, accepts, classify, handle_origin
from .reorder import DragState, ReorderEngine

__all__ = [
    "BlockStore", "reindex", "renumber_media",
    "InsertionPlanner",
    "DuplicationService",
    "DeletionGuard", "DeletionRequest", "DeletionState",
    "RemovalScheduler", "removal_key", "requires_confirmation",
    "APSchedulerTimer", "ImmediateTimer", "RemovalTimer",
    "MediaAttachmentManager", "to_media_item",
    "StorageInfo", "format_bytes", "storage_info", "total_bytes",
    "Control", "GestureOrigin", "Verdict", "accepts", "classify", "handle_origin",
    "DragState", "ReorderEngine",
]
