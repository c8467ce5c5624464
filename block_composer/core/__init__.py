"""Core module pour block_composer."""
from .errors import BlockComposerError, InvariantViolation, UploadError
from .ids import new_block_id, new_media_id
from .invariants import check_sequence, check_block_media
from .schemas import (
    BLOCK_TYPES,
    HERO_TYPES,
    LEGACY_HERO_TYPES,
    Block,
    BlockStatus,
    HostContext,
    MediaItem,
    RawFile,
    StoredFile,
)

__all__ = [
    "BlockComposerError",
    "InvariantViolation",
    "UploadError",
    "new_block_id",
    "new_media_id",
    "check_sequence",
    "check_block_media",
    "BLOCK_TYPES",
    "HERO_TYPES",
    "LEGACY_HERO_TYPES",
    "Block",
    "BlockStatus",
    "HostContext",
    "MediaItem",
    "RawFile",
    "StoredFile",
]
