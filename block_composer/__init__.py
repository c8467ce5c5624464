"""
Block Composer — moteur de composition de contenu par blocs.

Usage (éditeur):
    >>> from block_composer import BlockEditor, HostContext, LocalUploader
    >>> editor = BlockEditor(host=HostContext(context="portfolio"), uploader=LocalUploader())
    >>> hero = editor.add("hero-image")
    >>> text = editor.add("text", ref_id=hero.id)
    >>> req = editor.request_delete(text.id)

Usage (normalisation seule):
    >>> from block_composer import normalize_config
    >>> normalize_config("hero-contact", {"titulo": "Contact", "evento": "2025"})
"""

# ── Core ────────────────────────────────────────────────────────────────────
from .core import (
    BLOCK_TYPES, HERO_TYPES, LEGACY_HERO_TYPES,
    Block, BlockStatus, HostContext, MediaItem, RawFile, StoredFile,
    BlockComposerError, InvariantViolation, UploadError,
    check_sequence, check_block_media,
)

# ── Blocs ───────────────────────────────────────────────────────────────────
from .blocks import (
    HeroConfig, COMPONENTS, ComponentSpec,
    default_config, display_name, normalize_block, normalize_config, normalize_hero,
)

# ── Moteur ──────────────────────────────────────────────────────────────────
from .engine import (
    BlockStore, InsertionPlanner, DuplicationService,
    DeletionGuard, DeletionRequest, DeletionState, RemovalScheduler,
    APSchedulerTimer, ImmediateTimer,
    MediaAttachmentManager, StorageInfo, format_bytes, storage_info,
    Control, GestureOrigin, Verdict, classify, handle_origin,
    DragState, ReorderEngine,
)

# ── Collaborateurs + façade ─────────────────────────────────────────────────
from .uploads import HttpUploader, LocalUploader, UploadContext
from .persistence import SqlBlockRepository
from .editor import BlockEditor

__version__ = "0.1.0"

__all__ = [
    # Core
    "BLOCK_TYPES", "HERO_TYPES", "LEGACY_HERO_TYPES",
    "Block", "BlockStatus", "HostContext", "MediaItem", "RawFile", "StoredFile",
    "BlockComposerError", "InvariantViolation", "UploadError",
    "check_sequence", "check_block_media",
    # Blocs
    "HeroConfig", "COMPONENTS", "ComponentSpec",
    "default_config", "display_name", "normalize_block", "normalize_config", "normalize_hero",
    # Moteur
    "BlockStore", "InsertionPlanner", "DuplicationService",
    "DeletionGuard", "DeletionRequest", "DeletionState", "RemovalScheduler",
    "APSchedulerTimer", "ImmediateTimer",
    "MediaAttachmentManager", "StorageInfo", "format_bytes", "storage_info",
    "Control", "GestureOrigin", "Verdict", "classify", "handle_origin",
    "DragState", "ReorderEngine",
    # Collaborateurs
    "HttpUploader", "LocalUploader", "UploadContext", "SqlBlockRepository",
    "BlockEditor",
]
