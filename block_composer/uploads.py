"""
Collaborateurs d'upload — fichiers bruts → références stockées (url, nom, taille, type).

LocalUploader : écrit sous UPLOADS_DIR, URL publique sous BASE_URL/dist/uploads
HttpUploader  : POST multipart vers un service de stockage distant
"""
import asyncio
import logging
import uuid
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

import requests as http
from pydantic import BaseModel

from . import config
from .core.schemas import MediaKind, RawFile, StoredFile

log = logging.getLogger(__name__)

VIDEO_EXTENSIONS = (".mp4", ".mov", ".webm")


class UploadContext(BaseModel):
    """Destination des fichiers (propriétaire + catégorie)."""
    owner: str = "default"
    category: str = "posts"
    subcategory: str = "content"


class Uploader(Protocol):
    async def upload(self, files: Sequence[RawFile], context: UploadContext) -> List[StoredFile]: ...


def detect_kind(filename: str) -> MediaKind:
    return "video" if filename.lower().endswith(VIDEO_EXTENSIONS) else "image"


def _safe_name(filename: str) -> str:
    name = Path(filename).name.replace(" ", "_")
    return name or "fichier"


# ── Stockage local ─────────────────────────────────────────────────────────

class LocalUploader:

    def __init__(self, uploads_dir: Optional[str] = None, base_url: Optional[str] = None):
        self.uploads_dir = Path(uploads_dir or config.UPLOADS_DIR)
        self.base_url = (base_url or config.BASE_URL).rstrip("/")

    def _write(self, dest: Path, content: bytes):
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(content)

    async def upload(self, files: Sequence[RawFile], context: UploadContext) -> List[StoredFile]:
        stored = []
        for f in files:
            media_id = uuid.uuid4().hex
            name = f"{media_id[:8]}_{_safe_name(f.filename)}"
            rel = Path(context.owner) / context.category / context.subcategory / name
            await asyncio.to_thread(self._write, self.uploads_dir / rel, f.content)
            stored.append(StoredFile(
                id=f"media_{media_id}",
                url=f"{self.base_url}/dist/uploads/{rel.as_posix()}",
                filename=f.filename,
                size=len(f.content),
                kind=detect_kind(f.filename),
            ))
        log.info("Upload local : %d fichier(s) pour %s", len(stored), context.owner)
        return stored


# ── Stockage distant ───────────────────────────────────────────────────────

class HttpUploader:
    """
    Envoie les fichiers à un endpoint d'upload.

    Réponse attendue : {"files": [{"id", "url", "fileName"|"filename", "size"}, ...]}
    """

    def __init__(self, endpoint: Optional[str] = None, timeout: Optional[int] = None):
        self.endpoint = endpoint or config.UPLOAD_ENDPOINT
        self.timeout = timeout or config.UPLOAD_TIMEOUT
        if not self.endpoint:
            raise ValueError("UPLOAD_ENDPOINT non configuré")

    def _post(self, files: Sequence[RawFile], context: UploadContext) -> List[StoredFile]:
        payload = [
            ("files", (f.filename, f.content, f.content_type or "application/octet-stream"))
            for f in files
        ]
        r = http.post(self.endpoint, files=payload, data=context.model_dump(), timeout=self.timeout)
        r.raise_for_status()
        body = r.json()
        entries = body.get("files", []) if isinstance(body, dict) else body
        stored = []
        for entry in entries:
            filename = entry.get("fileName") or entry.get("filename") or ""
            stored.append(StoredFile(
                id=entry.get("id"),
                url=entry["url"],
                filename=filename,
                size=int(entry.get("size") or 0),
                kind=detect_kind(filename),
            ))
        return stored

    async def upload(self, files: Sequence[RawFile], context: UploadContext) -> List[StoredFile]:
        stored = await asyncio.to_thread(self._post, files, context)
        log.info("Upload distant : %d fichier(s) pour %s", len(stored), context.owner)
        return stored
