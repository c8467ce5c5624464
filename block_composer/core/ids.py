"""Allocation d'identifiants opaques (jamais réutilisés)."""
import uuid


def new_block_id() -> str:
    return f"block_{uuid.uuid4().hex}"


def new_media_id() -> str:
    return f"media_{uuid.uuid4().hex}"
