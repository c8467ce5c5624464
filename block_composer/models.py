"""
Data models — séquences de blocs persistées
SQLAlchemy (SQLite) : une ligne par bloc + une ligne par média
"""
import json
from datetime import datetime, timezone
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from .core.schemas import Block, MediaItem


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class ContentBlockDB(Base):
    __tablename__ = "content_blocks"
    id:           Mapped[str]      = mapped_column(sa.String, primary_key=True)
    owner_key:    Mapped[str]      = mapped_column(sa.String, nullable=False, index=True)
    type:         Mapped[str]      = mapped_column(sa.String, nullable=False)
    order:        Mapped[int]      = mapped_column("sort_order", sa.Integer, nullable=False, default=0)
    presentation: Mapped[str]      = mapped_column(sa.String, default="block")
    config:       Mapped[str]      = mapped_column(sa.Text, default="{}")
    updated_at:   Mapped[datetime] = mapped_column(sa.DateTime, default=_now, onupdate=_now)

    media: Mapped[List["BlockMediaDB"]] = relationship(
        "BlockMediaDB", back_populates="block",
        cascade="all, delete-orphan", order_by="BlockMediaDB.display_order",
    )

    def to_block(self) -> Block:
        return Block(
            id=self.id,
            type=self.type,
            order=self.order,
            presentation=self.presentation,
            config=json.loads(self.config or "{}"),
            media=tuple(m.to_media() for m in self.media),
        )


class BlockMediaDB(Base):
    __tablename__ = "content_block_media"
    block_id:      Mapped[str]           = mapped_column(sa.String, sa.ForeignKey("content_blocks.id"), primary_key=True)
    media_id:      Mapped[str]           = mapped_column(sa.String, primary_key=True)
    url:           Mapped[str]           = mapped_column(sa.String, nullable=False)
    kind:          Mapped[str]           = mapped_column(sa.String, default="image")
    filename:      Mapped[str]           = mapped_column(sa.String, default="")
    storage_bytes: Mapped[int]           = mapped_column(sa.Integer, default=0)
    display_order: Mapped[int]           = mapped_column(sa.Integer, default=0)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)

    block: Mapped["ContentBlockDB"] = relationship("ContentBlockDB", back_populates="media")

    def to_media(self) -> MediaItem:
        return MediaItem(
            id=self.media_id,
            url=self.url,
            kind=self.kind,
            filename=self.filename,
            storage_size_bytes=self.storage_bytes,
            display_order=self.display_order,
            thumbnail_url=self.thumbnail_url,
        )


def block_to_row(owner_key: str, block: Block) -> ContentBlockDB:
    return ContentBlockDB(
        id=block.id,
        owner_key=owner_key,
        type=block.type,
        order=block.order,
        presentation=block.presentation,
        config=json.dumps(block.config, ensure_ascii=False),
        media=[
            BlockMediaDB(
                media_id=m.id,
                url=m.url,
                kind=m.kind,
                filename=m.filename,
                storage_bytes=m.storage_size_bytes,
                display_order=m.display_order,
                thumbnail_url=m.thumbnail_url,
            )
            for m in block.media
        ],
    )
