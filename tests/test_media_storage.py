"""
Tests MediaAttachmentManager + comptabilité du stockage.
"""
import random

import pytest

from block_composer.core import Block, MediaItem, StoredFile, check_sequence
from block_composer.engine import (
    BlockStore, DuplicationService, MediaAttachmentManager, format_bytes, storage_info, total_bytes,
)


def _orders(store, block_id):
    return [m.display_order for m in store.get(block_id).media]


def _ids(store, block_id):
    return [m.id for m in store.get(block_id).media]


# ── MediaAttachmentManager ──────────────────────────────────────────────────

class TestMediaAttachment:
    def test_add_appends_with_contiguous_order(self, make_block):
        store = BlockStore([make_block("g", type="gallery", media=2)])
        MediaAttachmentManager(store).add_media("g", [
            StoredFile(id="new", url="https://cdn.test/new.jpg", filename="new.jpg", size=50),
        ])
        assert _ids(store, "g") == ["g-m0", "g-m1", "new"]
        assert _orders(store, "g") == [0, 1, 2]
        assert store.get("g").media[-1].storage_size_bytes == 50

    def test_add_colliding_id_gets_fresh_id(self, make_block):
        store = BlockStore([make_block("g", type="gallery", media=1)])
        MediaAttachmentManager(store).add_media("g", [MediaItem(id="g-m0", url="https://cdn.test/x.jpg")])
        ids = _ids(store, "g")
        assert len(ids) == 2
        assert len(set(ids)) == 2

    def test_stored_file_without_id(self, make_block):
        store = BlockStore([make_block("g", type="gallery")])
        MediaAttachmentManager(store).add_media("g", [StoredFile(url="u", filename="clip.mp4", kind="video")])
        item = store.get("g").media[0]
        assert item.id.startswith("media_")
        assert item.kind == "video"

    def test_remove_renumbers(self, make_block):
        store = BlockStore([make_block("g", type="gallery", media=3)])
        MediaAttachmentManager(store).remove_media("g", "g-m1")
        assert _ids(store, "g") == ["g-m0", "g-m2"]
        assert _orders(store, "g") == [0, 1]

    def test_replace_keeps_position(self, make_block):
        store = BlockStore([make_block("g", type="gallery", media=3)])
        MediaAttachmentManager(store).replace_media(
            "g", "g-m1", StoredFile(id="neo", url="u", filename="neo.jpg", size=1),
        )
        assert _ids(store, "g") == ["g-m0", "neo", "g-m2"]

    def test_reorder(self, make_block):
        store = BlockStore([make_block("g", type="gallery", media=3)])
        MediaAttachmentManager(store).reorder_media("g", ["g-m2", "g-m0", "g-m1"])
        assert _ids(store, "g") == ["g-m2", "g-m0", "g-m1"]
        assert _orders(store, "g") == [0, 1, 2]

    @pytest.mark.parametrize("order", [
        ["g-m0", "g-m1"],                    # partielle
        ["g-m0", "g-m0", "g-m1"],            # dupliquée
        ["g-m0", "g-m1", "autre"],           # étrangère
    ])
    def test_reorder_rejects_mismatched_lists(self, make_block, order):
        store = BlockStore([make_block("g", type="gallery", media=3)])
        before = store.blocks
        assert MediaAttachmentManager(store).reorder_media("g", order) is before

    def test_unknown_ids_are_noops(self, abc):
        store = BlockStore(abc)
        manager = MediaAttachmentManager(store)
        before = store.blocks
        assert manager.add_media("zzz", [StoredFile(url="u", filename="f")]) is before
        assert manager.remove_media("a", "zzz") is before
        assert manager.replace_media("zzz", "m", StoredFile(url="u", filename="f")) is before
        assert manager.get_media("a", "zzz") is None


# ── Stockage ────────────────────────────────────────────────────────────────

class TestStorage:
    def test_levels(self):
        def info(used):
            block = Block(type="image", media=(MediaItem(url="u", storage_size_bytes=used),))
            return storage_info([block], limit=100)
        assert info(0).level == "ok"
        assert info(74).level == "ok"
        assert info(75).level == "warning"
        assert info(90).level == "critical"
        assert info(150).percentage == 150.0

    def test_zero_limit(self):
        info = storage_info([], limit=0)
        assert info.percentage == 100.0
        assert info.level == "critical"

    def test_default_limit_is_one_gib(self):
        assert storage_info([]).limit == 1024 ** 3

    def test_format_bytes(self):
        assert format_bytes(512) == "512 B"
        assert format_bytes(1536) == "1.5 KB"
        assert format_bytes(1024 ** 3) == "1.0 GB"

    def test_total_follows_any_mutation_sequence(self, make_block):
        """Le total est toujours la somme des tailles de l'état courant."""
        rng = random.Random(7)
        store = BlockStore([make_block("g0", type="gallery", media=2, size=10)])
        media = MediaAttachmentManager(store)
        dup = DuplicationService(store)

        for step in range(200):
            ids = store.ids()
            op = rng.choice(["add", "remove_media", "duplicate", "remove_block", "new_block"])
            if op == "new_block" or not ids:
                store.append(Block(type="gallery"))
                continue
            block_id = rng.choice(ids)
            if op == "add":
                media.add_media(block_id, [StoredFile(url="u", filename="f.jpg", size=rng.randint(0, 5000))])
            elif op == "remove_media" and store.get(block_id).media:
                media.remove_media(block_id, rng.choice(store.get(block_id).media).id)
            elif op == "duplicate":
                dup.duplicate(block_id)
            elif op == "remove_block":
                store.remove(block_id)

            expected = 0
            for block in store.blocks:
                for item in block.media:
                    expected += item.storage_size_bytes
            assert total_bytes(store.blocks) == expected
            assert storage_info(store.blocks).used == expected
            check_sequence(store.blocks)
