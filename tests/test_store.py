"""
Tests BlockStore — réindexation, no-op sur id inconnu, abonnement, invariants.
"""
import random

import pytest

from block_composer.core import Block, BlockStatus, InvariantViolation, MediaItem, check_sequence, new_block_id
from block_composer.engine import BlockStore, reindex


# ── reindex ──────────────────────────────────────────────────────────────────

class TestReindex:
    def test_order_equals_index(self, make_block):
        blocks = reindex([make_block("a"), make_block("b").model_copy(update={"order": 7})])
        assert [b.order for b in blocks] == [0, 1]

    def test_reuses_up_to_date_blocks(self, make_block):
        a = make_block("a")
        assert reindex([a])[0] is a


# ── Mutations ────────────────────────────────────────────────────────────────

class TestMutations:
    def test_append_and_insert(self, make_block):
        store = BlockStore()
        store.append(make_block("a"))
        store.append(make_block("c"))
        store.insert_at(make_block("b"), 1)
        assert store.ids() == ["a", "b", "c"]
        assert [b.order for b in store] == [0, 1, 2]

    def test_insert_clamps_index(self, abc, make_block):
        store = BlockStore(abc)
        store.insert_at(make_block("z"), 99)
        store.insert_at(make_block("y"), -5)
        assert store.ids() == ["y", "a", "b", "c", "z"]

    def test_insert_existing_id_raises(self, abc, make_block):
        store = BlockStore(abc)
        with pytest.raises(ValueError):
            store.insert_at(make_block("a"), 0)

    def test_load_rejects_duplicate_ids(self, make_block):
        with pytest.raises(ValueError):
            BlockStore([make_block("a"), make_block("a")])

    def test_move_last_to_first(self, abc):
        store = BlockStore(abc)
        store.move_to("c", 0)
        assert store.ids() == ["c", "a", "b"]
        assert [b.order for b in store] == [0, 1, 2]

    def test_move_unknown_is_noop(self, abc):
        store = BlockStore(abc)
        before = store.blocks
        assert store.move_to("zzz", 0) is before

    def test_move_to_same_index_is_noop(self, abc):
        store = BlockStore(abc)
        before = store.blocks
        assert store.move_to("b", 1) is before

    def test_remove_reindexes(self, abc):
        store = BlockStore(abc)
        store.remove("a")
        assert store.ids() == ["b", "c"]
        assert [b.order for b in store] == [0, 1]

    def test_remove_unknown_is_noop(self, abc):
        store = BlockStore(abc)
        before = store.blocks
        assert store.remove("zzz") is before

    def test_replace_ignores_id_and_order(self, abc):
        store = BlockStore(abc)
        store.replace("b", {"id": "hack", "order": 9, "config": {"text": "x"}})
        b = store.get("b")
        assert b.order == 1
        assert b.config == {"text": "x"}

    def test_replace_keeps_status(self, abc):
        store = BlockStore(abc)
        store.replace("a", {"status": BlockStatus.EXITING})
        store.replace("a", {"presentation": "card"})
        assert store.get("a").status is BlockStatus.EXITING
        assert store.get("a").presentation == "card"

    def test_media_patch_is_renumbered(self, abc):
        store = BlockStore(abc)
        store.replace("a", {"media": [
            MediaItem(id="x", url="https://cdn.test/x.jpg", display_order=4),
            MediaItem(id="y", url="https://cdn.test/y.jpg", display_order=9),
        ]})
        assert [m.display_order for m in store.get("a").media] == [0, 1]
        assert [m.id for m in store.get("a").media] == ["x", "y"]
        check_sequence(store.blocks)

    def test_media_patch_rejects_duplicate_ids(self, abc):
        store = BlockStore(abc)
        item = MediaItem(id="x", url="https://cdn.test/x.jpg")
        with pytest.raises(ValueError):
            store.replace("a", {"media": [item, item]})
        assert store.get("a").media == ()

    def test_unknown_patch_keys_are_ignored(self, abc):
        store = BlockStore(abc)
        before = store.blocks
        assert store.replace("a", {"couleur": "rouge"}) is before

    def test_status_not_dumped(self, abc):
        store = BlockStore(abc)
        store.replace("a", {"status": BlockStatus.UPLOADING})
        assert "status" not in store.get("a").model_dump()

    def test_sequences_are_immutable_snapshots(self, abc, make_block):
        store = BlockStore(abc)
        snapshot = store.blocks
        store.append(make_block("d"))
        assert [b.id for b in snapshot] == ["a", "b", "c"]


# ── Abonnement ──────────────────────────────────────────────────────────────

class TestSubscribe:
    def test_listener_receives_new_sequence(self, abc, make_block):
        store = BlockStore(abc)
        seen = []
        store.subscribe(lambda blocks: seen.append([b.id for b in blocks]))
        store.append(make_block("d"))
        assert seen == [["a", "b", "c", "d"]]

    def test_unsubscribe(self, abc, make_block):
        store = BlockStore(abc)
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        store.append(make_block("d"))
        assert seen == []

    def test_noop_does_not_notify(self, abc):
        store = BlockStore(abc)
        seen = []
        store.subscribe(seen.append)
        store.remove("zzz")
        store.move_to("a", 0)
        assert seen == []


# ── Invariants ──────────────────────────────────────────────────────────────

class TestInvariants:
    def test_check_sequence_rejects_gaps(self, make_block):
        blocks = [make_block("a"), make_block("b").model_copy(update={"order": 2})]
        with pytest.raises(InvariantViolation):
            check_sequence(blocks)

    def test_check_sequence_rejects_duplicate_media(self, make_media):
        m = make_media(1)[0]
        block = Block(id="a", type="gallery", media=(m, m.model_copy(update={"display_order": 1})))
        with pytest.raises(InvariantViolation):
            check_sequence([block])

    def test_ids_are_unique(self):
        ids = {new_block_id() for _ in range(500)}
        assert len(ids) == 500
        assert all(i.startswith("block_") for i in ids)

    def test_random_mutations_keep_invariants(self):
        """Toute suite d'insertions/déplacements/retraits garde ids uniques et order == index."""
        rng = random.Random(42)
        store = BlockStore()
        for step in range(300):
            op = rng.choice(["insert", "move", "remove", "replace"])
            ids = store.ids()
            if op == "insert" or not ids:
                store.insert_at(Block(type="text"), rng.randint(-2, len(ids) + 2))
            elif op == "move":
                store.move_to(rng.choice(ids + ["ghost"]), rng.randint(-2, len(ids) + 2))
            elif op == "remove":
                store.remove(rng.choice(ids + ["ghost"]))
            else:
                store.replace(rng.choice(ids), {"config": {"text": str(step)}})
            check_sequence(store.blocks)
