"""Fixtures partagées — fabriques de blocs/médias + timer manuel."""
import pytest

from block_composer.core.schemas import Block, MediaItem


class ManualTimer:
    """Timer piloté à la main : les callbacks ne partent que sur fire()."""

    def __init__(self):
        self.jobs = {}

    def schedule(self, key, delay, callback):
        self.jobs[key] = (delay, callback)

    def cancel(self, key):
        return self.jobs.pop(key, None) is not None

    def pending(self, key):
        return key in self.jobs

    def fire(self, key):
        _, callback = self.jobs.pop(key)
        callback()

    def fire_all(self):
        for key in list(self.jobs):
            self.fire(key)


def _media(count, size=100, prefix="m"):
    return tuple(
        MediaItem(id=f"{prefix}{i}", url=f"https://cdn.test/{prefix}{i}.jpg",
                  filename=f"{prefix}{i}.jpg", storage_size_bytes=size, display_order=i)
        for i in range(count)
    )


@pytest.fixture
def timer():
    return ManualTimer()


@pytest.fixture
def make_media():
    return _media


@pytest.fixture
def make_block():
    def factory(block_id, type="text", media=0, size=100, **config):
        return Block(
            id=block_id,
            type=type,
            media=_media(media, size, prefix=f"{block_id}-m") if media else (),
            config=config,
        )
    return factory


@pytest.fixture
def abc(make_block):
    """Séquence [a, b, c] de blocs texte vides."""
    return [make_block("a"), make_block("b"), make_block("c")]
