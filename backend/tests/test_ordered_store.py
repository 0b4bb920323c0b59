import pytest

from funnel.application.content.collections import GALLERY
from funnel.domain.exceptions import PersistenceError
from funnel.domain.ordering.collection import Entry


def image(url):
    return {"kind": "image", "title": None, "image_url": url, "youtube_url": None, "mp4_url": None, "poster_url": None}


def test_store_round_trips_entries_in_index_order(app, pending_profile):
    store = GALLERY.store()

    store.insert(pending_profile.id, Entry("b", 20, image("https://x/b.jpg")))
    store.insert(pending_profile.id, Entry("a", 10, image("https://x/a.jpg")))

    loaded = store.load(pending_profile.id)
    assert [entry.id for entry in loaded] == ["a", "b"]
    assert loaded[0].payload["image_url"] == "https://x/a.jpg"


def test_updating_a_missing_row_is_a_persistence_error(app, pending_profile):
    with pytest.raises(PersistenceError):
        GALLERY.store().update_order_index(pending_profile.id, "missing", 10)


def test_rows_are_scoped_to_their_profile(app, pending_profile):
    store = GALLERY.store()
    store.insert(pending_profile.id, Entry("a", 10, image("https://x/a.jpg")))

    assert store.load("another-profile") == []
    with pytest.raises(PersistenceError):
        store.update_order_index("another-profile", "a", 20)


def test_delete_is_idempotent(app, pending_profile):
    store = GALLERY.store()
    store.insert(pending_profile.id, Entry("a", 10, image("https://x/a.jpg")))

    store.delete(pending_profile.id, "a")
    store.delete(pending_profile.id, "a")

    assert store.load(pending_profile.id) == []
