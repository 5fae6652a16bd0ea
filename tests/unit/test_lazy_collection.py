"""Tests for LazyCollection."""

import pytest

from neo_identity.core.exceptions import CollectionNotLoadedError
from neo_identity.features.identity.entities.claim import Claim
from neo_identity.features.identity.entities.lazy import LazyCollection, LoadState


class TestLazyCollection:
    """Test loaded/unloaded behavior and in-place mutation."""

    def test_unloaded_read_raises(self):
        collection = LazyCollection("claims")

        assert collection.state is LoadState.UNLOADED
        assert not collection.is_loaded
        with pytest.raises(CollectionNotLoadedError) as exc_info:
            collection.items
        assert exc_info.value.collection_name == "claims"

    def test_unloaded_mutation_raises(self):
        collection = LazyCollection("logins")

        with pytest.raises(CollectionNotLoadedError):
            collection.append("x")
        with pytest.raises(CollectionNotLoadedError):
            len(collection)

    def test_load_marks_loaded(self):
        collection = LazyCollection("claims")
        collection.load([Claim("a", "1")])

        assert collection.is_loaded
        assert collection.items == [Claim("a", "1")]

    def test_load_empty_is_loaded(self):
        collection = LazyCollection.of([])

        assert collection.is_loaded
        assert len(collection) == 0

    def test_remove_where_mutates_in_place(self):
        collection = LazyCollection.of([1, 2, 3, 2])
        items = collection.items

        removed = collection.remove_where(lambda item: item == 2)

        assert removed == 2
        assert items == [1, 3]
        assert collection.items is items

    def test_replace_at_and_index_of(self):
        collection = LazyCollection.of(["a", "b", "c"])

        index = collection.index_of(lambda item: item == "b")
        collection.replace_at(index, "B")

        assert collection.items == ["a", "B", "c"]
        assert collection.index_of(lambda item: item == "z") == -1

    def test_find_and_any(self):
        collection = LazyCollection.of([Claim("a", "1"), Claim("b", "2")])

        assert collection.find(lambda claim: claim.type == "b") == Claim("b", "2")
        assert collection.find(lambda claim: claim.type == "c") is None
        assert collection.any(lambda claim: claim.value == "1")

    def test_unload_forgets_items(self):
        collection = LazyCollection.of([1])
        collection.unload()

        assert collection.state is LoadState.UNLOADED
        assert "unloaded" in repr(collection)
