"""Application tests for the local (guest) cart store."""

import random

import pytest
from cart.guest.store import LocalCartLine, LocalCartStore
from protean.exceptions import ValidationError


class TestPersistence:
    def test_contents_survive_a_new_store_instance(self, local_store):
        local_store.add(7, 2)
        reopened = LocalCartStore(local_store.session_id)
        assert reopened.lines() == [LocalCartLine(product_id=7, quantity=2)]

    def test_sessions_are_isolated(self, local_store):
        local_store.add(7, 2)
        other = LocalCartStore("another-device")
        assert other.lines() == []
        assert other.count() == 0

    def test_reading_an_unknown_session_is_empty(self):
        store = LocalCartStore("never-used")
        assert store.is_empty()
        assert store.count() == 0


class TestOperations:
    def test_add_then_repeat_add(self, local_store):
        local_store.add(7, 2)
        local_store.add(7, 3)
        assert local_store.lines() == [LocalCartLine(product_id=7, quantity=5)]

    def test_add_rejects_zero(self, local_store):
        with pytest.raises(ValidationError):
            local_store.add(7, 0)
        assert local_store.is_empty()

    def test_set_quantity_zero_removes(self, local_store):
        local_store.add(7, 2)
        local_store.set_quantity(7, 0)
        assert local_store.is_empty()

    def test_remove_is_idempotent(self, local_store):
        local_store.add(7, 2)
        local_store.add(8, 1)
        local_store.remove(7)
        after_once = local_store.lines()
        local_store.remove(7)
        assert local_store.lines() == after_once == [LocalCartLine(product_id=8, quantity=1)]

    def test_remove_missing_product_is_noop(self, local_store):
        local_store.remove(42)
        assert local_store.is_empty()

    def test_clear(self, local_store):
        local_store.add(7, 2)
        local_store.add(8, 1)
        local_store.clear()
        assert local_store.is_empty()
        assert LocalCartStore(local_store.session_id).is_empty()


class TestCountInvariant:
    def test_count_matches_lines_for_random_sequences(self, local_store):
        rng = random.Random(1234)
        for _ in range(200):
            product_id = rng.choice([1, 2, 3, 4])
            action = rng.choice(["add", "set", "remove"])
            if action == "add":
                local_store.add(product_id, rng.randint(1, 5))
            elif action == "set":
                local_store.set_quantity(product_id, rng.randint(-2, 6))
            else:
                local_store.remove(product_id)

            lines = local_store.lines()
            assert local_store.count() == sum(line.quantity for line in lines)
            assert all(line.quantity >= 1 for line in lines)
            assert len({line.product_id for line in lines}) == len(lines)
