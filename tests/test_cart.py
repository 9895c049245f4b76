"""Tests for the cart transitions, the cart engine and the local cart store."""
import json
import math
import random

import pytest

from storefront.client import cart
from storefront.client.cart import CartEngine, format_money, parse_price
from storefront.client.cart_store import CartStore, MemoryCartStore
from storefront.client.views import CartView


def _engine():
    return CartEngine(MemoryCartStore())


class TestTransitions:
    def test_add_same_product_twice_increments_quantity(self):
        entries = cart.add_item([], "p1", "Air Max 270", 1999)
        entries = cart.add_item(entries, "p1", "Air Max 270", 1999)

        assert len(entries) == 1
        assert entries[0].quantity == 2

    def test_add_does_not_mutate_input(self):
        first = cart.add_item([], "p1", "Air Max 270", 1999)
        cart.add_item(first, "p1", "Air Max 270", 1999)

        assert first[0].quantity == 1

    def test_adjust_by_minus_quantity_removes_entry(self):
        entries = cart.add_item([], "p1", "A", 10)
        entries = cart.add_item(entries, "p1", "A", 10)

        assert cart.adjust_quantity(entries, "p1", -2) == []

    def test_adjust_below_zero_removes_entry(self):
        entries = cart.add_item([], "p1", "A", 10)

        assert cart.adjust_quantity(entries, "p1", -5) == []

    def test_adjust_absent_product_is_noop(self):
        entries = cart.add_item([], "p1", "A", 10)

        assert cart.adjust_quantity(entries, "nope", 3) == entries

    def test_remove_absent_product_is_noop(self):
        entries = cart.add_item([], "p1", "A", 10)

        assert cart.remove_item(entries, "nope") == entries

    def test_insertion_order_is_kept(self):
        entries = cart.add_item([], "b", "B", 1)
        entries = cart.add_item(entries, "a", "A", 1)
        entries = cart.add_item(entries, "b", "B", 1)

        assert [e.product_id for e in entries] == ["b", "a"]


class TestParsePrice:
    @pytest.mark.parametrize("value,expected", [
        (1999, 1999.0),
        ("2499", 2499.0),
        ("12.5abc", 12.5),
        (" 7.25 ", 7.25),
    ])
    def test_numeric_prefix(self, value, expected):
        assert parse_price(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, True])
    def test_non_numeric_is_nan(self, value):
        assert math.isnan(parse_price(value))


class TestCartEngine:
    def test_totals_follow_the_shopping_scenario(self):
        engine = _engine()
        engine.add_item("A", "Air Max 270", 1999)
        engine.add_item("B", "Ultraboost 22", 2499)
        assert engine.get_total() == 4498

        engine.add_item("A", "Air Max 270", 1999)
        assert engine.get_total() == 6497
        assert engine.get_item_count() == 3

        engine.remove_item("B")
        assert engine.get_total() == 3998
        assert format_money(engine.get_total()) == "3998.00"

    def test_clear_persists_empty_cart(self):
        store = MemoryCartStore()
        engine = CartEngine(store)
        engine.add_item("A", "Air Max 270", 1999)

        engine.clear()

        assert engine.get_item_count() == 0
        assert store.load() == []

    def test_adjust_absent_does_not_persist_or_notify(self):
        engine = _engine()
        calls = []
        engine.subscribe(lambda e: calls.append(e.get_item_count()))

        engine.adjust_quantity("nope", 1)

        assert calls == []

    def test_listeners_see_new_count(self):
        engine = _engine()
        view = CartView()
        engine.subscribe(view.refresh)

        engine.add_item("A", "Air Max 270", 1999)
        engine.add_item("A", "Air Max 270", 1999)

        assert view.badge_count == 2

    def test_open_cart_view_tracks_lines_and_total(self):
        engine = _engine()
        view = CartView()
        engine.subscribe(view.refresh)
        view.open(engine)
        assert view.empty_text == "Your cart is empty"

        engine.add_item("A", "Air Max 270", 1999)
        engine.add_item("B", "Ultraboost 22", 2499)

        assert [line.product_id for line in view.lines] == ["A", "B"]
        assert view.total_text == "4498.00"
        assert view.empty_text is None

    def test_random_operations_keep_invariants(self):
        rng = random.Random(7)
        engine = _engine()
        ids = ["a", "b", "c", "d"]
        for _ in range(500):
            op = rng.choice(["add", "remove", "adjust", "adjust"])
            pid = rng.choice(ids)
            if op == "add":
                engine.add_item(pid, pid.upper(), rng.randint(1, 5000))
            elif op == "remove":
                engine.remove_item(pid)
            else:
                engine.adjust_quantity(pid, rng.randint(-3, 3))

            entries = engine.entries
            seen = [e.product_id for e in entries]
            assert len(seen) == len(set(seen))
            assert all(e.quantity >= 1 for e in entries)
            assert engine.get_item_count() == sum(e.quantity for e in entries)


class TestCartStore:
    def test_cart_survives_restart(self, tmp_path):
        path = tmp_path / "local_storage.json"
        engine = CartEngine(CartStore(path))
        engine.add_item("A", "Air Max 270", 1999, "a.png", "Nike")
        engine.add_item("A", "Air Max 270", 1999, "a.png", "Nike")

        reloaded = CartEngine(CartStore(path))

        assert reloaded.get_item_count() == 2
        assert reloaded.entries[0].brand == "Nike"

    def test_saved_with_camel_case_keys(self, tmp_path):
        path = tmp_path / "local_storage.json"
        CartEngine(CartStore(path)).add_item("A", "Air Max 270", 1999)

        saved = json.loads(path.read_text(encoding="utf-8"))

        assert saved["cart"][0]["productId"] == "A"
        assert saved["cart"][0]["quantity"] == 1

    def test_missing_file_loads_empty(self, tmp_path):
        assert CartStore(tmp_path / "missing.json").load() == []

    def test_corrupt_file_loads_empty(self, tmp_path):
        path = tmp_path / "local_storage.json"
        path.write_text("{not json", encoding="utf-8")

        assert CartStore(path).load() == []

    def test_corrupt_slot_loads_empty(self, tmp_path):
        path = tmp_path / "local_storage.json"
        path.write_text(json.dumps({"cart": [{"quantity": "many"}]}), encoding="utf-8")

        assert CartStore(path).load() == []

    def test_other_slots_are_kept(self, tmp_path):
        path = tmp_path / "local_storage.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

        CartStore(path).save([])

        assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark", "cart": []}
