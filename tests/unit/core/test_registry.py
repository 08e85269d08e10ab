"""Tests for the listener registry.

These tests validate slot allocation, index assignment and snapshot iteration.
"""

from zohar.core.registry import (
    ListenerEntry,
    ListenerRegistry,
    ListenerSlot,
    add_listener,
    for_each_listener,
    iter_listeners,
    remove_listener,
)


def _noop(name, payload):
    pass


class TestListenerSlot:
    """Test index assignment and removal on a single slot."""

    def test_indices_increase_from_zero(self):
        """Test that each added listener gets the next index."""
        slot = ListenerSlot()

        assert add_listener(slot, ListenerEntry(_noop)) == 0
        assert add_listener(slot, ListenerEntry(_noop)) == 1
        assert add_listener(slot, ListenerEntry(_noop)) == 2
        assert slot.next_index == 3
        assert len(slot) == 3

    def test_indices_are_not_reused_after_removal(self):
        """Test that removing a listener never frees its index."""
        slot = ListenerSlot()
        first = add_listener(slot, ListenerEntry(_noop))
        remove_listener(slot, first)

        second = add_listener(slot, ListenerEntry(_noop))

        assert second != first
        assert second == 1

    def test_remove_reports_whether_deleted(self):
        """Test that remove_listener returns True once, then False."""
        slot = ListenerSlot()
        index = add_listener(slot, ListenerEntry(_noop))

        assert remove_listener(slot, index) is True
        assert remove_listener(slot, index) is False
        assert slot.is_empty

    def test_remove_unknown_index(self):
        """Test that removing an index that was never assigned is a no-op."""
        slot = ListenerSlot()
        add_listener(slot, ListenerEntry(_noop))

        assert remove_listener(slot, 42) is False
        assert len(slot) == 1


class TestListenerEntry:
    """Test predicate evaluation on entries."""

    def test_entry_without_predicate_accepts_everything(self):
        entry = ListenerEntry(_noop)
        assert entry.accepts(None) is True
        assert entry.accepts({"user_id": "u1"}) is True

    def test_entry_with_predicate(self):
        entry = ListenerEntry(_noop, lambda payload: payload == "match")
        assert entry.accepts("match") is True
        assert entry.accepts("other") is False

    def test_truthy_predicate_result_is_coerced(self):
        entry = ListenerEntry(_noop, lambda payload: payload)
        assert entry.accepts([1]) is True
        assert entry.accepts([]) is False


class TestIteration:
    """Test subscription-order iteration and mutation safety."""

    def test_visits_in_subscription_order(self):
        """Test that visitors see entries in ascending index order."""
        slot = ListenerSlot()
        entries = [ListenerEntry(_noop) for _ in range(5)]
        for entry in entries:
            add_listener(slot, entry)

        visited = []
        for_each_listener(slot, visited.append)

        assert visited == entries

    def test_removal_during_iteration_skips_unvisited_entry(self):
        """Test that an entry removed mid-iteration is not visited."""
        slot = ListenerSlot()
        first = add_listener(slot, ListenerEntry(_noop))
        second = add_listener(slot, ListenerEntry(_noop))
        third = add_listener(slot, ListenerEntry(_noop))

        visited = []
        for index, _ in iter_listeners(slot):
            visited.append(index)
            if index == first:
                remove_listener(slot, second)

        assert visited == [first, third]

    def test_self_removal_does_not_skip_others(self):
        """Test that removing the current entry keeps later ones visible."""
        slot = ListenerSlot()
        indices = [add_listener(slot, ListenerEntry(_noop)) for _ in range(3)]

        visited = []
        for index, _ in iter_listeners(slot):
            visited.append(index)
            remove_listener(slot, index)

        assert visited == indices
        assert slot.is_empty

    def test_additions_during_iteration_are_not_visited(self):
        """Test that entries added mid-iteration wait for the next pass."""
        slot = ListenerSlot()
        add_listener(slot, ListenerEntry(_noop))

        visited = []
        for index, _ in iter_listeners(slot):
            visited.append(index)
            add_listener(slot, ListenerEntry(_noop))

        assert visited == [0]
        assert len(slot) == 2


class TestListenerRegistry:
    """Test slot housekeeping on the registry."""

    def test_ensure_slot_does_not_store(self):
        """Test that a fresh slot is only stored once committed."""
        registry = ListenerRegistry()

        slot = registry.ensure_slot("userLogin")

        assert slot.next_index == 0
        assert slot.is_empty
        assert "userLogin" not in registry
        assert len(registry) == 0

        registry.commit_slot("userLogin", slot)
        assert registry.get_slot("userLogin") is slot
        assert registry.ensure_slot("userLogin") is slot

    def test_get_slot_missing(self):
        registry = ListenerRegistry()
        assert registry.get_slot("userLogin") is None

    def test_discard_slot_clears_its_listeners(self):
        """Test that discarding a slot also empties it."""
        registry = ListenerRegistry()
        slot = registry.ensure_slot("userLogin")
        add_listener(slot, ListenerEntry(_noop))
        registry.commit_slot("userLogin", slot)

        assert registry.discard_slot("userLogin") is True
        assert slot.is_empty
        assert "userLogin" not in registry
        assert registry.discard_slot("userLogin") is False

    def test_clear_empties_every_slot(self):
        registry = ListenerRegistry()
        slots = []
        for name in ("userLogin", "userLogout"):
            slot = registry.ensure_slot(name)
            add_listener(slot, ListenerEntry(_noop))
            registry.commit_slot(name, slot)
            slots.append(slot)

        registry.clear()

        assert len(registry) == 0
        assert all(slot.is_empty for slot in slots)

    def test_event_names_in_commit_order(self):
        registry = ListenerRegistry()
        registry.commit_slot("userLogout", ListenerSlot())
        registry.commit_slot("userLogin", ListenerSlot())

        assert registry.event_names() == ["userLogout", "userLogin"]
