"""Tests for the in-memory order repository."""

import threading

import pytest

from omsdash.domain.exceptions import DuplicateIdError, MalformedSeedError
from omsdash.domain.model.status import OrderStatus
from omsdash.domain.repository.order_repository import ChangeKind
from omsdash.infrastructure.persistence.in_memory_order_repository import (
    InMemoryOrderRepository,
)
from tests.builders import make_order, make_repo, statuses


def _ids(repo):
    return [o.id for o in repo.snapshot()]


class TestLoadAll:

    def test_replaces_collection(self):
        repo = make_repo(make_order("OLD"))
        repo.load_all([make_order("A"), make_order("B")])
        assert _ids(repo) == ["A", "B"]
        assert repo.get_by_id("OLD") is None

    def test_non_sequence_rejected(self):
        with pytest.raises(MalformedSeedError, match="sequence of orders"):
            InMemoryOrderRepository().load_all({"orders": []})  # type: ignore[arg-type]

    def test_non_order_entry_rejected(self):
        repo = make_repo(make_order("KEEP"))
        with pytest.raises(MalformedSeedError, match="Entry 1 is not an order"):
            repo.load_all([make_order("A"), {"id": "B"}])  # type: ignore[list-item]
        assert _ids(repo) == ["KEEP"]

    def test_duplicate_ids_rejected(self):
        with pytest.raises(MalformedSeedError, match="Duplicate order id 'A'"):
            InMemoryOrderRepository().load_all([make_order("A"), make_order("A")])


class TestInsert:

    def test_prepends(self):
        repo = make_repo(make_order("A"), make_order("B"))
        repo.insert(make_order("NEW"))
        assert _ids(repo) == ["NEW", "A", "B"]
        assert repo.get_by_id("NEW").id == "NEW"

    def test_duplicate_rejected_and_collection_unchanged(self):
        repo = make_repo(make_order("A", total="100"), make_order("B"))
        before = repo.snapshot()

        with pytest.raises(DuplicateIdError, match="'A' already exists"):
            repo.insert(make_order("A", total="999"))

        assert repo.snapshot() == before
        assert len(repo) == 2


class TestSetStatus:

    def test_overwrites_status(self):
        repo = make_repo(make_order("A", OrderStatus.DELIVERED))
        assert repo.set_status("A", OrderStatus.PENDING) is True
        assert repo.get_by_id("A").status == OrderStatus.PENDING

    def test_missing_id_is_silent_noop(self):
        repo = make_repo(make_order("A"), make_order("B", OrderStatus.SHIPPED))
        before = repo.snapshot()

        assert repo.set_status("NOPE", OrderStatus.CANCELLED) is False
        assert repo.snapshot() == before

    def test_same_status_is_observable_noop(self):
        repo = make_repo(make_order("A", OrderStatus.SHIPPED))
        assert repo.set_status("A", OrderStatus.SHIPPED) is True
        assert repo.get_by_id("A").status == OrderStatus.SHIPPED

    def test_position_preserved(self):
        repo = make_repo(make_order("A"), make_order("B"), make_order("C"))
        repo.set_status("B", OrderStatus.CANCELLED)
        assert _ids(repo) == ["A", "B", "C"]


class TestBulkSetStatus:

    def test_partial_success_counts_only_existing(self):
        repo = make_repo(make_order("a"), make_order("c"))

        updated = repo.bulk_set_status({"a", "b", "c"}, OrderStatus.SHIPPED)

        assert updated == 2
        assert len(repo) == 2
        assert statuses(repo) == {"a": OrderStatus.SHIPPED, "c": OrderStatus.SHIPPED}

    def test_duplicate_ids_counted_once(self):
        repo = make_repo(make_order("a"))
        assert repo.bulk_set_status(["a", "a", "a"], OrderStatus.DELIVERED) == 1

    def test_idempotent(self):
        repo = make_repo(make_order("a"), make_order("b"))
        repo.bulk_set_status(["a", "b"], OrderStatus.SHIPPED)
        first = repo.snapshot()
        repo.bulk_set_status(["a", "b"], OrderStatus.SHIPPED)
        assert repo.snapshot() == first

    def test_empty_batch(self):
        repo = make_repo(make_order("a"))
        assert repo.bulk_set_status([], OrderStatus.SHIPPED) == 0


class TestSnapshot:

    def test_is_immutable_tuple(self):
        repo = make_repo(make_order("A"))
        snap = repo.snapshot()
        assert isinstance(snap, tuple)

    def test_old_snapshot_unaffected_by_later_mutation(self):
        repo = make_repo(make_order("A", OrderStatus.PENDING))
        snap = repo.snapshot()
        repo.set_status("A", OrderStatus.SHIPPED)
        repo.insert(make_order("B"))
        assert [o.status for o in snap] == [OrderStatus.PENDING]


class TestSubscribe:

    def test_listeners_receive_changes(self):
        repo = make_repo(make_order("A"), make_order("B"))
        changes = []
        repo.subscribe(changes.append)

        repo.insert(make_order("C"))
        repo.set_status("A", OrderStatus.SHIPPED)
        repo.set_status("MISSING", OrderStatus.SHIPPED)
        repo.bulk_set_status(["A", "B", "X"], OrderStatus.DELIVERED)

        assert [(c.kind, c.order_ids) for c in changes] == [
            (ChangeKind.INSERTED, ("C",)),
            (ChangeKind.STATUS_CHANGED, ("A",)),
            (ChangeKind.STATUS_CHANGED, ("A", "B")),
        ]

    def test_unsubscribe(self):
        repo = make_repo()
        changes = []
        unsubscribe = repo.subscribe(changes.append)
        unsubscribe()
        unsubscribe()
        repo.insert(make_order("A"))
        assert changes == []


class TestConcurrentMutation:

    def test_interleaved_writers_do_not_corrupt(self):
        repo = make_repo(*[make_order(f"O{i}") for i in range(50)])
        errors = []

        def drift(status):
            try:
                for i in range(200):
                    repo.set_status(f"O{i % 50}", status)
            except Exception as exc:  # pragma: no cover
                errors.append(exc)

        def arrive(prefix):
            for i in range(50):
                repo.insert(make_order(f"{prefix}{i}"))

        threads = [
            threading.Thread(target=drift, args=(OrderStatus.SHIPPED,)),
            threading.Thread(target=drift, args=(OrderStatus.CANCELLED,)),
            threading.Thread(target=arrive, args=("N",)),
            threading.Thread(target=arrive, args=("M",)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(repo) == 150
        assert len(set(_ids(repo))) == 150
        for order in repo.snapshot():
            assert repo.get_by_id(order.id) is order
