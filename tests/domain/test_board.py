"""Unit tests for the board reconciler."""

from omsdash.domain.model.status import BOARD_COLUMNS, OrderStatus
from omsdash.domain.service.board import Board, DragEvent
from tests.builders import make_order, make_repo, statuses


def _ids(cards):
    return [o.id for o in cards]


class TestGrouping:

    def test_every_column_present_in_fixed_order(self):
        grouped = Board.group([])
        assert list(grouped) == list(BOARD_COLUMNS)
        assert all(cards == () for cards in grouped.values())

    def test_relative_order_preserved_within_column(self):
        orders = [
            make_order("A", OrderStatus.PENDING),
            make_order("B", OrderStatus.SHIPPED),
            make_order("C", OrderStatus.PENDING),
            make_order("D", OrderStatus.PENDING),
        ]
        grouped = Board.group(orders)
        assert _ids(grouped[OrderStatus.PENDING]) == ["A", "C", "D"]
        assert _ids(grouped[OrderStatus.SHIPPED]) == ["B"]
        assert grouped[OrderStatus.DELIVERED] == ()

    def test_column_counts(self):
        orders = [make_order("A"), make_order("B", OrderStatus.CANCELLED), make_order("C")]
        counts = Board.column_counts(orders)
        assert counts[OrderStatus.PENDING] == 2
        assert counts[OrderStatus.CANCELLED] == 1
        assert counts[OrderStatus.SHIPPED] == 0


class TestDrop:

    def test_same_column_drop_changes_nothing(self):
        repo = make_repo(make_order("X", OrderStatus.PENDING), make_order("Y", OrderStatus.SHIPPED))
        before = repo.snapshot()

        moved = Board(repo).handle_drop(DragEvent("X", OrderStatus.PENDING, OrderStatus.PENDING))

        assert moved is False
        assert repo.snapshot() == before

    def test_drop_outside_any_column_changes_nothing(self):
        repo = make_repo(make_order("X", OrderStatus.PENDING))
        before = repo.snapshot()

        assert Board(repo).handle_drop(DragEvent("X", OrderStatus.PENDING, None)) is False
        assert repo.snapshot() == before

    def test_cross_column_drop_moves_only_that_order(self):
        repo = make_repo(
            make_order("X", OrderStatus.PENDING),
            make_order("Y", OrderStatus.PENDING),
            make_order("Z", OrderStatus.DELIVERED),
        )

        moved = Board(repo).handle_drop(DragEvent("X", OrderStatus.PENDING, OrderStatus.SHIPPED))

        assert moved is True
        assert statuses(repo) == {
            "X": OrderStatus.SHIPPED,
            "Y": OrderStatus.PENDING,
            "Z": OrderStatus.DELIVERED,
        }
        regrouped = Board.group(repo.snapshot())
        assert _ids(regrouped[OrderStatus.SHIPPED]) == ["X"]
        assert _ids(regrouped[OrderStatus.PENDING]) == ["Y"]

    def test_drop_of_vanished_order_is_harmless(self):
        repo = make_repo(make_order("X"))
        before = repo.snapshot()

        moved = Board(repo).handle_drop(DragEvent("GONE", OrderStatus.PENDING, OrderStatus.SHIPPED))

        assert moved is False
        assert repo.snapshot() == before

    def test_drag_event_noop_flag(self):
        assert DragEvent("X", OrderStatus.PENDING, None).is_noop
        assert DragEvent("X", OrderStatus.PENDING, OrderStatus.PENDING).is_noop
        assert not DragEvent("X", OrderStatus.PENDING, OrderStatus.SHIPPED).is_noop
