"""Integration tests for the kanban Move Card use case."""

import pytest

from omsdash.application.move_card import MoveCardHandler
from omsdash.application.show_board import ShowBoardHandler
from omsdash.domain.exceptions import InvalidTransitionError
from omsdash.domain.model.filters import FilterCriteria
from omsdash.domain.model.status import OrderStatus, TransitionPolicy
from omsdash.domain.service.board import DragEvent
from tests.builders import make_order, make_repo, statuses


def _column(board, status):
    (column,) = [c for c in board.columns if c.status == status]
    return [card.id for card in column.cards]


class TestMoveCard:

    def test_same_column_leaves_everything_unchanged(self):
        repo = make_repo(make_order("X", OrderStatus.PENDING), make_order("Y", OrderStatus.SHIPPED))
        before = statuses(repo)

        moved = MoveCardHandler(repo).handle(
            DragEvent("X", OrderStatus.PENDING, OrderStatus.PENDING)
        )

        assert moved is False
        assert statuses(repo) == before

    def test_move_to_other_column_regroups(self):
        repo = make_repo(
            make_order("X", OrderStatus.PENDING),
            make_order("Y", OrderStatus.PENDING),
            make_order("Z", OrderStatus.SHIPPED),
        )

        moved = MoveCardHandler(repo).handle(
            DragEvent("X", OrderStatus.PENDING, OrderStatus.SHIPPED)
        )

        assert moved is True
        board = ShowBoardHandler(repo).handle(FilterCriteria())
        assert _column(board, "pending") == ["Y"]
        assert _column(board, "shipped") == ["X", "Z"]

    def test_release_outside_board(self):
        repo = make_repo(make_order("X", OrderStatus.PENDING))
        assert MoveCardHandler(repo).handle(DragEvent("X", OrderStatus.PENDING, None)) is False
        assert repo.get_by_id("X").status == OrderStatus.PENDING

    def test_guarded_policy_blocks_illegal_drop(self):
        repo = make_repo(make_order("X", OrderStatus.PENDING))
        handler = MoveCardHandler(repo, TransitionPolicy.guarded())

        with pytest.raises(InvalidTransitionError):
            handler.handle(DragEvent("X", OrderStatus.PENDING, OrderStatus.DELIVERED))

        assert repo.get_by_id("X").status == OrderStatus.PENDING

    def test_stale_source_column_still_sets_destination(self):
        # The feed moved the order after the card was picked up.
        repo = make_repo(make_order("X", OrderStatus.PENDING))
        repo.set_status("X", OrderStatus.PROCESSING)

        MoveCardHandler(repo).handle(DragEvent("X", OrderStatus.PENDING, OrderStatus.SHIPPED))

        assert repo.get_by_id("X").status == OrderStatus.SHIPPED
