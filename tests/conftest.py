"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessling.core.board import Board
from chessling.core.notation import board_from_fen

# Rich middlegame: both sides may castle both ways, pins and discovered lines.
KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


@pytest.fixture
def initial_board() -> Board:
    return Board.initial()


@pytest.fixture
def kiwipete_board() -> Board:
    return board_from_fen(KIWIPETE)
