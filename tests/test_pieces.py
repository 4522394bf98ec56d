import random
import unittest

import numpy as np

from blockfall.game.errors import InvalidPieceType
from blockfall.game.matrix import Matrix
from blockfall.game.pieces import (
    ALL_TYPES,
    ActivePiece,
    TetrominoType,
    color_id_for,
    piece_type,
    random_type,
    shape_for,
)


class FixedChoice:
    def __init__(self, value):
        self.value = value
        self.seen = None

    def choice(self, seq):
        self.seen = tuple(seq)
        return self.value


class TestPieces(unittest.TestCase):

    def test_catalog_has_seven_types_with_colour_ids(self):
        self.assertEqual(len(ALL_TYPES), 7)
        self.assertEqual(sorted(color_id_for(t) for t in ALL_TYPES), list(range(1, 8)))

    def test_shapes_are_square_tetrominoes_coloured_by_type(self):
        for kind in TetrominoType:
            shape = shape_for(kind)
            self.assertTrue(shape.is_square)
            self.assertEqual(shape.width, 4 if kind == TetrominoType.I else 3)
            values = shape.cells[shape.cells != 0]
            self.assertEqual(values.size, 4)
            self.assertTrue(np.all(values == color_id_for(kind)))

    def test_shape_copies_never_alias(self):
        first = shape_for(TetrominoType.T)
        second = shape_for(TetrominoType.T)
        first.fill(0)
        self.assertEqual(second.rows(), [[0, 6, 0], [6, 6, 6], [0, 0, 0]])
        self.assertEqual(shape_for('T').rows(), [[0, 6, 0], [6, 6, 6], [0, 0, 0]])

    def test_kind_can_be_given_as_id_or_name(self):
        self.assertEqual(piece_type(4), TetrominoType.O)
        self.assertEqual(piece_type(np.int8(1)), TetrominoType.I)
        self.assertEqual(piece_type('z'), TetrominoType.Z)
        self.assertEqual(shape_for(2).rows(), [[2, 0, 0], [2, 2, 2], [0, 0, 0]])

    def test_invalid_kinds_are_rejected(self):
        for bad in (0, 8, -1, 'X', None, True, 2.0):
            with self.assertRaises(InvalidPieceType):
                shape_for(bad)
        with self.assertRaises(ValueError):
            color_id_for(99)

    def test_random_type_uses_injected_source(self):
        source = FixedChoice(TetrominoType.S)
        self.assertEqual(random_type(source), TetrominoType.S)
        self.assertEqual(source.seen, ALL_TYPES)

        rng = random.Random(1234)
        kinds = {random_type(rng) for _ in range(200)}
        self.assertEqual(kinds, set(TetrominoType))

    def test_random_type_rejects_bad_source_values(self):
        with self.assertRaises(InvalidPieceType):
            random_type(FixedChoice(11))

    def test_active_piece_cells(self):
        piece = ActivePiece(TetrominoType.O, shape_for('O'), (3, 5))
        self.assertEqual(piece.x, 3)
        self.assertEqual(piece.y, 5)
        self.assertEqual(sorted(piece.cells()), [(4, 5), (4, 6), (5, 5), (5, 6)])
        self.assertIsInstance(piece.shape, Matrix)


if __name__ == '__main__':
    unittest.main()
