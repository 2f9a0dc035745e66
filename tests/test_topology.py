import unittest

from game import (
    ALL_MILLS,
    ALL_POSITIONS,
    Position,
    are_adjacent,
    mills_of,
    neighbours_of,
    position_at,
)


def P(ring, index):
    return position_at(ring, index)


class TestTopology(unittest.TestCase):
    def test_given_board_when_counting_positions_then_24_in_ring_index_order(self):
        self.assertEqual(len(ALL_POSITIONS), 24)
        self.assertEqual(ALL_POSITIONS[0], Position(0, 0))
        self.assertEqual(ALL_POSITIONS[9], Position(1, 1))
        for p in ALL_POSITIONS:
            self.assertIs(P(p.ring, p.index), ALL_POSITIONS[p.flat])

    def test_given_out_of_range_coordinates_when_building_position_then_value_error(self):
        with self.assertRaises(ValueError):
            Position(3, 0)
        with self.assertRaises(ValueError):
            Position(0, 8)
        with self.assertRaises(ValueError):
            position_at(-1, 2)

    def test_given_positions_when_compared_then_structural_equality_and_hash(self):
        self.assertEqual(Position(2, 5), P(2, 5))
        self.assertEqual(len({Position(2, 5), P(2, 5)}), 1)

    def test_given_topology_when_listing_mills_then_sixteen_distinct(self):
        self.assertEqual(len(ALL_MILLS), 16)
        as_sets = {frozenset(m.positions()) for m in ALL_MILLS}
        self.assertEqual(len(as_sets), 16)
        self.assertIn(frozenset({P(0, 0), P(0, 1), P(0, 2)}), as_sets)
        self.assertIn(frozenset({P(1, 6), P(1, 7), P(1, 0)}), as_sets)  # wraps around index 0
        self.assertIn(frozenset({P(0, 3), P(1, 3), P(2, 3)}), as_sets)
        self.assertNotIn(frozenset({P(0, 0), P(1, 0), P(2, 0)}), as_sets)  # no corner spokes

    def test_given_each_position_when_querying_mills_then_exactly_two(self):
        for p in ALL_POSITIONS:
            mills = mills_of(p)
            for m in mills:
                self.assertIn(p, m)
            self.assertEqual(len(mills), 2, str(p))
            spokes = [m for m in mills if len({q.ring for q in m.positions()}) == 3]
            # Corners close two sides of their square; midpoints sit on one side and one spoke.
            self.assertEqual(len(spokes), 0 if p.is_corner else 1, str(p))
        total = sum(len(mills_of(p)) for p in ALL_POSITIONS)
        self.assertEqual(total, 16 * 3)

    def test_given_all_pairs_when_checking_adjacency_then_symmetric(self):
        for p in ALL_POSITIONS:
            for q in neighbours_of(p):
                self.assertIn(p, neighbours_of(q))
                self.assertTrue(are_adjacent(q, p))
            self.assertNotIn(p, neighbours_of(p))

    def test_given_positions_when_counting_neighbours_then_degree_by_kind(self):
        for p in ALL_POSITIONS:
            n = len(neighbours_of(p))
            if p.is_corner:
                self.assertEqual(n, 2, str(p))
            elif p.ring == 1:
                self.assertEqual(n, 4, str(p))
            else:
                self.assertEqual(n, 3, str(p))

    def test_given_specific_points_when_querying_neighbours_then_expected_sets(self):
        self.assertEqual(neighbours_of(P(0, 0)), {P(0, 1), P(0, 7)})
        self.assertEqual(neighbours_of(P(1, 1)), {P(1, 0), P(1, 2), P(0, 1), P(2, 1)})
        self.assertEqual(neighbours_of(P(2, 7)), {P(2, 6), P(2, 0), P(1, 7)})
        self.assertFalse(are_adjacent(P(0, 1), P(2, 1)))  # outer and inner never touch
        self.assertFalse(are_adjacent(P(0, 0), P(1, 0)))  # corners have no spokes


if __name__ == '__main__':
    unittest.main(verbosity=2)
