from unittest import TestCase, main

from numpy import array

from twentyfortyeight.core.gamemove import Direction, can_move


class TestGameMove(TestCase):
    def test_can_move(self):
        """
        Test the left-move check on slides, merges and blocked rows.
        """
        self.assertTrue(can_move(array([[0, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])))
        self.assertTrue(can_move(array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])))
        self.assertFalse(can_move(array([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])))

    def test_rotation(self):
        """
        Test the quarter turns that map each direction to a left slide.
        """
        self.assertEqual([direction.rotation for direction in Direction], [1, 2, 3, 0])


if __name__ == '__main__':
    main()
