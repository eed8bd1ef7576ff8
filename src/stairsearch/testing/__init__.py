from stairsearch.testing.utils import assert_staircase, brute_force_coords

__all__ = ["assert_staircase", "brute_force_coords"]
