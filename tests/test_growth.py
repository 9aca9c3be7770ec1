import unittest
from nestegg.projection import InvalidInputError, future_value


class TestFutureValue(unittest.TestCase):

    def test_should_match_closed_form_given_default_plan(self):
        # Precondition
        growth = 1.096 ** 21
        expected = 50000 * growth + 10000 * ((growth - 1) / 0.096)

        # Under test
        fv = future_value(50000, 10000, 9.6, 21)

        # Postcondition
        self.assertAlmostEqual(fv, expected, delta=expected * 1e-12)
        self.assertAlmostEqual(fv, 952_700, delta=2_000)  # ~343k lump sum + ~610k contributions

    def test_should_compound_lump_sum_only_given_no_contributions(self):
        fv = future_value(100000, 0, 7.0, 10)
        self.assertAlmostEqual(fv, 100000 * 1.07 ** 10, places=6)

    def test_should_add_contributions_linearly_given_zero_rate(self):
        # Precondition: closed-form annuity term is undefined at r = 0
        # Under test
        fv = future_value(20000, 5000, 0.0, 12)

        # Postcondition
        self.assertAlmostEqual(fv, 20000 + 5000 * 12)

    def test_should_return_initial_given_zero_years(self):
        self.assertAlmostEqual(future_value(50000, 10000, 9.6, 0), 50000)

    def test_should_not_shrink_given_non_negative_rate(self):
        for initial in (0, 1, 50000, 1_000_000):
            for contribution in (0, 500, 10000):
                for rate in (0.0, 0.5, 4.0, 9.6, 25.0):
                    for years in (0, 1, 7, 40):
                        with self.subTest(initial=initial, contribution=contribution, rate=rate, years=years):
                            self.assertGreaterEqual(future_value(initial, contribution, rate, years), initial)

    def test_should_shrink_given_negative_rate_and_no_contributions(self):
        self.assertLess(future_value(100000, 0, -3.0, 5), 100000)

    def test_should_raise_given_negative_years(self):
        with self.assertRaises(InvalidInputError):
            future_value(1000, 100, 5.0, -1)


if __name__ == '__main__':
    unittest.main()
