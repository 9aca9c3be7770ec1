import unittest
from nestegg.projection import InvalidInputError, gross_up_for_tax, real_return, retirement_need


class TestRetirementNeed(unittest.TestCase):

    def test_should_size_portfolio_given_default_scenario(self):
        # Precondition
        r, g = 0.05, 0.027
        pre_tax = 100000 / 0.78
        income_at_retirement = pre_tax * (1 + g) ** 21
        expected = income_at_retirement * (1 - ((1 + g) / (1 + r)) ** 40) / (r - g)

        # Under test
        need = retirement_need(100000, 22, 2.7, 21, 40, 5.0)

        # Postcondition
        self.assertAlmostEqual(need.pre_tax_income, 128205.13, places=2)
        self.assertAlmostEqual(need.income_at_retirement, income_at_retirement, places=6)
        self.assertAlmostEqual(need.portfolio_needed, expected, delta=expected * 1e-12)
        self.assertEqual(need.inflation_rate, 2.7)

    def test_should_use_linear_branch_given_return_equal_to_inflation(self):
        # Under test
        need = retirement_need(60000, 20, 3.0, 10, 30, 3.0)

        # Postcondition
        self.assertAlmostEqual(need.portfolio_needed, need.income_at_retirement * 30)

    def test_should_be_continuous_given_return_near_inflation(self):
        # Precondition
        exact = retirement_need(100000, 22, 2.7, 21, 40, 2.7).portfolio_needed

        # Under test
        above = retirement_need(100000, 22, 2.7, 21, 40, 2.7 + 0.00001).portfolio_needed
        below = retirement_need(100000, 22, 2.7, 21, 40, 2.7 - 0.00001).portfolio_needed

        # Postcondition
        self.assertAlmostEqual(above / exact, 1.0, places=6)
        self.assertAlmostEqual(below / exact, 1.0, places=6)

    def test_should_need_more_given_return_below_inflation(self):
        below = retirement_need(50000, 0, 4.0, 0, 25, 2.0)
        above = retirement_need(50000, 0, 4.0, 0, 25, 6.0)

        self.assertGreater(below.portfolio_needed, 50000 * 25 * 0.9)
        self.assertGreater(below.portfolio_needed, above.portfolio_needed)
        self.assertGreaterEqual(above.portfolio_needed, 0)

    def test_should_need_more_given_higher_inflation(self):
        low = retirement_need(100000, 22, 1.8, 21, 40, 5.0)
        high = retirement_need(100000, 22, 4.5, 21, 40, 5.0)
        self.assertGreater(high.portfolio_needed, low.portfolio_needed)

    def test_should_raise_given_tax_rate_of_one_hundred(self):
        with self.assertRaises(InvalidInputError):
            retirement_need(100000, 100, 2.7, 21, 40, 5.0)

    def test_should_raise_given_non_positive_retirement_horizon(self):
        with self.assertRaises(InvalidInputError):
            retirement_need(100000, 22, 2.7, 21, 0, 5.0)
        with self.assertRaises(InvalidInputError):
            retirement_need(100000, 22, 2.7, -1, 30, 5.0)

    def test_should_raise_given_total_loss_post_retirement_return(self):
        for post_return in (-100.0, -150.0):
            with self.subTest(post_return=post_return):
                with self.assertRaises(InvalidInputError):
                    retirement_need(100000, 22, 2.7, 21, 40, post_return)

    def test_should_size_portfolio_given_steep_but_partial_loss(self):
        need = retirement_need(100000, 22, 2.7, 21, 40, -99.0)
        self.assertGreater(need.portfolio_needed, need.income_at_retirement)


class TestIncomeHelpers(unittest.TestCase):

    def test_should_gross_up_given_flat_tax(self):
        self.assertAlmostEqual(gross_up_for_tax(75000, 25), 100000)
        self.assertAlmostEqual(gross_up_for_tax(75000, 0), 75000)

    def test_should_raise_given_negative_tax(self):
        with self.assertRaises(InvalidInputError):
            gross_up_for_tax(75000, -5)

    def test_should_compute_real_return_given_nominal_and_inflation(self):
        self.assertAlmostEqual(real_return(5.0, 2.7), (1.05 / 1.027 - 1) * 100)
        self.assertAlmostEqual(real_return(3.0, 3.0), 0.0)
        self.assertLess(real_return(2.0, 4.5), 0)


if __name__ == '__main__':
    unittest.main()
