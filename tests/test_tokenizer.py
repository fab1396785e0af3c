import unittest

from rcalc_pkg.tokenizer import tokenize


class TestTokenize(unittest.TestCase):
    def test_operators(self):
        self.assertEqual(tokenize("2*2"), ["2", "*", "2"])
        self.assertEqual(tokenize("2.5*2"), ["2.5", "*", "2"])
        self.assertEqual(tokenize("1+2-3/4^5"), ["1", "+", "2", "-", "3", "/", "4", "^", "5"])

    def test_leading_negative(self):
        self.assertEqual(tokenize("-2*2"), ["-", "2", "*", "2"])

    def test_whitespace_is_skipped(self):
        self.assertEqual(tokenize("  2 +\t3 "), ["2", "+", "3"])

    def test_assignment(self):
        self.assertEqual(tokenize("x=2"), ["x", "=", "2"])
        self.assertEqual(tokenize("x=abc"), ["x", "=", "a", "*", "b", "*", "c"])
        self.assertEqual(tokenize("x=ab"), ["x", "=", "a", "*", "b"])

    def test_letter_runs_become_single_letter_variables(self):
        self.assertEqual(tokenize("abc"), ["a", "*", "b", "*", "c"])

    def test_coefficients(self):
        self.assertEqual(tokenize("7x"), ["7", "*", "x"])
        self.assertEqual(tokenize("2.5xy"), ["2.5", "*", "x", "*", "y"])

    def test_number_after_identifier_or_paren(self):
        self.assertEqual(tokenize("x7"), ["x", "*", "7"])
        self.assertEqual(tokenize("(2)3"), ["(", "2", ")", "*", "3"])

    def test_implicit_multiplication_before_paren(self):
        self.assertEqual(tokenize("3(2+2)"), ["3", "*", "(", "2", "+", "2", ")"])
        self.assertEqual(tokenize("(1)(2)"), ["(", "1", ")", "*", "(", "2", ")"])
        self.assertEqual(tokenize("x(1)"), ["x", "*", "(", "1", ")"])
        self.assertEqual(tokenize("(1)x"), ["(", "1", ")", "*", "x"])

    def test_no_implicit_multiplication_after_operator(self):
        self.assertEqual(tokenize("2*(3)"), ["2", "*", "(", "3", ")"])
        self.assertEqual(tokenize("-(3)"), ["-", "(", "3", ")"])

    def test_numbers_take_at_most_one_dot(self):
        self.assertEqual(tokenize("1.2.3"), ["1.2", ".3"])
        self.assertEqual(tokenize(".5"), [".5"])

    def test_unrecognised_characters_are_dropped(self):
        self.assertEqual(tokenize("2 # 3 $ ! 4"), ["2", "3", "4"])
        self.assertEqual(tokenize("2+é"), ["2", "+"])
        self.assertEqual(tokenize(""), [])

    def test_adjacent_numbers_stay_separate(self):
        self.assertEqual(tokenize("2 3"), ["2", "3"])


if __name__ == "__main__":
    unittest.main()
