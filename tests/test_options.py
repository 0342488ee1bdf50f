import unittest

from cli.binding.models import Option
from cli.binding.options import build_select_options, flatten_candidates, normalize_options, split_option_string


def pairs(options):
    return [(option.value, option.label) for option in options]


class NormalizeOptionsTest(unittest.TestCase):
    def test_first_occurrence_wins(self):
        self.assertEqual(pairs(normalize_options(["a", "b", "a"])), [("a", "a"), ("b", "b")])

    def test_objects_use_value_and_label(self):
        options = normalize_options([
            {"label": "Sweden", "value": "se"},
            {"label": "Norway", "value": "no"},
            {"label": "Sverige", "value": "se"},
        ])
        self.assertEqual(pairs(options), [("se", "Sweden"), ("no", "Norway")])

    def test_nested_arrays_are_flattened(self):
        self.assertEqual([o.value for o in normalize_options([["a", ["b"]], "c"])], ["a", "b", "c"])

    def test_unusable_items_are_skipped(self):
        self.assertEqual(pairs(normalize_options([None, "", {}, {"x": {}}, "x"])), [("x", "x")])

    def test_numbers_dedupe_with_strings(self):
        self.assertEqual(pairs(normalize_options([1, 1.0, "1", True])), [("1", "1"), ("true", "true")])

    def test_values_are_unique_and_ordered(self):
        items = ["b", {"value": "a"}, ["b", "c"], {"name": "a"}, 3, "3", {"id": "c"}]
        values = [o.value for o in normalize_options(items)]
        self.assertEqual(values, ["b", "a", "c", "3"])
        self.assertEqual(len(values), len(set(values)))

    def test_returns_option_models(self):
        self.assertEqual(normalize_options(["x"]), [Option(value="x", label="x")])


class BuildSelectOptionsTest(unittest.TestCase):
    def test_scalar_value_pairs_with_first_label(self):
        self.assertEqual(pairs(build_select_options(["A", "B", "C"], "X")), [("X", "A")])

    def test_parallel_arrays(self):
        options = build_select_options(["Sweden", "Norway"], ["se", "no"])
        self.assertEqual(pairs(options), [("se", "Sweden"), ("no", "Norway")])

    def test_shorter_side_reuses_last_element(self):
        options = build_select_options("Only", ["a", "b"])
        self.assertEqual(pairs(options), [("a", "Only"), ("b", "Only")])
        options = build_select_options(["A", "B", "C"], ["a", "b"])
        self.assertEqual(pairs(options), [("a", "A"), ("b", "B")])

    def test_missing_labels_use_values(self):
        self.assertEqual(pairs(build_select_options(None, ["a", "b"])), [("a", "a"), ("b", "b")])

    def test_unresolvable_value_falls_back_to_label(self):
        options = build_select_options(["A", "B"], [{"x": [1]}])
        self.assertEqual(pairs(options), [("A", "A"), ("B", "B")])

    def test_both_empty(self):
        self.assertEqual(build_select_options(None, None), [])
        self.assertEqual(build_select_options([], []), [])


class HelpersTest(unittest.TestCase):
    def test_flatten_candidates(self):
        self.assertEqual(flatten_candidates(None), [])
        self.assertEqual(flatten_candidates("a"), ["a"])
        self.assertEqual(flatten_candidates([1, [2, [3]]]), [1, 2, 3])

    def test_split_option_string(self):
        self.assertEqual(split_option_string("red; green,blue ,, "), ["red", "green", "blue"])


if __name__ == "__main__":
    unittest.main()
