import math
import unittest

from spectracrawl.core.numfmt import pretty, resolve, Rendering
from spectracrawl.core.model import ConditionSet
from spectracrawl.core.conditions import parse, serialize, header_row, output_filename
from spectracrawl.core.errors import (
    ConditionError, MalformedConditionToken, UnknownConditionKey, NonNumericConditionValue,
)

CANONICAL = [
    (0, "0"),
    (2, "2"),
    (999, "999"),
    (999.999, "999.999"),
    (999.9999, "1e+03"),
    (1000, "1e+03"),
    (1e99, "1e+99"),
    (2.1, "2.100"),
    (2.0001, "2"),
    (0.35, "0.350"),
    (0.0000432, "4.320e-05"),
    (0.0009, "9e-04"),
    (0.0009999, "9.999e-04"),
    (0.00099999, "0.001"),
]


class PrettyFormatTests(unittest.TestCase):
    def test_canonical_table(self):
        for value, expected in CANONICAL:
            with self.subTest(value=value):
                self.assertEqual(expected, pretty(value))

    def test_negative_values_mirror_positive(self):
        for value, expected in CANONICAL:
            if value == 0:
                continue
            with self.subTest(value=value):
                self.assertEqual("-" + expected, pretty(-value))

    def test_large_values_lose_fraction(self):
        self.assertEqual("1.235e+04", pretty(12346.7))
        self.assertEqual("1.234e+04", pretty(12345.678))
        self.assertEqual("5e+03", pretty(5000.4))

    def test_decision_structure(self):
        rendering, value = resolve(0.35)
        self.assertEqual(Rendering("fixed", 3), rendering)
        rendering, value = resolve(1000.0)
        self.assertEqual(Rendering("scientific", 0), rendering)
        self.assertEqual(1000.0, value)


class ConditionCodecTests(unittest.TestCase):
    def test_parse_tokens(self):
        c = parse(["CH4", "x=1e-06", "T=300K", "P=1atm", "L=100cm"])
        self.assertEqual("CH4", c.gas_id)
        self.assertAlmostEqual(1.0, c.ppm)
        self.assertEqual(300.0, c.T)
        self.assertEqual(1.0, c.P)
        self.assertEqual(100.0, c.L)

    def test_serialize(self):
        c = ConditionSet(gas_id="H2O", ppm=2000, T=296.5, P=0.35, L=1000)
        self.assertEqual(["H2O", "x=0.002", "T=296.500K", "P=0.350atm", "L=1e+03cm"], serialize(c))

    def test_round_trip_within_formatter_precision(self):
        cases = [
            ConditionSet(gas_id="CO2", ppm=400, T=296, P=1, L=10),
            ConditionSet(gas_id="CH4", ppm=1.75, T=1234, P=0.02, L=0.5),
            ConditionSet(gas_id="NO", ppm=43.2, T=750.125, P=12.5, L=250),
        ]
        for c in cases:
            with self.subTest(c=c):
                back = parse(serialize(c))
                self.assertEqual(c.gas_id, back.gas_id)
                for name in ("ppm", "T", "P", "L"):
                    self.assertTrue(math.isclose(getattr(c, name), getattr(back, name), rel_tol=1e-3),
                                    f"{name}: {getattr(c, name)} vs {getattr(back, name)}")

    def test_token_with_two_equals_is_malformed(self):
        with self.assertRaises(MalformedConditionToken):
            parse(["CH4", "x=1=2"])

    def test_unknown_key(self):
        with self.assertRaises(UnknownConditionKey):
            parse(["CH4", "Q=3"])

    def test_non_numeric_value(self):
        with self.assertRaises(NonNumericConditionValue):
            parse(["CH4", "T=hotK"])
        with self.assertRaises(ConditionError):
            parse(["CH4", "P=atm"])

    def test_header_and_filename(self):
        tokens = ["CH4", "x=1e-06", "T=300K", "P=1atm", "L=100cm"]
        self.assertEqual(["nu", "CH4/x=1e-06/T=300K/P=1atm/L=100cm"], header_row(tokens))
        name = output_filename(parse(tokens), 0.0, 30.9)
        self.assertEqual("nu=0-30,CH4,x=1e-06,T=300K,P=1atm,L=100cm.csv", name)

    def test_filename_truncates_bounds(self):
        c = ConditionSet(gas_id="CO", ppm=50, T=300, P=1, L=1)
        self.assertTrue(output_filename(c, 2100.99, 2200.7).startswith("nu=2100-2200,CO,x=5e-05,"))
