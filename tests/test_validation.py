import unittest

from pachinko_simulator.config import ContinuationMode
from pachinko_simulator.validation import (
    ConfigValidationError,
    ValidationFailure,
    validate_base_hit_denominator,
    validate_config,
    validate_mapping,
)


def raw(**overrides):
    values = dict(
        bet_unit_yen=4,
        daily_budget_yen=1000,
        days=1,
        base_hit_denominator=319,
        bonus_entry_percent=60,
        bonus_hit_denominator=60,
        time_limited_spins=100,
        st_rate_percent=80,
        loop_rate_percent=None,
    )
    values.update(overrides)
    return values


class TestValidateConfig(unittest.TestCase):
    """Tests for validate_config / validate_mapping."""

    def assertFailure(self, kind, **overrides):
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_mapping(raw(**overrides))
        self.assertIs(ctx.exception.kind, kind)
        self.assertTrue(str(ctx.exception))

    def test_valid_st_config(self):
        config = validate_mapping(raw())
        self.assertEqual(config.bet_unit_yen, 4)
        self.assertEqual(config.daily_budget_yen, 1000)
        self.assertAlmostEqual(config.base_hit_probability, 1 / 319)
        self.assertAlmostEqual(config.bonus_entry_probability, 0.6)
        self.assertAlmostEqual(config.bonus_hit_probability, 1 / 60)
        self.assertIs(config.continuation_mode, ContinuationMode.ST)
        self.assertAlmostEqual(config.continuation_rate, 0.8)
        self.assertEqual(config.time_limited_spins, 100)

    def test_valid_loop_config(self):
        config = validate_mapping(raw(st_rate_percent=None, loop_rate_percent=65))
        self.assertIs(config.continuation_mode, ContinuationMode.LOOP)
        self.assertAlmostEqual(config.continuation_rate, 0.65)

    def test_string_inputs(self):
        config = validate_config("1", "5000", "10", "199", "70", "30", "0", st_rate_percent="", loop_rate_percent="50")
        self.assertEqual(config.bet_unit_yen, 1)
        self.assertEqual(config.days, 10)
        self.assertEqual(config.time_limited_spins, 0)
        self.assertIs(config.continuation_mode, ContinuationMode.LOOP)

    def test_missing_field(self):
        self.assertFailure(ValidationFailure.MISSING_FIELD, daily_budget_yen="")
        self.assertFailure(ValidationFailure.MISSING_FIELD, days=None)
        self.assertFailure(ValidationFailure.MISSING_FIELD, base_hit_denominator="abc")
        self.assertFailure(ValidationFailure.MISSING_FIELD, time_limited_spins=float("nan"))
        self.assertFailure(ValidationFailure.MISSING_FIELD, bonus_entry_percent=float("inf"))

    def test_missing_field_reports_names(self):
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_mapping(raw(days="", bet_unit_yen=None))
        self.assertIn("days", ctx.exception.detail)
        self.assertIn("bet_unit_yen", ctx.exception.detail)

    def test_both_continuation_modes(self):
        self.assertFailure(ValidationFailure.BOTH_CONTINUATION_MODES_SET, st_rate_percent=80, loop_rate_percent=60)

    def test_no_continuation_mode(self):
        self.assertFailure(ValidationFailure.NO_CONTINUATION_MODE_SET, st_rate_percent=None)
        self.assertFailure(ValidationFailure.NO_CONTINUATION_MODE_SET, st_rate_percent="", loop_rate_percent="")

    def test_zero_rate_counts_as_unset(self):
        config = validate_mapping(raw(st_rate_percent=0, loop_rate_percent=70))
        self.assertIs(config.continuation_mode, ContinuationMode.LOOP)

    def test_out_of_range(self):
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, bet_unit_yen=2)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, daily_budget_yen=99)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, daily_budget_yen=1_000_001)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, days=0)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, days=1001)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, base_hit_denominator=100)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, bonus_entry_percent=55)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, bonus_hit_denominator=35)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, time_limited_spins=5)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, time_limited_spins=1001)
        self.assertFailure(ValidationFailure.OUT_OF_RANGE, st_rate_percent=101)

    def test_range_edges_accepted(self):
        validate_mapping(raw(daily_budget_yen=100, days=1000, time_limited_spins=10))
        validate_mapping(raw(daily_budget_yen=1_000_000, days=1, time_limited_spins=1000))
        validate_mapping(raw(time_limited_spins=0))

    def test_priority_order(self):
        # 欠損 > 同時指定 > 未指定 > 範囲外
        self.assertFailure(ValidationFailure.MISSING_FIELD, days="", st_rate_percent=80, loop_rate_percent=60)
        self.assertFailure(ValidationFailure.BOTH_CONTINUATION_MODES_SET,
                           base_hit_denominator=100, st_rate_percent=80, loop_rate_percent=60)
        self.assertFailure(ValidationFailure.NO_CONTINUATION_MODE_SET, days=5000, st_rate_percent=None)

    def test_base_hit_denominator_only(self):
        self.assertAlmostEqual(validate_base_hit_denominator("199"), 1 / 199)
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_base_hit_denominator(250)
        self.assertIs(ctx.exception.kind, ValidationFailure.OUT_OF_RANGE)
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_base_hit_denominator("")
        self.assertIs(ctx.exception.kind, ValidationFailure.MISSING_FIELD)

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            validate_mapping(raw(days=""))


if __name__ == "__main__":
    unittest.main()
