import unittest

from scheduleboard.shared.validators import (
    duration_minutes,
    initials_from_name,
    is_valid_time,
    normalize_initials,
    time_to_minutes,
    validate_hex_color,
    validate_time_range,
)
from scheduleboard.shared.weekdays import WEEKDAYS, is_weekday


class TestTimeValues(unittest.TestCase):
    def test_valid_times(self):
        for value in ("00:00", "08:30", "23:59"):
            self.assertTrue(is_valid_time(value), value)

    def test_invalid_times(self):
        for value in ("24:00", "8:30", "08:60", "0830", "", None, 830):
            self.assertFalse(is_valid_time(value), value)

    def test_time_to_minutes(self):
        self.assertEqual(time_to_minutes("00:00"), 0)
        self.assertEqual(time_to_minutes("09:45"), 585)
        with self.assertRaises(ValueError):
            time_to_minutes("9h45")

    def test_duration(self):
        self.assertEqual(duration_minutes("08:00", "09:30"), 90)


class TestTimeRange(unittest.TestCase):
    def test_valid_range_has_no_errors(self):
        self.assertEqual(validate_time_range("08:00", "08:30"), [])

    def test_end_must_follow_start(self):
        errors = validate_time_range("09:00", "09:00")
        self.assertEqual([e["field"] for e in errors], ["endTime"])
        self.assertEqual(errors[0]["message"], "endTime must be after startTime")

        errors = validate_time_range("10:00", "09:00")
        self.assertEqual([e["field"] for e in errors], ["endTime"])

    def test_reports_both_malformed_fields(self):
        errors = validate_time_range("8am", None)
        self.assertEqual([e["field"] for e in errors], ["startTime", "endTime"])


class TestColorsAndInitials(unittest.TestCase):
    def test_hex_color_is_lowercased(self):
        self.assertEqual(validate_hex_color(" #3B82F6 "), "#3b82f6")
        self.assertIsNone(validate_hex_color(None))

    def test_bad_hex_color(self):
        for value in ("3b82f6", "#3b82f", "#zzzzzz", "blue"):
            with self.assertRaises(ValueError):
                validate_hex_color(value)

    def test_normalize_initials(self):
        self.assertEqual(normalize_initials(" am "), "AM")
        with self.assertRaises(ValueError):
            normalize_initials("   ")
        with self.assertRaises(ValueError):
            normalize_initials("ABCDE")

    def test_initials_from_name_skips_titles(self):
        self.assertEqual(initials_from_name("Profa. Ana Maria"), "AM")
        self.assertEqual(initials_from_name("Prof. Carlos"), "CA")
        self.assertEqual(initials_from_name("João da Silva"), "JS")
        self.assertEqual(initials_from_name("Dr."), "?")


class TestWeekdays(unittest.TestCase):
    def test_seven_keys(self):
        self.assertEqual(len(WEEKDAYS), 7)
        self.assertTrue(is_weekday("segunda"))
        self.assertTrue(is_weekday("domingo"))
        self.assertFalse(is_weekday("monday"))
        self.assertFalse(is_weekday("Segunda"))
        self.assertFalse(is_weekday(None))


if __name__ == "__main__":
    unittest.main(verbosity=2)
