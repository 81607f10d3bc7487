import unittest

from cleaner_app.domain.calendar.indicators import (
    LARGE_DOT,
    MULTI_TASK_COLOR,
    SMALL_DOT,
    TASK_INDICATOR_COLOR,
    TODAY_HIGHLIGHT_COLOR,
    classify,
)


class TestClassify(unittest.TestCase):
    def test_dot_and_count_visibility_follow_thresholds(self) -> None:
        for count in range(0, 15):
            with self.subTest(count=count):
                config = classify(count, False)
                self.assertEqual(config.showDot, count > 0)
                self.assertEqual(config.showCount, count >= 3)

    def test_boundary_counts(self) -> None:
        one, two, three = classify(1), classify(2), classify(3)

        self.assertEqual(one.dotSize, SMALL_DOT)
        self.assertFalse(one.showCount)
        self.assertEqual(two.dotSize, LARGE_DOT)
        self.assertFalse(two.showCount)
        self.assertEqual(three.dotSize, LARGE_DOT)
        self.assertTrue(three.showCount)

    def test_display_count_caps_at_nine_plus(self) -> None:
        self.assertEqual(classify(0).displayCount, "0")
        self.assertEqual(classify(9).displayCount, "9")
        self.assertEqual(classify(10).displayCount, "9+")
        self.assertEqual(classify(42).displayCount, "9+")

    def test_color_and_priority(self) -> None:
        self.assertEqual(classify(1).dotColor, TASK_INDICATOR_COLOR)
        self.assertEqual(classify(1).priority, "normal")
        self.assertEqual(classify(2).dotColor, MULTI_TASK_COLOR)
        self.assertEqual(classify(2).priority, "medium")

        # today wins over the busy-day color
        today = classify(5, is_today=True)
        self.assertEqual(today.dotColor, TODAY_HIGHLIGHT_COLOR)
        self.assertEqual(today.priority, "high")
        self.assertEqual(classify(0, is_today=True).priority, "high")


if __name__ == "__main__":
    unittest.main()
