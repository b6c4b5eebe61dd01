import unittest

from bed_app.errors import GENERIC_DISPATCH_MESSAGE, DispatchError, ValidationError
from bed_app.models import CalculationResult, DisplayResult, UIState
from bed_app.presenter import present


class PresenterTests(unittest.TestCase):
    def test_success_formats_values(self):
        state = present(UIState(), CalculationResult(45.678, 50.123, 9.876))
        self.assertIsNone(state.error)
        self.assertEqual(
            state.result,
            DisplayResult(bed="45.68 Gy", a9="50.12 Gy", relative_difference="9.88%", warning=None),
        )

    def test_success_keeps_warning(self):
        state = present(UIState(), CalculationResult(1.0, 2.0, 3.0, "Gap times are long."))
        self.assertEqual(state.result.warning, "Gap times are long.")

    def test_success_clears_previous_error_and_warning(self):
        previous = UIState(
            error="Total dose must be a non-negative number.",
            result=DisplayResult("1.00 Gy", "1.00 Gy", "0.00%", "old warning"),
        )
        state = present(previous, CalculationResult(2.0, 2.0, 0.0))
        self.assertIsNone(state.error)
        self.assertIsNone(state.result.warning)

    def test_validation_error_keeps_stale_result(self):
        shown = DisplayResult("45.68 Gy", "50.12 Gy", "9.88%", "careful")
        state = present(UIState(result=shown), ValidationError("Gap time array should have 2 values."))
        self.assertEqual(state.error, "Gap time array should have 2 values.")
        self.assertEqual(state.result, shown)

    def test_dispatch_error_uses_generic_message(self):
        shown = DisplayResult("45.68 Gy", "50.12 Gy", "9.88%")
        state = present(UIState(result=shown), DispatchError("socket closed"))
        self.assertEqual(state.error, GENERIC_DISPATCH_MESSAGE)
        self.assertEqual(state.result, shown)

    def test_present_is_idempotent(self):
        outcome = CalculationResult(45.678, 50.123, 9.876, "warn")
        first = present(UIState(), outcome)
        self.assertEqual(first, present(UIState(), outcome))
        self.assertEqual(first, present(first, outcome))

    def test_unknown_outcome(self):
        with self.assertRaises(TypeError):
            present(UIState(), {"BED": 1})


if __name__ == "__main__":
    unittest.main()
