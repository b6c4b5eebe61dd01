import io
import json
import unittest
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError

from bed_app.client import dispatch
from bed_app.errors import GENERIC_DISPATCH_MESSAGE, DispatchError
from bed_app.models import CalculationResult, ScalarGap, SequenceGap, ValidatedRequest

ENDPOINT = "http://calc.test/calculate_BED"


def scalar_request() -> ValidatedRequest:
    return ValidatedRequest(60.0, 10.0, 3, ScalarGap(0.5))


class DispatchTests(unittest.TestCase):
    @patch("bed_app.client._post_json")
    def test_posts_scalar_payload(self, mock_post_json):
        mock_post_json.return_value = {"BED": 45.678, "A9": 50.123, "rel_diff": 9.876}
        result = dispatch(scalar_request(), endpoint=ENDPOINT)

        mock_post_json.assert_called_once_with(
            ENDPOINT,
            {"totalDose": 60.0, "totalBeamOn": 10.0, "isocentres": 3, "avgGapTime": 0.5},
        )
        self.assertEqual(result, CalculationResult(45.678, 50.123, 9.876, None))

    @patch("bed_app.client._post_json")
    def test_posts_sequence_payload(self, mock_post_json):
        mock_post_json.return_value = {"BED": 1.0, "A9": 2.0, "rel_diff": 3.0, "warning": "Long gaps"}
        request = ValidatedRequest(60.0, 10.0, 3, SequenceGap((0.1, 0.2)))
        result = dispatch(request, endpoint=ENDPOINT)

        sent = mock_post_json.call_args.args[1]
        self.assertEqual(sent["gapArray"], [0.1, 0.2])
        self.assertNotIn("avgGapTime", sent)
        self.assertEqual(result.warning, "Long gaps")

    @patch("bed_app.client.get_calculator_endpoint", return_value=ENDPOINT)
    @patch("bed_app.client._post_json")
    def test_uses_configured_endpoint(self, mock_post_json, _mock_endpoint):
        mock_post_json.return_value = {"BED": 1, "A9": 1, "rel_diff": 0}
        dispatch(scalar_request())
        self.assertEqual(mock_post_json.call_args.args[0], ENDPOINT)

    @patch("bed_app.client._post_json")
    def test_transport_failures_collapse_to_dispatch_error(self, mock_post_json):
        failures = [
            URLError("connection refused"),
            HTTPError(ENDPOINT, 500, "Internal Server Error", {}, io.BytesIO(b"")),
            ConnectionResetError("reset"),
            json.JSONDecodeError("Expecting value", "<html>", 0),
        ]
        for failure in failures:
            with self.subTest(failure=type(failure).__name__):
                mock_post_json.side_effect = failure
                with self.assertRaises(DispatchError) as ctx:
                    dispatch(scalar_request(), endpoint=ENDPOINT)
                self.assertEqual(ctx.exception.message, GENERIC_DISPATCH_MESSAGE)
                self.assertIs(ctx.exception.__cause__, failure)

    @patch("bed_app.client._post_json")
    def test_malformed_body_is_dispatch_error(self, mock_post_json):
        mock_post_json.return_value = {"BED": 45.0}
        with self.assertRaises(DispatchError):
            dispatch(scalar_request(), endpoint=ENDPOINT)


class PostJsonTests(unittest.TestCase):
    @patch("bed_app.client.urlopen")
    def test_sends_json_post(self, mock_urlopen):
        response = MagicMock()
        response.read.return_value = b'{"BED": 1, "A9": 2, "rel_diff": 3}'
        mock_urlopen.return_value.__enter__.return_value = response

        result = dispatch(scalar_request(), endpoint=ENDPOINT)

        sent_request = mock_urlopen.call_args.args[0]
        self.assertEqual(sent_request.get_method(), "POST")
        self.assertEqual(sent_request.full_url, ENDPOINT)
        self.assertEqual(sent_request.get_header("Content-type"), "application/json")
        self.assertEqual(json.loads(sent_request.data.decode("utf-8"))["avgGapTime"], 0.5)
        self.assertEqual(result.a9, 2.0)

    @patch("bed_app.client.urlopen")
    def test_oversized_number_is_dispatch_error(self, mock_urlopen):
        response = MagicMock()
        response.read.return_value = ('{"BED": 1' + "0" * 400 + ', "A9": 1, "rel_diff": 0}').encode("utf-8")
        mock_urlopen.return_value.__enter__.return_value = response

        with self.assertRaises(DispatchError):
            dispatch(scalar_request(), endpoint=ENDPOINT)

    @patch("bed_app.client.urlopen")
    def test_non_finite_numbers_are_dispatch_error(self, mock_urlopen):
        response = MagicMock()
        response.read.return_value = b'{"BED": NaN, "A9": Infinity, "rel_diff": 0}'
        mock_urlopen.return_value.__enter__.return_value = response

        with self.assertRaises(DispatchError):
            dispatch(scalar_request(), endpoint=ENDPOINT)

    @patch("bed_app.client.urlopen")
    def test_deeply_nested_body_is_dispatch_error(self, mock_urlopen):
        response = MagicMock()
        response.read.return_value = b"[" * 100000 + b"]" * 100000
        mock_urlopen.return_value.__enter__.return_value = response

        with self.assertRaises(DispatchError):
            dispatch(scalar_request(), endpoint=ENDPOINT)


if __name__ == "__main__":
    unittest.main()
