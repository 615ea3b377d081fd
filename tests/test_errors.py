"""Tests for mapping HTTP failures to exceptions."""

import json
import unittest

from firecrawl_client import (
    BadRequestError,
    FirecrawlError,
    JobTimeoutError,
    NotFoundError,
    PaymentRequiredError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    UnknownError,
    classify_error,
)

EXPECTED = {
    400: (BadRequestError, "Bad request"),
    401: (UnauthorizedError, "Invalid API key"),
    402: (PaymentRequiredError, "Payment required"),
    404: (NotFoundError, "Resource not found"),
    429: (RateLimitError, "Rate limit exceeded"),
    500: (ServerError, "Server error"),
    503: (ServerError, "Server error"),
}

WELL_FORMED = json.dumps({
    "success": False,
    "error": "Something specific went wrong",
    "details": "More context",
}).encode()


class TestClassifyError(unittest.TestCase):
    """The status code alone decides the exception class."""

    def test_well_formed_envelope(self):
        for status, (error_class, _) in EXPECTED.items():
            with self.subTest(status=status):
                error = classify_error(status, WELL_FORMED)
                self.assertIsInstance(error, error_class)
                self.assertEqual(error.message, "Something specific went wrong")
                self.assertEqual(error.error_details, "More context")

    def test_malformed_envelope_uses_generic_message(self):
        for status, (error_class, generic) in EXPECTED.items():
            with self.subTest(status=status):
                error = classify_error(status, b"<html>Bad Gateway</html>")
                self.assertIsInstance(error, error_class)
                self.assertEqual(error.message, generic)

    def test_absent_body_uses_generic_message(self):
        for status, (error_class, generic) in EXPECTED.items():
            with self.subTest(status=status):
                error = classify_error(status, b"")
                self.assertIsInstance(error, error_class)
                self.assertEqual(error.message, generic)

    def test_envelope_without_success_flag_is_malformed(self):
        error = classify_error(401, b'{"error": "nope"}')
        self.assertIsInstance(error, UnauthorizedError)
        self.assertEqual(error.message, "Invalid API key")

    def test_server_error_keeps_status_code(self):
        self.assertEqual(classify_error(503, b"").status_code, 503)
        self.assertEqual(classify_error(599, b"").status_code, 599)

    def test_validation_errors(self):
        body = json.dumps({
            "success": False,
            "error": "Invalid request",
            "validation_errors": [
                {"field": "url", "message": "url is required", "code": "required"},
                {"message": "limit must be positive"},
            ],
        }).encode()
        error = classify_error(400, body)
        self.assertIsInstance(error, BadRequestError)
        self.assertEqual(len(error.validation_errors), 2)
        self.assertEqual(error.validation_errors[0].code, "required")
        self.assertIsNone(error.validation_errors[1].field)
        self.assertEqual(
            error.message, "Invalid request: url is required, limit must be positive"
        )

    def test_unclassified_status_carries_raw_text(self):
        for status in (302, 403, 408, 418, 422):
            with self.subTest(status=status):
                error = classify_error(status, WELL_FORMED)
                self.assertIsInstance(error, UnknownError)
                self.assertEqual(error.status_code, status)
                self.assertEqual(error.message, WELL_FORMED.decode())

    def test_every_error_is_a_firecrawl_error(self):
        for status in list(EXPECTED) + [418]:
            self.assertIsInstance(classify_error(status, b""), FirecrawlError)

    def test_str_includes_details(self):
        error = classify_error(500, WELL_FORMED)
        self.assertIn("status_code=500", str(error))


class TestJobTimeoutError(unittest.TestCase):

    def test_message(self):
        error = JobTimeoutError("job-1", 300.0, kind="crawl")
        self.assertEqual(error.message, "Crawl job-1 timed out after 300.0 seconds")
        self.assertEqual(error.timeout, 300.0)


if __name__ == '__main__':
    unittest.main()
