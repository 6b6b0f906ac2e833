import unittest

from shootdrive.errors.exceptions import (
    AuthExpiredError,
    ConflictError,
    CycleDetectedError,
    HttpErrorInfo,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    RateLimitedError,
    RemoteApiError,
    RemoteUnavailableError,
    ShootDriveError,
    ValidationError,
    is_retryable,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = ShootDriveError(
            "msg", details={"status_code": 403, "reason": "x"}, cause=cause
        )
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.status_code, 403)
        self.assertEqual(err.reason, "x")
        self.assertIs(err.cause, cause)

    def test_local_errors_have_no_status(self) -> None:
        err = ValidationError("empty")
        self.assertIsNone(err.status_code)
        self.assertEqual(err.details, {})

    def test_map_http_error_basic(self) -> None:
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=400)), ValidationError)
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=401)), AuthExpiredError)
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=404)), NotFoundError)
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=409)), ConflictError)
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=429)), RateLimitedError)

    def test_map_http_error_403_reasons(self) -> None:
        for reason in ("rateLimitExceeded", "userRateLimitExceeded", "quotaExceeded"):
            err = map_http_error(HttpErrorInfo(status_code=403, reason=reason))
            self.assertIsInstance(err, RateLimitedError, reason)

        for reason in ("storageQuotaExceeded", "activeItemCreationLimitExceeded"):
            err = map_http_error(HttpErrorInfo(status_code=403, reason=reason))
            self.assertIsInstance(err, QuotaExceededError, reason)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="insufficientFilePermissions")
        )
        self.assertIsInstance(err, PermissionDeniedError)

        err = map_http_error(HttpErrorInfo(status_code=403))
        self.assertIsInstance(err, PermissionDeniedError)

    def test_map_http_error_5xx_is_remote_unavailable(self) -> None:
        for status in (500, 502, 503, 504):
            err = map_http_error(HttpErrorInfo(status_code=status, message="unavail"))
            self.assertIsInstance(err, RemoteUnavailableError)
            self.assertEqual(err.status_code, status)

    def test_map_http_error_other_is_remote_api_error(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=418, message="teapot"))
        self.assertIsInstance(err, RemoteApiError)
        self.assertEqual(str(err), "teapot")

    def test_map_http_error_merges_details(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=404, reason="notFound", details={"domain": "global"})
        )
        self.assertEqual(err.details["reason"], "notFound")
        self.assertEqual(err.details["domain"], "global")

    def test_is_retryable(self) -> None:
        self.assertTrue(is_retryable(RateLimitedError("r")))
        self.assertTrue(is_retryable(RemoteUnavailableError("u")))
        self.assertFalse(is_retryable(AuthExpiredError("a")))
        self.assertFalse(is_retryable(PermissionDeniedError("p")))
        self.assertFalse(is_retryable(QuotaExceededError("q")))
        self.assertFalse(is_retryable(NotFoundError("n")))
        self.assertFalse(is_retryable(ValidationError("v")))
        self.assertFalse(is_retryable(ValueError("raw")))

    def test_cycle_detected_keeps_segments(self) -> None:
        err = CycleDetectedError("cycle", segments=["A", "B"], details={"repeated_id": "A"})
        self.assertEqual(err.segments, ["A", "B"])
        self.assertEqual(err.details["repeated_id"], "A")


if __name__ == "__main__":
    unittest.main()
