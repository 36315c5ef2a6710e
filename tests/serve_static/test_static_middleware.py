import tempfile
import unittest
from pathlib import Path
from typing import Optional

from serve_static import (
    StaticOptions,
    StaticResponse,
    adapt,
    make_handler,
    make_middleware,
    serve_static,
)


class _FakeContext:
    def __init__(self, url: str):
        self.url = url
        self.response: Optional[StaticResponse] = None
        self.sent = False

    def send_raw(self, response: StaticResponse) -> "_FakeContext":
        self.response = response
        return self

    def force_send(self) -> "_FakeContext":
        self.sent = True
        return self


def _fixed(status: int):
    def resolve(url: str) -> StaticResponse:
        del url
        return StaticResponse(status=status, headers={"Content-Type": "text/plain"})

    return resolve


class AdaptTests(unittest.TestCase):
    def test_errors_pass_through_when_not_handled(self) -> None:
        for status in (403, 404):
            with self.subTest(status=status):
                ctx = _FakeContext("/missing")
                result = adapt(_fixed(status), handle_errors=False)(ctx)

                self.assertIs(ctx, result)
                self.assertFalse(ctx.sent)
                self.assertIsNone(ctx.response)

    def test_errors_are_sent_when_handled(self) -> None:
        ctx = _FakeContext("/missing")
        adapt(_fixed(404), handle_errors=True)(ctx)

        self.assertTrue(ctx.sent)
        self.assertEqual(404, ctx.response.status)

    def test_success_and_redirect_are_always_sent(self) -> None:
        for status in (200, 308):
            with self.subTest(status=status):
                ctx = _FakeContext("/a")
                adapt(_fixed(status), handle_errors=False)(ctx)

                self.assertTrue(ctx.sent)
                self.assertEqual(status, ctx.response.status)


class ConstructorTests(unittest.TestCase):
    def setUp(self) -> None:
        temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(temp_dir.cleanup)
        self.root = Path(temp_dir.name)
        (self.root / "app.css").write_text("body{}", encoding="utf-8")

    def test_make_handler_returns_responses(self) -> None:
        handler = make_handler(self.root)
        response = handler("http://localhost/app.css")

        self.assertEqual(200, response.status)
        self.assertEqual("text/css; charset=utf-8", response.header("Content-Type"))

    def test_make_middleware_honours_handle_errors(self) -> None:
        middleware = make_middleware(self.root, StaticOptions(handle_errors=False))

        missing = _FakeContext("http://localhost/missing.css")
        self.assertIs(missing, middleware(missing))
        self.assertFalse(missing.sent)

        found = middleware(_FakeContext("http://localhost/app.css"))
        self.assertTrue(found.sent)
        self.assertEqual(b"body{}", found.response.body)

    def test_make_middleware_sends_errors_by_default(self) -> None:
        ctx = make_middleware(self.root)(_FakeContext("http://localhost/missing.css"))

        self.assertTrue(ctx.sent)
        self.assertEqual(404, ctx.response.status)

    def test_serve_static_dispatches_on_middleware_mode(self) -> None:
        handler = serve_static(self.root)
        self.assertEqual(200, handler("/app.css").status)

        middleware = serve_static(self.root, StaticOptions(middleware_mode="bao"))
        ctx = middleware(_FakeContext("/app.css"))
        self.assertTrue(ctx.sent)


if __name__ == "__main__":
    unittest.main()
