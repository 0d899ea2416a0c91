"""
Test cases for the aiohttp backend client against a stub backend.
"""
import io
import unittest
from contextlib import redirect_stdout
from unittest import mock
import sys
from pathlib import Path

import aiohttp
from aiohttp import web
from aiohttp.test_utils import AioHTTPTestCase

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hearme import commands
from hearme.client import BackendClient
from hearme.commands import send_sos, translate_text
from hearme.config import BackendConfig


class StubBackendMixin:
    """aiohttp stand-in for the HearMe backend routes."""

    async def get_application(self):
        self.received = []

        async def logs_post(request):
            body = await request.json()
            self.received.append(("logs", body))
            return web.json_response({"status": "ok", "entry": body})

        async def logs_get(request):
            limit = int(request.query.get("limit", "50"))
            return web.json_response([{"id": str(i)} for i in range(limit)])

        async def sos(request):
            self.received.append(("sos", await request.json()))
            return web.json_response({"status": "ok", "message": "SOS recorded"})

        async def translate(request):
            body = await request.json()
            return web.json_response({"status": "ok", "translatedText": f"[{body['target']} mock] {body['text']}"})

        async def health(request):
            return web.json_response({"status": "ok"})

        async def broken(request):
            return web.json_response({"error": "boom"}, status=500)

        app = web.Application()
        app.router.add_post("/api/logs", logs_post)
        app.router.add_get("/api/logs", logs_get)
        app.router.add_post("/api/sos", sos)
        app.router.add_post("/api/translate", translate)
        app.router.add_get("/api/health", health)
        app.router.add_post("/broken/api/logs", broken)
        app.router.add_post("/broken/api/sos", broken)
        app.router.add_post("/broken/api/translate", broken)
        return app

    def make_client(self, prefix: str = "") -> BackendClient:
        base_url = str(self.server.make_url(prefix or "/"))
        return BackendClient.from_config(BackendConfig(base_url=base_url, user_id="student1", timeout_s=2.0))


class TestBackendClient(StubBackendMixin, AioHTTPTestCase):

    async def test_submit_log(self):
        client = self.make_client()
        try:
            result = await client.submit_log("gesture", {"label": "fist"})
        finally:
            await client.close()

        self.assertEqual(result["status"], "ok")
        self.assertEqual(self.received, [("logs", {
            "type": "gesture", "data": {"label": "fist"}, "userId": "student1"
        })])

    async def test_sos_translate_health(self):
        client = self.make_client()
        try:
            sos = await client.send_sos(location="Library", message="help")
            translated = await client.translate("hello", target="es")
            health = await client.health()
            logs = await client.recent_logs(limit=3)
        finally:
            await client.close()

        self.assertEqual(sos["message"], "SOS recorded")
        self.assertEqual(self.received[0][1]["location"], "Library")
        self.assertEqual(translated, "[es mock] hello")
        self.assertEqual(health, {"status": "ok"})
        self.assertEqual(len(logs), 3)

    async def test_error_status_raises(self):
        client = self.make_client("/broken")
        try:
            with self.assertRaises(aiohttp.ClientResponseError):
                await client.submit_log("gesture", {"label": "fist"})
        finally:
            await client.close()

    async def test_close_is_idempotent(self):
        client = self.make_client()
        await client.health()
        await client.close()
        await client.close()


class TestCommands(StubBackendMixin, AioHTTPTestCase):
    """SOS and translate actions print the backend's answer."""

    async def test_sos_uses_web_ui_payload(self):
        client = self.make_client()
        out = io.StringIO()
        try:
            with redirect_stdout(out):
                data = await send_sos(client)
        finally:
            await client.close()

        self.assertEqual(data["message"], "SOS recorded")
        self.assertEqual(self.received, [("sos", {
            "userId": "student1", "location": "Unknown", "message": "SOS from web UI"
        })])
        self.assertIn("SOS sent: SOS recorded", out.getvalue())

    async def test_sos_failure_is_reported(self):
        client = self.make_client("/broken")
        out = io.StringIO()
        try:
            with redirect_stdout(out), self.assertLogs("hearme.commands", level="ERROR"):
                data = await send_sos(client)
        finally:
            await client.close()

        self.assertIsNone(data)
        self.assertIn("SOS failed", out.getvalue())

    async def test_translate_prints_result(self):
        client = self.make_client()
        out = io.StringIO()
        try:
            with redirect_stdout(out):
                translated = await translate_text(client, "hello", target="fr")
        finally:
            await client.close()

        self.assertEqual(translated, "[fr mock] hello")
        self.assertIn("[fr mock] hello", out.getvalue())

    async def test_translate_blank_text_not_sent(self):
        client = self.make_client()
        out = io.StringIO()
        try:
            with redirect_stdout(out):
                translated = await translate_text(client, "   ")
        finally:
            await client.close()

        self.assertIsNone(translated)
        self.assertIn("Enter text", out.getvalue())

    async def test_translate_failure_is_reported(self):
        client = self.make_client("/broken")
        out = io.StringIO()
        try:
            with redirect_stdout(out), self.assertLogs("hearme.commands", level="ERROR"):
                translated = await translate_text(client, "hello")
        finally:
            await client.close()

        self.assertIsNone(translated)
        self.assertIn("Translate error", out.getvalue())


class TestCommandLine(unittest.TestCase):
    """hearme-sos / hearme-translate argument handling."""

    def test_sos_cli_sends_defaults(self):
        with mock.patch.object(sys, "argv", ["hearme-sos", "--yes"]), \
                mock.patch.object(commands, "send_sos", new=mock.AsyncMock()) as sos:
            commands.sos_cli()

        sos.assert_awaited_once()
        _, location, message = sos.await_args.args
        self.assertEqual((location, message), ("Unknown", "SOS from web UI"))

    def test_sos_cli_can_be_cancelled(self):
        out = io.StringIO()
        with mock.patch.object(sys, "argv", ["hearme-sos"]), \
                mock.patch("builtins.input", return_value="n"), \
                mock.patch.object(commands, "send_sos", new=mock.AsyncMock()) as sos, \
                redirect_stdout(out):
            commands.sos_cli()

        sos.assert_not_awaited()
        self.assertIn("SOS cancelled", out.getvalue())

    def test_translate_cli_joins_words(self):
        with mock.patch.object(sys, "argv", ["hearme-translate", "good", "morning", "--target", "hi"]), \
                mock.patch.object(commands, "translate_text", new=mock.AsyncMock()) as translate:
            commands.translate_cli()

        _, text, target = translate.await_args.args
        self.assertEqual((text, target), ("good morning", "hi"))


if __name__ == '__main__':
    unittest.main()
