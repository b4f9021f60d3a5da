import contextlib
import importlib
import io
import os
import sys
import time
import unittest
from unittest import mock

from typer.testing import CliRunner

from scorelink import __version__
from scorelink.cli import app
from scorelink.cli.config import GLOBAL_OPTIONS, ClientConfig
from scorelink.cli.commands.exchange import run_exchange
from scorelink.protocol import MatchState
from scorelink.utils.exceptions import ConnectionClosedError, TransportError

from .relay_fixtures import ListeningRelay, relay_pair


class TestCodecCommands(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def tearDown(self):
        GLOBAL_OPTIONS.clear()

    def test_pack(self):
        result = self.runner.invoke(app, ["pack", "<I", "1"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("01 00 00 00", result.output)
        self.assertIn("4 bytes", result.output)

    def test_pack_booleans_and_negative_values(self):
        result = self.runner.invoke(app, ["pack", "<?h", "--", "true", "-2"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("01 FE FF", result.output)

    def test_pack_value_count_mismatch(self):
        result = self.runner.invoke(app, ["pack", "<ii", "1"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("UsageError", result.output)

    def test_pack_unparseable_value(self):
        result = self.runner.invoke(app, ["pack", "<i", "twelve"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("ValidationError", result.output)

    def test_unpack(self):
        result = self.runner.invoke(app, ["unpack", "<?h?hh", "01 2A 00 00 64 00 32 00"])
        self.assertEqual(result.exit_code, 0, result.output)
        for expected in ("True", "42", "False", "100", "50", "int16"):
            self.assertIn(expected, result.output)

    def test_unpack_with_kinds(self):
        result = self.runner.invoke(app, ["unpack", "<H", "0100", "--kinds", "bool"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("True", result.output)

    def test_unpack_kind_count_mismatch(self):
        result = self.runner.invoke(app, ["unpack", "<?h?hh", "0000000000000000", "--kinds", "bool,int16"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("UsageError", result.output)

    def test_unpack_short_buffer(self):
        result = self.runner.invoke(app, ["unpack", "<I", "01 02"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("BufferTooShortError", result.output)

    def test_calcsize(self):
        result = self.runner.invoke(app, ["calcsize", "<?h?hh"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("8", result.output)

    def test_calcsize_unknown_directive(self):
        result = self.runner.invoke(app, ["calcsize", "<hz"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("UnsupportedTypeError", result.output)

    def test_version(self):
        result = self.runner.invoke(app, ["version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_no_command_prints_help(self):
        result = self.runner.invoke(app, [])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("exchange", result.output)


class TestConfigCommand(unittest.TestCase):
    def tearDown(self):
        GLOBAL_OPTIONS.clear()

    def test_save_and_show(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(app, ["config", "--host", "relay.test", "--port", "14000",
                                         "--player", "2", "--save"])
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertTrue(os.path.isfile(".scorelink"))

            result = runner.invoke(app, ["config"])
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertIn("relay.test", result.output)
            self.assertIn("14000", result.output)

    def test_invalid_player(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(app, ["config", "--player", "4"])
            self.assertEqual(result.exit_code, 1)
            self.assertIn("ValidationError", result.output)


class TestRunExchange(unittest.TestCase):
    def tearDown(self):
        GLOBAL_OPTIONS.clear()

    def test_rounds_are_reported(self):
        states = [MatchState(True, 1, True, 2, 10), MatchState(True, 3, False, 4, 20)]
        transport, relay = relay_pair(states=states)
        updates = []

        shared = run_exchange(ClientConfig(player_number=2), score=7, rounds=2,
                              transport=transport, on_update=updates.append)
        relay.join(5)

        self.assertEqual([u.revision for u in updates], [1, 2])
        self.assertEqual([u.state for u in updates], states)
        self.assertEqual(shared.snapshot().p1_score, 20)
        self.assertEqual(shared.snapshot().p2_score, 7)
        self.assertEqual(relay.player, b"2")
        self.assertEqual(relay.scores, [b"7", b"7"])

    def test_slow_callback_still_sees_every_round(self):
        states = [MatchState(True, i, True, i, i * 10) for i in range(4)]
        transport, relay = relay_pair(states=states)
        seen = []

        def slow_update(snapshot):
            seen.append(snapshot.revision)
            time.sleep(0.2)

        run_exchange(ClientConfig(), score=1, rounds=4, transport=transport, on_update=slow_update)
        relay.join(5)

        self.assertEqual(seen, [1, 2, 3, 4])

    def test_failing_callback_does_not_wait_on_stalled_relay(self):
        # relay answers the first round only, then goes quiet
        transport, relay = relay_pair(states=[MatchState(True, 1, True, 2, 3)])

        def failing_update(snapshot):
            raise RuntimeError("display crashed")

        started = time.monotonic()
        with self.assertRaises(RuntimeError):
            run_exchange(ClientConfig(), score=0, rounds=5, transport=transport, on_update=failing_update)
        self.assertLess(time.monotonic() - started, 3)

        relay.join(5)
        self.assertFalse(relay.is_alive())

    def test_fractional_score_is_sent_as_text(self):
        transport, relay = relay_pair(states=[MatchState(False, 0, False, 0, 0)])
        run_exchange(ClientConfig(), score=2.5, rounds=1, transport=transport)
        relay.join(5)
        self.assertEqual(relay.scores, [b"2.5"])

    def test_worker_error_is_raised(self):
        transport, relay = relay_pair(close_after_handshake=True)
        with self.assertRaises(ConnectionClosedError):
            run_exchange(ClientConfig(), score=0, rounds=1, transport=transport)
        relay.join(5)

    def test_exchange_command_reports_connection_failure(self):
        import socket

        unused = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        unused.bind(("127.0.0.1", 0))
        port = unused.getsockname()[1]
        unused.close()

        result = CliRunner().invoke(app, ["exchange", "--host", "127.0.0.1", "--port", str(port),
                                          "--timeout", "2"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("TransportError", result.output)

    def test_exchange_command_accepts_fractional_score(self):
        relay = ListeningRelay(states=[MatchState(True, 5, False, 6, 40)])
        relay.start()

        result = CliRunner().invoke(app, ["exchange", "--host", "127.0.0.1", "--port", str(relay.port),
                                          "--player", "2", "--score", "2.5", "--timeout", "5"])
        relay.join(5)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(relay.player, b"2")
        self.assertEqual(relay.scores, [b"2.5"])
        self.assertIn("2.5", result.output)
        self.assertIn("40", result.output)


class TestMainEntryPoint(unittest.TestCase):
    def setUp(self):
        self.app_module = importlib.import_module("scorelink.cli.app")

    def tearDown(self):
        GLOBAL_OPTIONS.clear()

    def _run_main(self, argv):
        out = io.StringIO()
        with mock.patch.object(sys, "argv", argv), contextlib.redirect_stdout(out):
            with self.assertRaises(SystemExit) as ctx:
                self.app_module.main()
        return ctx.exception.code, out.getvalue()

    def test_command_exit_code_is_passed_through(self):
        code, output = self._run_main(["scorelink", "calcsize", "<hz"])
        self.assertEqual(code, 1)
        self.assertIn("UnsupportedTypeError", output)

    def test_success_exits_zero(self):
        code, output = self._run_main(["scorelink", "calcsize", "<?h?hh"])
        self.assertEqual(code, 0)
        self.assertIn("8", output)

    def test_escaped_library_error_becomes_panel(self):
        failing_app = mock.Mock(side_effect=TransportError("relay went away"))
        with mock.patch.object(self.app_module, "app", failing_app):
            code, output = self._run_main(["scorelink", "exchange"])
        self.assertEqual(code, 1)
        self.assertIn("TransportError", output)
        self.assertIn("relay went away", output)

    def test_usage_error_exit_code(self):
        out, err = io.StringIO(), io.StringIO()
        with mock.patch.object(sys, "argv", ["scorelink", "no-such-command"]), \
                contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                self.app_module.main()
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
