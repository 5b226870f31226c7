import importlib
import os
import tempfile
import time
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from fastapi.testclient import TestClient


class MainModuleTests(unittest.TestCase):
    def _load_main_module(self, delay_s: float = 3):
        td = tempfile.TemporaryDirectory()
        self.addCleanup(td.cleanup)
        path = Path(td.name) / "targets.yml"
        path.write_text(f"defaults:\n  delay_s: {delay_s}\ntargets:\n  - http://a.local\n")

        config_mod = importlib.import_module("link_monitor.config")
        self.addCleanup(importlib.reload, config_mod)
        os.environ["LINK_MONITOR_TARGETS_PATH"] = str(path)
        self.addCleanup(os.environ.pop, "LINK_MONITOR_TARGETS_PATH", None)

        importlib.reload(config_mod)
        importlib.reload(importlib.import_module("link_monitor.registry"))
        return importlib.reload(importlib.import_module("link_monitor.main"))

    def _wait_until(self, predicate, timeout: float = 5.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(0.01)
        return predicate()

    def test_health(self) -> None:
        main_mod = self._load_main_module()

        self.assertEqual(main_mod.health(), {"status": "ok"})

    def test_nothing_built_on_import(self) -> None:
        main_mod = self._load_main_module()

        self.assertFalse(hasattr(main_mod, "coordinator"))
        self.assertFalse(hasattr(main_mod.app.state, "coordinator"))

    def test_config_unavailable_before_startup(self) -> None:
        main_mod = self._load_main_module()

        resp = TestClient(main_mod.app).get("/config")

        self.assertEqual(resp.status_code, 503)

    def test_config_reflects_targets_file(self) -> None:
        main_mod = self._load_main_module()

        with patch(
            "link_monitor.checks.http_check.requests.get",
            return_value=Mock(status_code=200),
        ), patch("link_monitor.formatting.print", create=True):
            with TestClient(main_mod.app) as client:
                payload = client.get("/config").json()

        self.assertEqual(payload["targets"], ["http://a.local"])
        self.assertEqual(payload["delay_s"], 3)
        self.assertIsNone(payload["timeout_s"])
        self.assertIsNone(payload["connect_timeout_s"])
        self.assertEqual(payload["max_in_flight"], 0)

    def test_lifespan_checks_stops_and_restarts(self) -> None:
        main_mod = self._load_main_module(delay_s=0.01)
        printed = Mock()

        with patch(
            "link_monitor.checks.http_check.requests.get",
            return_value=Mock(status_code=200),
        ) as mock_get, patch("link_monitor.formatting.print", printed, create=True):
            with TestClient(main_mod.app):
                self.assertTrue(self._wait_until(lambda: printed.call_count >= 3))
                first = main_mod.app.state.coordinator

            self.assertTrue(first.stopped)
            self.assertTrue(first.channel.closed)
            calls_after_first = mock_get.call_count

            with TestClient(main_mod.app):
                self.assertTrue(
                    self._wait_until(lambda: mock_get.call_count >= calls_after_first + 3)
                )
                second = main_mod.app.state.coordinator

            self.assertIsNot(first, second)
            self.assertTrue(second.stopped)
            self.assertTrue(second.channel.closed)

        printed.assert_any_call("http://a.local is up!", flush=True)

    def test_openapi_schema_generation(self) -> None:
        main_mod = self._load_main_module()

        schema = main_mod.app.openapi()

        self.assertIn("/health", schema["paths"])
        self.assertIn("/config", schema["paths"])

    def test_run_builds_once_and_stops_on_interrupt(self) -> None:
        main_mod = self._load_main_module()
        fake = Mock()
        fake.run_forever.side_effect = KeyboardInterrupt

        with patch.object(main_mod, "build_coordinator", return_value=fake) as build, patch.object(
            main_mod, "configure_logging"
        ):
            main_mod.run()

        build.assert_called_once_with()
        fake.stop.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
