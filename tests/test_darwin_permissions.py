"""Tests for macOS permission prompting behavior."""

import os
import sys
import unittest
from unittest.mock import patch

from tests.pynput_utils import require_pynput

require_pynput()

# pylint: disable=wrong-import-position
from doubletap.platforms.common import PynputHost
from doubletap.platforms.darwin import MacPynputHost


class _Listener:
    """A started listener reporting a fixed trust flag."""

    def __init__(self, trusted):
        self.IS_TRUSTED = trusted  # pylint: disable=invalid-name
        self.waited = False

    def wait(self):
        self.waited = True


def _start_with(listener):
    def _start(host):
        host._listener = listener  # pylint: disable=protected-access

    return _start


class MacPermissionPromptTests(unittest.TestCase):
    """macOS keyboard permissions should behave differently in daemons."""

    def setUp(self):
        MacPynputHost._prompted = False  # pylint: disable=protected-access

    def tearDown(self):
        MacPynputHost._prompted = False  # pylint: disable=protected-access

    def test_interactive_sessions_open_settings(self):
        """When attached to a TTY, we should open System Settings to request permission."""
        host = MacPynputHost()

        with patch("builtins.print") as print_mock, \
                patch("doubletap.platforms.darwin.subprocess.Popen") as popen_mock, \
                patch("doubletap.platforms.darwin._running_interactively", return_value=True):
            host._prompt_permissions("boom")  # pylint: disable=protected-access

        popen_mock.assert_called_once()
        print_mock.assert_called_once()
        self.assertIn("Input Monitoring", print_mock.call_args.args[0])

    def test_daemon_mode_logs_without_prompting(self):
        """Without a TTY, warn to stderr but do not try to open settings UI."""
        host = MacPynputHost()

        with patch("builtins.print") as print_mock, \
                patch("doubletap.platforms.darwin.subprocess.Popen") as popen_mock, \
                patch("doubletap.platforms.darwin._running_interactively", return_value=False):
            host._prompt_permissions("boom")  # pylint: disable=protected-access

        popen_mock.assert_not_called()
        print_mock.assert_called_once()
        args, kwargs = print_mock.call_args
        self.assertIn("Input Monitoring", args[0])
        self.assertEqual(kwargs.get("file"), sys.stderr)

    def test_prompt_only_once(self):
        """Repeated failures do not reopen the settings pane."""
        host = MacPynputHost()

        with patch("builtins.print"), \
                patch("doubletap.platforms.darwin.subprocess.Popen") as popen_mock, \
                patch("doubletap.platforms.darwin._running_interactively", return_value=True):
            host._prompt_permissions("boom")  # pylint: disable=protected-access
            host._prompt_permissions("boom")  # pylint: disable=protected-access

        popen_mock.assert_called_once()

    def test_prompt_can_be_disabled(self):
        """DOUBLETAP_SKIP_MAC_PROMPT silences the prompt entirely."""
        host = MacPynputHost()

        with patch.dict(os.environ, {"DOUBLETAP_SKIP_MAC_PROMPT": "1"}), \
                patch("builtins.print") as print_mock, \
                patch("doubletap.platforms.darwin.subprocess.Popen") as popen_mock:
            host._prompt_permissions("boom")  # pylint: disable=protected-access

        popen_mock.assert_not_called()
        print_mock.assert_not_called()


class MacListenerTrustTests(unittest.TestCase):
    """An untrusted listener is reported even though it started."""

    def test_untrusted_listener_prompts(self):
        listener = _Listener(trusted=False)
        host = MacPynputHost()

        with patch.object(PynputHost, "start", _start_with(listener)), \
                patch.object(MacPynputHost, "_prompt_permissions") as prompt_mock:
            host.start()

        self.assertTrue(listener.waited)
        prompt_mock.assert_called_once()
        self.assertIn("not trusted", prompt_mock.call_args.args[0])

    def test_trusted_listener_is_quiet(self):
        host = MacPynputHost()

        with patch.object(PynputHost, "start", _start_with(_Listener(trusted=True))), \
                patch.object(MacPynputHost, "_prompt_permissions") as prompt_mock:
            host.start()

        prompt_mock.assert_not_called()

    def test_failed_start_prompts_and_reraises(self):
        host = MacPynputHost()

        with patch.object(PynputHost, "start", side_effect=OSError("denied")), \
                patch.object(MacPynputHost, "_prompt_permissions") as prompt_mock:
            with self.assertRaises(OSError):
                host.start()

        prompt_mock.assert_called_once()
        self.assertIn("denied", prompt_mock.call_args.args[0])


if __name__ == "__main__":
    unittest.main()
