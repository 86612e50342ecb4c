"""Bootstrap tests: raw mode is always released around the loop."""

from __future__ import annotations

import unittest
from contextlib import contextmanager
from unittest import mock

from kilo import app
from kilo.document import Document
from kilo.key_handlers import HELP_MESSAGE


class _FakeController:
    instances: list["_FakeController"] = []

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.events: list[str] = []
        _FakeController.instances.append(self)

    @contextmanager
    def raw_mode(self):
        self.events.append("enter")
        try:
            yield self
        finally:
            self.events.append("exit")

    def window_size(self) -> tuple[int, int]:
        return 24, 80


class RunEditorTests(unittest.TestCase):
    def setUp(self) -> None:
        _FakeController.instances.clear()
        patcher = mock.patch("kilo.app.TerminalController", _FakeController)
        patcher.start()
        self.addCleanup(patcher.stop)
        for name in ("stdin", "stdout"):
            stream = mock.patch(f"kilo.app.sys.{name}")
            stream.start().fileno.return_value = 0 if name == "stdin" else 1
            self.addCleanup(stream.stop)

    def test_state_is_sized_and_loop_runs_inside_raw_mode(self) -> None:
        document = Document()
        document.append("hello")

        def fake_loop(state, terminal) -> None:
            terminal.events.append("loop")
            self.assertEqual((state.screenrows, state.screencols), (22, 80))
            self.assertEqual(state.filename, "hello.txt")
            self.assertEqual(state.status.text, HELP_MESSAGE)

        with mock.patch("kilo.app.run_main_loop", side_effect=fake_loop):
            app.run_editor(document, filename="hello.txt")

        self.assertEqual(_FakeController.instances[0].events, ["enter", "loop", "exit"])

    def test_raw_mode_released_when_loop_raises(self) -> None:
        with mock.patch("kilo.app.run_main_loop", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                app.run_editor(Document())

        self.assertEqual(_FakeController.instances[0].events, ["enter", "exit"])


if __name__ == "__main__":
    unittest.main()
