"""Runtime loop and dump-path tests.

Drives ``run_main_loop`` with a fake terminal, scripted keys, and scripted
terminal sizes, and checks the non-interactive dump writer.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from hextui.reader import ByteWindowReader
from hextui.runtime import POLL_TIMEOUT_MS, run_main_loop, run_viewer, write_dump
from hextui.ui_theme import PLAIN_THEME


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


class _NonTtyOut(io.StringIO):
    def fileno(self) -> int:
        return 1


class _ScriptedKeys:
    def __init__(self, keys: list[str]) -> None:
        self.keys = list(keys)
        self.timeouts: list[int | None] = []

    def __call__(self, _fd: int, timeout_ms: int | None = None) -> str:
        self.timeouts.append(timeout_ms)
        if not self.keys:
            return "q"
        return self.keys.pop(0)


class RunMainLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "data.bin"
        self.path.write_bytes(bytes(range(40)))
        self.frames: list[tuple[int, int, int, int, int]] = []

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _draw(self, frame) -> None:
        self.frames.append(
            (
                frame.state.offset,
                frame.state.cursor.row,
                frame.state.cursor.column,
                frame.layout.bytes_per_row,
                len(frame.window),
            )
        )

    def _run(self, keys: list[str], sizes: list[tuple[int, int]], terminal=None):
        sizes = list(sizes)

        def get_terminal_size(_fallback):
            columns, lines = sizes.pop(0) if len(sizes) > 1 else sizes[0]
            return os.terminal_size((columns, lines))

        terminal = terminal or _FakeTerminal()
        read_keys = _ScriptedKeys(keys)
        with ByteWindowReader.open(self.path) as reader:
            state = run_main_loop(
                reader,
                terminal,
                0,
                self.path,
                PLAIN_THEME,
                get_terminal_size=get_terminal_size,
                read_key_fn=read_keys,
                draw=self._draw,
            )
        return state, terminal, read_keys

    def test_forty_byte_file_session(self) -> None:
        state, terminal, read_keys = self._run(
            ["PAGE_DOWN", "DOWN", "DOWN", "DOWN", "q"],
            [(79, 12)],
        )

        self.assertEqual(state.offset, 0)
        self.assertEqual((state.cursor.row, state.cursor.column), (2, 0))
        self.assertEqual(len(self.frames), 5)
        self.assertEqual(self.frames[0], (0, 0, 0, 16, 40))
        self.assertEqual(terminal.entered, 1)
        self.assertEqual(terminal.exited, 1)
        self.assertEqual(set(read_keys.timeouts), {POLL_TIMEOUT_MS})

    def test_idle_ticks_and_unbound_keys_redraw_without_changes(self) -> None:
        state, _terminal, _keys = self._run(["", "x", "ESC", "", "q"], [(79, 12)])

        self.assertEqual(len(self.frames), 5)
        self.assertEqual(set(self.frames), {(0, 0, 0, 16, 40)})
        self.assertEqual(state.offset, 0)

    def test_resize_clamps_cursor_column_before_next_draw(self) -> None:
        state, _terminal, _keys = self._run(
            ["RIGHT"] * 20 + ["", "q"],
            [(95, 12)] * 21 + [(31, 12)],
        )

        self.assertEqual(self.frames[20][2], 19)
        self.assertEqual(self.frames[21][3], 4)
        self.assertEqual(self.frames[21][2], 3)
        self.assertEqual(state.cursor.column, 3)

    def test_scrolling_small_terminal_reads_truncated_window(self) -> None:
        state, _terminal, _keys = self._run(["DOWN"] * 6 + ["q"], [(79, 4)])

        # Two visible rows of 16 bytes: offset clamps at 40 - 32.
        self.assertEqual(state.offset, 8)
        self.assertEqual(state.cursor.row, 1)
        self.assertTrue(all(frame[4] <= 32 for frame in self.frames))

    def test_read_error_propagates_and_restores_terminal(self) -> None:
        terminal = _FakeTerminal()
        with ByteWindowReader.open(self.path) as reader:
            with mock.patch.object(reader, "read_window", side_effect=OSError("I/O error")):
                with self.assertRaises(OSError):
                    run_main_loop(
                        reader,
                        terminal,
                        0,
                        self.path,
                        PLAIN_THEME,
                        get_terminal_size=lambda _fallback: os.terminal_size((79, 12)),
                        read_key_fn=_ScriptedKeys([]),
                        draw=self._draw,
                    )

        self.assertEqual(terminal.exited, 1)
        self.assertEqual(self.frames, [])


class DumpTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "data.bin"
        self.path.write_bytes(b"Hello, hex!\x00\x01" + bytes(range(0x41, 0x41 + 20)))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_write_dump_emits_every_row(self) -> None:
        out = io.StringIO()
        with ByteWindowReader.open(self.path) as reader:
            write_dump(reader, out, bytes_per_row=16)

        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[0].startswith("00000000    48 65 6C 6C 6F"))
        self.assertTrue(lines[0].endswith("Hello, hex!..ABC"))
        self.assertTrue(lines[2].startswith("00000020    54"))
        self.assertNotIn("\x1b[", out.getvalue())

    def test_write_dump_colorizes_with_pygments(self) -> None:
        out = io.StringIO()
        with ByteWindowReader.open(self.path) as reader:
            write_dump(reader, out, colorize=True, style="monokai")

        self.assertIn("\x1b[", out.getvalue())
        self.assertIn("00000000", out.getvalue())

    def test_write_dump_of_empty_file_writes_nothing(self) -> None:
        empty = Path(self._tmp.name) / "empty.bin"
        empty.write_bytes(b"")
        out = io.StringIO()

        with ByteWindowReader.open(empty) as reader:
            write_dump(reader, out)

        self.assertEqual(out.getvalue(), "")

    def test_run_viewer_dumps_when_not_interactive(self) -> None:
        out = _NonTtyOut()
        with mock.patch("hextui.runtime.os.isatty", return_value=False), mock.patch(
            "hextui.runtime.sys.stdin"
        ) as stdin_mock, mock.patch("hextui.runtime.sys.stdout", out), mock.patch(
            "hextui.runtime.run_main_loop"
        ) as loop_mock:
            stdin_mock.fileno.return_value = 0
            run_viewer(self.path, bytes_per_row=8)

        loop_mock.assert_not_called()
        self.assertEqual(len(out.getvalue().splitlines()), 5)

    def test_run_viewer_enters_loop_on_tty(self) -> None:
        with mock.patch("hextui.runtime.os.isatty", return_value=True), mock.patch(
            "hextui.runtime.sys"
        ) as sys_mock, mock.patch("hextui.runtime.TerminalController") as controller_cls, mock.patch(
            "hextui.runtime.run_main_loop"
        ) as loop_mock:
            sys_mock.stdin.fileno.return_value = 0
            sys_mock.stdout.fileno.return_value = 1
            run_viewer(self.path, theme_name="ocean")

        controller_cls.assert_called_once_with(0, 1)
        loop_mock.assert_called_once()
        reader, _terminal, stdin_fd, path, theme = loop_mock.call_args.args
        self.assertEqual(reader.size, 33)
        self.assertEqual(stdin_fd, 0)
        self.assertEqual(path, self.path)
        self.assertEqual(theme.name, "ocean")


if __name__ == "__main__":
    unittest.main()
