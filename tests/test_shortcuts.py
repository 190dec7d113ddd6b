"""Tests for the application runner: dispatch, reload and binding checks."""

import os
import tempfile
import textwrap
import unittest

from watchdog.events import FileModifiedEvent  # pylint: disable=import-error

# pylint: disable=missing-function-docstring
from doubletap.action import DeferredLookup
from doubletap.events import KeyEvent, KeyEventKind
from doubletap.keymap import Keymap
from doubletap.metadata import MetadataStore
from doubletap.platforms import QueueHost
from doubletap.shortcuts import App, _HotReloader, check_bindings
from doubletap.trampoline import Outcome, Trampoline

_BINDINGS = """
from doubletap.shortcuts import App

app = App()


@app.on("{key}", interval=0.05)
def duplicate(_):
    \"\"\"Duplicate the current line.\"\"\"
"""


class AppDispatchTests(unittest.TestCase):
    """Events walk the active keymaps and reach trampolines with their full key."""

    def setUp(self):
        self.host = QueueHost()
        self.store = MetadataStore()
        self.app = App(interval=0.01, host=self.host, store=self.store)
        self.calls = []

    def _record(self, name):
        def _run(context):
            self.calls.append((name, context.keys))
            return name

        return _run

    def _type(self, *codes):
        result = None
        for code in codes:
            result = self.app.dispatch(KeyEvent(code))
        return result

    def test_plain_binding(self):
        self.app.bind("C-x C-s", self._record("save"))

        self.assertIsNone(self._type("C-x"))
        self.assertEqual(self._type("C-s"), "save")
        self.assertEqual(self.calls, [("save", ("C-x", "C-s"))])

    def test_double_tap_under_prefix(self):
        self.app.bind("C-x .", self._record("single"))
        trampoline = self.app.on("C-x .")(self._record("double"))
        self.assertIsInstance(trampoline, Trampoline)
        self.host.push(".")

        outcome = self._type("C-x", ".")

        self.assertEqual(outcome, Outcome.DOUBLE)
        self.assertEqual(self.calls, [("double", ("C-x", "."))])

    def test_binding_after_double_tap_becomes_the_single_action(self):
        self.app.on("<f2>")(self._record("double"))
        self.app.bind("<f2>", self._record("single"))

        self.assertEqual(self._type("f2"), Outcome.SINGLE_TIMEOUT)
        self.assertEqual(self.calls, [("single", ("f2",))])

    def test_requeued_key_is_dispatched_next(self):
        self.app.bind("<f2>", self._record("single"))
        self.app.bind("a", self._record("a"))
        self.app.on("<f2>")(self._record("double"))
        self.host.push("a")

        self.assertEqual(self._type("f2"), Outcome.SINGLE_OTHER_KEY)
        event = self.host.read_event(timeout=0)
        self.assertEqual(self.app.dispatch(event), "a")
        self.assertEqual(self.calls, [("single", ("f2",)), ("a", ("a",))])

    def test_higher_priority_keymap_defers_to_global(self):
        mode = self.app.add_keymap(Keymap("mode"))
        self.app.bind("<f2>", self._record("global"))
        trampoline = self.app.on("<f2>", keymap=mode)(self._record("double"))

        self.assertIs(mode.lookup(("f2",)), trampoline)
        self.assertEqual(trampoline.record.single_action, DeferredLookup(mode, ("f2",)))
        self.assertIsNot(self.app.global_keymap.lookup(("f2",)), trampoline)

        self.assertEqual(self._type("f2"), Outcome.SINGLE_TIMEOUT)
        self.assertEqual(self.calls, [("global", ("f2",))])

    def test_empty_keymap_is_still_the_target(self):
        mode = self.app.add_keymap(Keymap("mode"))
        self.assertEqual(len(mode), 0)

        self.app.bind("a", self._record("a"), keymap=mode)
        self.app.on("<f2>", keymap=Keymap("other"))(self._record("double"))

        self.assertIsNotNone(mode.lookup(("a",)))
        self.assertIsNone(self.app.global_keymap.lookup(("a",)))
        self.assertIsNone(self.app.global_keymap.lookup(("f2",)))

    def test_unbound_key_resets_prefix(self):
        self.app.bind("a", self._record("a"))

        self.assertIsNone(self._type("C-x", "z"))
        self.assertEqual(self._type("a"), "a")

    def test_released_events_are_ignored(self):
        self.app.bind("a", self._record("a"))

        self.assertIsNone(self.app.dispatch(KeyEvent("a", kind=KeyEventKind.RELEASED)))
        self.assertEqual(self.calls, [])

    def test_unbind_removes_double_tap_and_single(self):
        self.app.bind("<f2>", self._record("single"))
        self.app.on("<f2>")(self._record("double"))

        self.app.unbind("<f2>")

        self.assertIsNone(self.app.global_keymap.lookup(("f2",)))
        self.assertEqual(len(self.store), 0)


class BindingFileTests(unittest.TestCase):
    """Binding files can be checked and hot reloaded."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()  # pylint: disable=consider-using-with
        self.path = os.path.join(self.tmpdir.name, "bindings.py")

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, key):
        with open(self.path, "w", encoding="utf-8") as handle:
            handle.write(textwrap.dedent(_BINDINGS.format(key=key)))

    def test_check_bindings(self):
        self._write("C-c d")

        declarations = check_bindings(self.path)

        self.assertEqual(len(declarations), 1)
        self.assertEqual(declarations[0].key, ("C-c", "d"))
        self.assertEqual(declarations[0].interval, 0.05)
        self.assertEqual(declarations[0].doc, "Duplicate the current line.")
        self.assertEqual(declarations[0].action.name, "duplicate")

    def test_check_bindings_without_declarations(self):
        with open(self.path, "w", encoding="utf-8") as handle:
            handle.write("x = 1\n")

        with self.assertRaises(ValueError):
            check_bindings(self.path)

    def test_reload_replaces_declared_double_taps(self):
        store = MetadataStore()
        app = App(host=QueueHost(), store=store)
        self._write("C-c d")
        app.reload(self.path)
        self.assertIsInstance(app.global_keymap.lookup(("C-c", "d")), Trampoline)

        self._write("C-c e")
        app.reload(self.path)

        self.assertIsNone(app.global_keymap.lookup(("C-c", "d")))
        self.assertIsInstance(app.global_keymap.lookup(("C-c", "e")), Trampoline)
        self.assertEqual([r.key for r in store.records()], [("C-c", "e")])
        self.assertEqual([d.key for d in app.declarations], [("C-c", "e")])
        self.assertIs(store.records()[0].table, app.global_keymap)

        app.close()
        self.assertEqual(len(store), 0)
        self.assertIsNone(app.global_keymap.lookup(("C-c", "e")))

    def test_modified_bindings_file_is_reloaded(self):
        app = App(host=QueueHost(), store=MetadataStore())
        self._write("C-c d")
        app.reload(self.path)
        reloader = _HotReloader(app)

        self._write("C-c f")
        reloader.on_modified(FileModifiedEvent(self.path))

        self.assertIsInstance(app.global_keymap.lookup(("C-c", "f")), Trampoline)

    def test_unrelated_files_are_ignored(self):
        app = App(host=QueueHost(), store=MetadataStore())
        reloader = _HotReloader(app)

        reloader.on_modified(FileModifiedEvent(self.path))

        self.assertEqual(reloader.last_modified, 0)


if __name__ == "__main__":
    unittest.main()
