"""Double-tap application runner and hot-reload utilities."""

# pylint: disable=missing-function-docstring,missing-class-docstring,too-few-public-methods
# pylint: disable=too-many-instance-attributes

import argparse
import importlib.util
import inspect
import os
import sys
import threading
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional, Tuple

from watchdog.events import FileSystemEvent, FileSystemEventHandler  # pylint: disable=import-error
from watchdog.observers import Observer  # pylint: disable=import-error

from doubletap.action import Command, Context
from doubletap.events import KeyEvent
from doubletap.key_utils import CanonicalKey, canonicalize, describe_key
from doubletap.keymap import Binding, Keymap
from doubletap.metadata import MetadataStore
from doubletap.platforms import Host, QueueHost, create_host
from doubletap.registrar import Registrar
from doubletap.trampoline import Trampoline
from doubletap.util import debug, error

__all__ = ["App", "Declaration", "check_bindings"]

_POLL_SECONDS = 0.1


@dataclass
class Declaration:
    """A double-tap binding as declared with ``App.on``."""
    key: CanonicalKey
    keymap: Keymap
    action: Command
    interval: Optional[float] = None
    doc: Optional[str] = None


class App:
    # Set while a bindings file is imported for reloading or checking, so the
    # App it creates does not grab the keyboard.
    _loading = False

    def __init__(self,
                 interval: Optional[float] = None,
                 host: Optional[Host] = None,
                 store: Optional[MetadataStore] = None,
                 ):
        if host is None:
            host = QueueHost() if App._loading else create_host()
        self.global_keymap = Keymap("global", is_global=True)
        self._host = host
        self._host.keymaps.append(self.global_keymap)
        self.registrar = Registrar(host, store=store, default_interval=interval)
        self.declarations: List[Declaration] = []
        self._pending: Tuple[str, ...] = ()
        self._running = threading.Event()

        # Hot-reload
        self._observer = None
        self._reloader = None
        self.bindings_file = None

    @property
    def host(self) -> Host:
        return self._host

    @property
    def keymaps(self) -> List[Keymap]:
        return self._host.keymaps

    def add_keymap(self, keymap: Keymap) -> Keymap:
        """Activate ``keymap`` ahead of every keymap already active."""
        self._host.keymaps.insert(0, keymap)
        return keymap

    def keymap_named(self, name: str) -> Keymap:
        for keymap in self.keymaps:
            if keymap.name == name:
                return keymap
        return self.global_keymap

    def on(self, key, *, keymap: Optional[Keymap] = None,
           interval: Optional[float] = None, doc: Optional[str] = None) -> Callable:
        canonical = canonicalize(key)
        table = keymap if keymap is not None else self.global_keymap

        def _decorator(func: Callable) -> Trampoline:
            if not callable(func):
                raise ValueError("on decorator must be used with a callable")
            command = Command(func)
            declaration = Declaration(canonical, table, command, interval, doc or func.__doc__)
            self.declarations.append(declaration)
            self._install(declaration)
            return self.registrar.trampoline_at(table, canonical)

        return _decorator

    def _install(self, declaration: Declaration) -> str:
        return self.registrar.install(
            declaration.keymap,
            declaration.key,
            declaration.action,
            interval=declaration.interval,
            doc=declaration.doc,
        )

    def bind(self, key, action, *, keymap: Optional[Keymap] = None) -> None:
        """Bind a single-press action, keeping any double-tap on the same key."""
        table = keymap if keymap is not None else self.global_keymap
        self.registrar.update_single_action(table, key, action)

    def unbind(self, key, *, keymap: Optional[Keymap] = None) -> None:
        table = keymap if keymap is not None else self.global_keymap
        canonical = canonicalize(key)
        if self.registrar.trampoline_at(table, canonical) is not None:
            self.registrar.uninstall(table, canonical)
        self._host.bind(table, canonical, None)

    def _resolve(self, keys: CanonicalKey) -> Binding:
        for table in self.keymaps:
            binding = table.lookup(keys)
            if binding is not None:
                return binding
        return None

    def dispatch(self, event: KeyEvent) -> Any:
        """Feed one input event through the active keymaps."""
        if not event.pressed:
            return None

        keys = self._pending + (event.code,)
        binding = self._resolve(keys)
        if isinstance(binding, Keymap):
            self._pending = keys
            return None

        self._pending = ()
        if binding is None:
            debug(f"{describe_key(keys)} is undefined")
            return None
        return self._host.invoke(binding, Context(self._host, keys))

    def __call__(self):
        self._host.start()
        self._running.set()

        # Hot-reload
        self._setup_hot_reload()

        try:
            while self._running.is_set():
                event = self._host.read_event(timeout=_POLL_SECONDS)
                if event is not None:
                    self.dispatch(event)
        except KeyboardInterrupt:
            self.stop()

    def stop(self):
        self._host.stop()
        self._running.clear()
        if self._observer:
            self._observer.stop()
            self._observer.join()

    def close(self):
        """Uninstall every double-tap this app declared."""
        for declaration in self.declarations:
            self.registrar.uninstall(declaration.keymap, declaration.key)

    def reload(self, path: str) -> List[str]:
        """Replace the double-taps declared in ``path`` with its current contents."""
        declarations = _load_declarations(path)
        self.registrar.uninstall_all("file", path)
        self.declarations = [d for d in self.declarations if d.action.properties.get("file") != path]
        installed = []
        for declaration in declarations:
            declaration = replace(declaration, keymap=self.keymap_named(declaration.keymap.name))
            installed.append(self._install(declaration))
            self.declarations.append(declaration)
        return installed

    def _setup_hot_reload(self):
        # Get the calling module (where the bindings are defined)
        calling_frame = inspect.stack()[2]
        module = inspect.getmodule(calling_frame[0])
        if module is None or not getattr(module, "__file__", None):
            return
        self.bindings_file = module.__file__

        self._reloader = _HotReloader(self)
        self._observer = Observer()
        self._observer.schedule(
            self._reloader, path=os.path.dirname(self.bindings_file), recursive=False
        )
        self._observer.start()


def _load_declarations(file_path: str) -> List[Declaration]:
    App._loading = True  # pylint: disable=protected-access
    try:
        spec = importlib.util.spec_from_file_location("module", file_path)
        module = importlib.util.module_from_spec(spec)
        sys.modules["module"] = module
        spec.loader.exec_module(module)

        declarations = []
        for _, obj in inspect.getmembers(module):
            if isinstance(obj, App):
                declarations.extend(obj.declarations)
                obj.close()
        return declarations
    finally:
        App._loading = False  # pylint: disable=protected-access
        # Clean up the temporary module from sys.modules
        if "module" in sys.modules:
            del sys.modules["module"]


class _HotReloader(FileSystemEventHandler):
    def __init__(self, app: App):
        self.app = app
        self.last_modified = 0

    def on_modified(self, event: FileSystemEvent):
        if self.app.registrar.store.find_by_prop("file", event.src_path):
            current_time = time.time()
            if current_time - self.last_modified > 1:  # Debounce
                self.last_modified = current_time
                debug(f"Detected change in {event.src_path}. Reloading bindings...")
                self.reload_bindings(event.src_path)

    def reload_bindings(self, path: str):
        try:
            installed = self.app.reload(path)
        except Exception as e:  # pylint: disable=broad-exception-caught
            error(f"Failed to reload bindings: {e}")  # pragma: no cover
        else:
            print(f"Bindings reloaded successfully ({len(installed)} double-taps).")


def check_bindings(file_path: str) -> List[Declaration]:
    """
    Load the bindings defined in the given file.

    Returns the declared double-taps or raises if there are none; key and
    interval errors propagate from the declarations themselves.
    """
    declarations = _load_declarations(file_path)
    if not declarations:
        raise ValueError(f"No double-tap bindings found in {file_path}")
    return declarations


def _main():
    parser = argparse.ArgumentParser(description="Validate doubletap binding files.")
    parser.add_argument("file", help="Path to the Python file that defines bindings.")
    args = parser.parse_args()

    try:
        declarations = check_bindings(args.file)
    except Exception as exc:  # pragma: no cover  # pylint: disable=broad-exception-caught
        print(exc)
        sys.exit(1)

    for declaration in declarations:
        print(f"{describe_key(declaration.key)} ({declaration.keymap.name}): "
              f"double-tap {declaration.action.name}")
    print(f"Bindings OK ({len(declarations)} double-taps) for {args.file}")


if __name__ == "__main__":  # pragma: no cover
    _main()
