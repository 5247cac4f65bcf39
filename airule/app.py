"""Interactive selection of rule files and copying of the chosen ones."""

from __future__ import annotations

import functools
import itertools
from collections.abc import Callable, Sequence

from prompt_toolkit.application import Application, get_app
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.layout.processors import BeforeInput
from rich.console import Console
from rich.panel import Panel
from rich import box
from rich.text import Text

from .cli import CLI
from .copier import CopyError, copy_files
from .finder import _matches as _matches_pattern
from .finder import find_files
from .preview import PreviewError, generate_preview

PROMPT = "Select files to copy (Tab to select, Enter to confirm): "
HEADER = "airule - Rule File Selector"

Preview = Callable[[int, int, int], str]
Selector = Callable[[Sequence[str], "set[int]", Preview], "list[int]"]


class AppError(Exception):
    """Raised when the application cannot complete its work."""


class SelectionAborted(Exception):
    """Raised when the user leaves the selector without confirming."""


def matches_any_pattern(file_path: str, patterns: Sequence[str]) -> bool:
    """Return whether *file_path* matches any of the glob *patterns*."""
    return any(_matches_pattern(file_path, pattern) for pattern in patterns)


def _fuzzy_match(query: str, item: str) -> bool:
    if not query.islower() and query.lower() != query:
        haystack = item
    else:
        haystack = item.lower()
    remaining = iter(haystack)
    return all(char in remaining for char in query)


class _FuzzySelector:
    """Full-screen multi-select list with a filter prompt and preview pane."""

    def __init__(self, items: Sequence[str], preselected: set[int], preview: Preview):
        self.items = list(items)
        self.preview = preview
        self.selected: dict[int, None] = dict.fromkeys(sorted(preselected))
        self.matched = list(range(len(self.items)))
        self.cursor = 0
        self.offset = 0
        self.buffer = Buffer(multiline=False, on_text_changed=self._refilter)

    def _refilter(self, _buffer: Buffer) -> None:
        query = self.buffer.text
        self.matched = [i for i, item in enumerate(self.items) if _fuzzy_match(query, item)]
        self.cursor = 0
        self.offset = 0

    def _current(self) -> int:
        return self.matched[self.cursor] if self.matched else -1

    def _move(self, delta: int) -> None:
        if self.matched:
            self.cursor = max(0, min(len(self.matched) - 1, self.cursor + delta))

    def _toggle(self) -> None:
        index = self._current()
        if index < 0:
            return
        if index in self.selected:
            del self.selected[index]
        else:
            self.selected[index] = None
        self._move(1)

    def _result(self) -> list[int]:
        if self.selected:
            return list(self.selected)
        current = self._current()
        return [current] if current >= 0 else []

    def _list_fragments(self) -> list[tuple[str, str]]:
        rows = max(1, get_app().output.get_size().rows - 3)
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + rows:
            self.offset = self.cursor - rows + 1
        fragments = [("class:count", f"  {len(self.matched)}/{len(self.items)}\n")]
        visible = itertools.islice(enumerate(self.matched), self.offset, self.offset + rows)
        for position, index in visible:
            is_cursor = position == self.cursor
            marker = ">" if is_cursor else " "
            chosen = "*" if index in self.selected else " "
            style = "reverse" if is_cursor else ""
            fragments.append((style, f"{marker}{chosen} {self.items[index]}\n"))
        return fragments

    def _preview_text(self) -> str:
        size = get_app().output.get_size()
        width = max(1, size.columns // 2 - 1)
        height = max(1, size.rows - 2)
        return self.preview(self._current(), width, height)

    def run(self) -> list[int]:
        bindings = KeyBindings()

        @bindings.add("tab", eager=True)
        def _(event):
            self._toggle()

        @bindings.add("up")
        @bindings.add("c-p")
        def _(event):
            self._move(-1)

        @bindings.add("down")
        @bindings.add("c-n")
        def _(event):
            self._move(1)

        @bindings.add("enter", eager=True)
        def _(event):
            event.app.exit(result=self._result())

        @bindings.add("escape", eager=True)
        @bindings.add("c-c")
        @bindings.add("c-d")
        def _(event):
            event.app.exit(exception=SelectionAborted())

        prompt = Window(
            BufferControl(buffer=self.buffer, input_processors=[BeforeInput(PROMPT)]),
            height=1,
        )
        root = HSplit(
            [
                Window(FormattedTextControl(HEADER), height=1, style="bold"),
                prompt,
                VSplit(
                    [
                        Window(FormattedTextControl(self._list_fragments), wrap_lines=False),
                        Window(width=1, char="│"),
                        Window(FormattedTextControl(self._preview_text), wrap_lines=False),
                    ]
                ),
            ]
        )
        application: Application[list[int]] = Application(
            layout=Layout(root, focused_element=prompt),
            key_bindings=bindings,
            full_screen=True,
        )
        return application.run()


def _fuzzy_select(items: Sequence[str], preselected: set[int], preview: Preview) -> list[int]:
    return _FuzzySelector(items, preselected, preview).run()


class App:
    """Find files, let the user pick some, and copy them to the destination."""

    def __init__(
        self,
        cli_args: CLI,
        *,
        selector: Selector | None = None,
        reader: Callable[[], str] = input,
        console: Console | None = None,
    ):
        self.cli_args = cli_args
        self._select = selector or _fuzzy_select
        self._reader = reader
        self._console = console or Console(highlight=False)

    def preselected_indices(self, files: Sequence[str]) -> list[int]:
        """Indices of *files* to mark before the user starts choosing."""
        if self.cli_args.select_all:
            return list(range(len(files)))
        if self.cli_args.pre_select:
            return [
                index
                for index, path in enumerate(files)
                if matches_any_pattern(path, self.cli_args.pre_select)
            ]
        return []

    def _preview(self, files: Sequence[str], index: int, width: int, height: int) -> str:
        if index == -1:
            return "Select a file to preview its contents"
        try:
            return generate_preview(self.cli_args.from_dir, files[index], width, height)
        except (PreviewError, ValueError) as exc:
            return f"Error loading preview: {exc}"

    def _confirmed(self) -> bool:
        self._console.print("Proceed with copy? (y/n): ", end="", markup=False)
        try:
            line = self._reader()
        except EOFError:
            line = ""
        words = line.split()
        return bool(words) and words[0] in ("y", "Y")

    def run(self) -> None:
        """Run the whole interactive session; raises AppError on failure."""
        args = self.cli_args
        out = self._console
        try:
            files = find_files(args.from_dir, args.include, args.exclude)
        except OSError as exc:
            raise AppError(f"error finding files: {exc}") from exc
        if not files:
            raise AppError("no files found matching the criteria")

        preselected = set(self.preselected_indices(files))
        preview = functools.partial(self._preview, files)
        try:
            indices = self._select(files, preselected, preview)
        except SelectionAborted:
            out.print("Operation cancelled", markup=False)
            return
        except (OSError, RuntimeError) as exc:
            raise AppError(f"error selecting files: {exc}") from exc

        if not indices:
            out.print("No files selected", markup=False)
            return

        selected = [files[index] for index in indices]
        out.print(Text(f"Selected {len(selected)} file(s):", style="bold color(39)"))
        out.print()
        for path in selected:
            out.print(Text.assemble(("  • ", "color(63)"), path))

        path_style = "italic color(39)"
        out.print()
        out.print(
            Text.assemble(
                "Copying from ", (args.from_dir, path_style), " to ", (args.to_dir, path_style)
            )
        )

        if not self._confirmed():
            out.print(Text("Copy operation cancelled", style="bold color(203)"))
            return

        out.print(Text("Copying files...", style="color(105)"))
        try:
            copy_files(args.from_dir, args.to_dir, selected)
        except CopyError as exc:
            raise AppError(f"error copying files: {exc}") from exc

        message = Text.assemble(
            ("✓", "bold color(42)"),
            f" Successfully copied {len(selected)} file(s) to ",
            (args.to_dir, path_style),
        )
        out.print()
        out.print(
            Panel(
                message,
                box=box.ROUNDED,
                border_style="color(63)",
                padding=(0, 1),
                expand=False,
            )
        )