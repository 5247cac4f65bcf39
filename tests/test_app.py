import io
import os

import pytest
from rich.console import Console

from airule.app import App, AppError, SelectionAborted, matches_any_pattern
from airule.cli import CLI
from airule.finder import find_files

TREE_DIRS = ["dir1", "dir2", "dir3/subdir"]
TREE_FILES = [
    "file1.txt",
    "file2.go",
    "file3.md",
    "dir1/file4.txt",
    "dir1/file5.go",
    "dir2/file6.json",
    "dir3/file7.yaml",
    "dir3/subdir/file8.txt",
    "dir3/subdir/file9.go",
]


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "src"
    for directory in TREE_DIRS:
        (root / directory).mkdir(parents=True, exist_ok=True)
    for name in TREE_FILES:
        (root / name).write_text("test content")
    return root


def _console():
    return Console(file=io.StringIO(), width=200, highlight=False, color_system=None)


@pytest.mark.parametrize(
    "file_path, patterns, want",
    [
        ("file.txt", [], False),
        ("file.txt", ["file.txt"], True),
        ("file.txt", ["*.txt"], True),
        ("file.txt", ["*.go"], False),
        ("dir/file.txt", ["dir/*.txt"], True),
        ("dir/file.txt", ["dir/*"], True),
        ("dir", ["dir/*"], True),
        ("dir/subdir/file.txt", ["dir/*"], True),
        ("file.txt", ["*.go", "*.txt"], True),
        ("file.txt", ["*.go", "*.md"], False),
    ],
)
def test_matches_any_pattern(file_path, patterns, want):
    assert matches_any_pattern(file_path, patterns) is want


PRESELECT_FILES = [
    "file1.txt",
    "file2.go",
    "file3.md",
    "dir1/file4.txt",
    "dir1/file5.go",
    "dir2/file6.json",
]


@pytest.mark.parametrize(
    "select_all, pre_select, expected",
    [
        (False, [], set()),
        (True, [], {0, 1, 2, 3, 4, 5}),
        (False, ["*.txt"], {0, 3}),
        (False, ["*.go"], {1, 4}),
        (False, ["dir1/*"], {3, 4}),
        (False, ["*.txt", "*.go"], {0, 1, 3, 4}),
        (True, ["*.txt"], {0, 1, 2, 3, 4, 5}),
    ],
)
def test_preselection_logic(select_all, pre_select, expected):
    app = App(CLI(select_all=select_all, pre_select=pre_select))
    indices = app.preselected_indices(PRESELECT_FILES)
    assert set(indices) == expected
    assert len(indices) == len(expected)


def test_select_all_flag(tree, tmp_path):
    all_files = find_files(tree, [], [])
    app = App(CLI(from_dir=str(tree), to_dir=str(tmp_path / "dest"), select_all=True))
    assert app.preselected_indices(all_files) == list(range(len(all_files)))


@pytest.mark.parametrize(
    "pre_select, expected",
    [
        (["*.txt"], ["file1.txt", "dir1/file4.txt", "dir3/subdir/file8.txt"]),
        (["*.go"], ["file2.go", "dir1/file5.go", "dir3/subdir/file9.go"]),
        (["dir1/*"], ["dir1/file4.txt", "dir1/file5.go"]),
        (
            ["*.txt", "*.go"],
            [
                "file1.txt",
                "file2.go",
                "dir1/file4.txt",
                "dir1/file5.go",
                "dir3/subdir/file8.txt",
                "dir3/subdir/file9.go",
            ],
        ),
    ],
)
def test_pre_select_patterns(tree, tmp_path, pre_select, expected):
    all_files = find_files(tree, [], [])
    app = App(CLI(from_dir=str(tree), to_dir=str(tmp_path / "dest"), pre_select=pre_select))
    chosen = [all_files[i] for i in app.preselected_indices(all_files)]
    only_files = sorted(path for path in chosen if os.path.isfile(tree / path))
    assert only_files == sorted(expected)


@pytest.mark.parametrize(
    "includes, excludes, select_all, pre_select, count_dirs, expected_count",
    [
        (["*.txt"], [], True, [], False, 3),
        ([], ["*.txt"], True, [], True, 10),
        (["*.txt", "*.go"], [], False, ["*.go"], False, 3),
        ([], ["dir1/*"], False, ["*.txt"], False, 2),
        (["*.txt", "*.go"], [], True, ["*.txt"], False, 6),
    ],
)
def test_combined_functionality(
    tree, tmp_path, includes, excludes, select_all, pre_select, count_dirs, expected_count
):
    files = find_files(tree, includes, excludes)
    app = App(
        CLI(
            from_dir=str(tree),
            to_dir=str(tmp_path / "dest"),
            include=includes,
            exclude=excludes,
            select_all=select_all,
            pre_select=pre_select,
        )
    )
    count = sum(
        1
        for index in app.preselected_indices(files)
        if os.path.exists(tree / files[index])
        and (count_dirs or not os.path.isdir(tree / files[index]))
    )
    assert count == expected_count


def test_run_copies_selected_files(tree, tmp_path):
    dest = tmp_path / "dest"
    seen = {}

    def selector(files, preselected, preview):
        seen["files"] = list(files)
        seen["preselected"] = preselected
        seen["blank"] = preview(-1, 80, 24)
        seen["content"] = preview(files.index("file1.txt"), 80, 24)
        return [files.index("file1.txt"), files.index("dir1/file4.txt")]

    console = _console()
    app = App(
        CLI(from_dir=str(tree), to_dir=str(dest), include=["*.txt"], select_all=True),
        selector=selector,
        reader=lambda: "y",
        console=console,
    )
    app.run()

    assert seen["preselected"] == set(range(len(seen["files"])))
    assert seen["blank"] == "Select a file to preview its contents"
    assert seen["content"] == "test content"
    assert (dest / "file1.txt").read_text() == "test content"
    assert (dest / "dir1" / "file4.txt").read_text() == "test content"
    assert not (dest / "file2.go").exists()
    output = console.file.getvalue()
    assert "Selected 2 file(s):" in output
    assert "Successfully copied 2 file(s) to" in output


def test_run_declined_copy_leaves_destination(tree, tmp_path):
    dest = tmp_path / "dest"
    console = _console()
    app = App(
        CLI(from_dir=str(tree), to_dir=str(dest)),
        selector=lambda files, pre, preview: [0],
        reader=lambda: "n",
        console=console,
    )
    app.run()
    assert not dest.exists()
    assert "Copy operation cancelled" in console.file.getvalue()


def test_run_aborted_selection(tree, tmp_path):
    def selector(files, preselected, preview):
        raise SelectionAborted()

    console = _console()
    App(
        CLI(from_dir=str(tree), to_dir=str(tmp_path / "dest")),
        selector=selector,
        console=console,
    ).run()
    assert "Operation cancelled" in console.file.getvalue()


def test_run_nothing_selected(tree, tmp_path):
    console = _console()
    App(
        CLI(from_dir=str(tree), to_dir=str(tmp_path / "dest")),
        selector=lambda files, pre, preview: [],
        console=console,
    ).run()
    assert "No files selected" in console.file.getvalue()


def test_run_no_files_found(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    app = App(CLI(from_dir=str(empty), to_dir=str(tmp_path / "dest")), console=_console())
    with pytest.raises(AppError, match="no files found matching the criteria"):
        app.run()


def test_run_missing_source(tmp_path):
    app = App(
        CLI(from_dir=str(tmp_path / "missing"), to_dir=str(tmp_path / "dest")),
        console=_console(),
    )
    with pytest.raises(AppError, match="error finding files"):
        app.run()