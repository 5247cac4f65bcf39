# airule

`airule` lets you pick files from a directory of rule files (editor rules,
prompt snippets, lint configs and the like) in a full-screen fuzzy finder
with a live preview, and copy the chosen ones into a destination directory.

## Installation

```
pip install .
```

To run the tests:

```
pip install '.[test]'
pytest
```

## Usage

```
airule --from ~/rules --to ./.rules
```

This walks the source directory, lists the matching files together with the
directories that hold them (in reverse alphabetical order) and opens the
selector:

- type to filter the list (fuzzy, case-insensitive unless the query has
  capitals);
- Up/Down or Ctrl-P/Ctrl-N move the cursor;
- Tab marks or unmarks the entry under the cursor;
- Enter confirms the marked entries, or the entry under the cursor when
  nothing is marked;
- Esc, Ctrl-C or Ctrl-D cancel.

The right-hand pane previews the entry under the cursor: the text of a file
(trimmed to the pane), a listing of a directory, a size summary for files
with a binary extension (`.png`, `.zip`, `.pdf`, …), or a note that a file
over 100 KB is too large to preview.

After the selection the chosen entries are listed and you are asked
`Proceed with copy? (y/n)`. Answering `y` or `Y` **empties the destination
directory** and copies the selected files and directories into it, keeping
their relative paths and permission bits. Any other answer cancels.

The command exits with status 1 and a message on standard error when
`--from` or `--to` is missing, when no files match, or when copying fails.

### Options

| Option | Environment variable | Meaning |
| --- | --- | --- |
| `--from PATH` | `AIRULE_FROM` | Source directory (required) |
| `--to PATH` | `AIRULE_TO` | Destination directory (required) |
| `-i`, `--include PATTERN` | `AIRULE_INCLUDE` | Glob patterns to include, e.g. `*.md` |
| `-e`, `--exclude PATTERN` | `AIRULE_EXCLUDE` | Glob patterns to exclude, e.g. `*.tmp` |
| `--select-all` | `AIRULE_SELECT_ALL` | Preselect every listed entry |
| `--pre-select PATTERN` | `AIRULE_PRE_SELECT` | Glob patterns to preselect |
| `-v`, `--version` | | Show version and exit |

An option given on the command line takes precedence over its environment
variable. Paths have `~` expanded and are made absolute. Pattern options may
be repeated, and each value may hold several patterns separated by commas.
`AIRULE_SELECT_ALL` accepts `1`, `t`, `true` (and `0`, `f`, `false`) in the
usual capitalisations. `--select-all` takes precedence over `--pre-select`.

Exclude patterns win over include patterns, and with no include patterns
everything not excluded is listed. A pattern without a path separator is also
matched against the entry's base name, and a pattern ending in `/*` or `/**`
matches the directory itself and everything beneath it. Excluded directories
are not descended into.

### Examples

Copy only Markdown rules, skipping drafts:

```
airule --from ~/rules --to ./.rules -i '*.md' -e 'drafts/*'
```

Start with every YAML file already selected:

```
airule --from ~/rules --to ./.rules --pre-select '*.yaml'
```

## Library use

The building blocks are importable:

```python
from airule.finder import find_files, should_include
from airule.copier import copy_files
from airule.preview import generate_preview

files = find_files("rules", ["*.md"], [])
print(generate_preview("rules", files[0], 80, 24))
copy_files("rules", "out", files)
```

- `airule.finder.find_files(root_dir, includes, excludes)` returns relative
  paths sorted in reverse order and raises `FileNotFoundError` for a missing
  root; `should_include(path, includes, excludes)` applies the pattern rules
  to a single path.
- `airule.copier.copy_files(from_dir, to_dir, relative_paths)` clears
  `to_dir` first and raises `CopyError` on failure.
- `airule.preview.generate_preview(base_dir, rel_path, width, height)`,
  `format_content_for_display(content, width, height)` and
  `is_binary_filename(filename)` build the preview text; `PreviewError` is
  raised when the entry cannot be read.
- `airule.cli.parse_args(argv)` returns a `CLI` dataclass whose `validate()`
  raises `CLIError`; `get_version()` and `set_version_info(ver, cmt, date)`
  read and set the version line shown by `--version`.
- `airule.app.App(cli_args)` runs the whole session with `run()`, raising
  `AppError` on failure. Its `selector`, `reader` and `console` keyword
  arguments replace the full-screen selector, the confirmation input and the
  output console. `App.preselected_indices(files)` and
  `matches_any_pattern(file_path, patterns)` give the preselection rules.
- `airule.main.main(argv=None)` is the command itself and returns the exit
  status.