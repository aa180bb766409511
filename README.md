# pipexpy

`pipexpy` runs two commands connected by a pipe, as a shell does for

```sh
< infile cmd1 | cmd2 > outfile
```

The first command reads its standard input from `infile`. Its output goes
straight into the second command, whose output is written to `outfile`. The
output file is created if it is missing and truncated if it exists, with mode
`0644`.

## Installation

```sh
pip install .
```

## Usage

```sh
pipexpy infile "cmd1 args" "cmd2 args" outfile
```

Example:

```sh
pipexpy input.txt "grep error" "wc -l" count.txt
```

Each command string is split into words on spaces. Runs of spaces count as
one separator. The first word is looked up in the directories listed in the
`PATH` environment variable. It is always joined to a `PATH` directory, even
when it contains a slash. The first directory that holds an executable file
of that name is used. Without `PATH`, no command can be found.

If `pipexpy` is called with any number of operands other than four, it does
nothing. Its exit status is always 0.

When a stage fails, an error message for that stage goes to standard error.
A stage fails when the input file cannot be opened, the output file cannot be
opened, or a command is empty, not found or cannot be started. The other stage
still runs. The messages read, for example:

```
Failed to open file1.: No such file or directory
Failed to execute cmd2.: No such file or directory
```

## What it does not do

- There is no quoting, escaping, globbing or variable expansion in command
  strings.
- Exactly two commands are supported, and there is no here-document mode.
- The exit status of the commands is not passed on by the `pipexpy` command.

## Library use

```python
from pipexpy.config import PipexConfig
from pipexpy.runner import StageError, run_pipeline

config = PipexConfig.from_argv(
    ["input.txt", "grep error", "wc -l", "count.txt"],
    {"PATH": "/usr/bin:/bin"},
)
try:
    status = run_pipeline(config)
except StageError as error:
    print(error.stage, error)
```

- `PipexConfig.from_argv(argv, env=None)` takes exactly the four operands
  `infile cmd1 cmd2 outfile`. Any other count raises `ValueError`. `env`
  defaults to the current process environment. The config is a frozen
  dataclass with the fields `in_file`, `cmd1`, `cmd2`, `out_file` and `env`.
- `run_pipeline(config)` starts both stages and waits for both. It returns the
  exit status of the second command, or 1 if that command did not start. If
  any stage failed, it raises `StageError` after both have finished. The
  error has `stage` (`"cmd1"` or `"cmd2"`), `message`, `cause` (the
  underlying `OSError`) and `related`, a tuple of any further stage failures.

Other helpers:

- `pipexpy.paths.search_dirs(env)` lists the non-empty directories in
  `env["PATH"]`. It returns an empty list when `PATH` is absent.
- `pipexpy.paths.find_executable(cmd, env)` returns `dir/cmd` for the first
  directory where that path is executable, or `None`.
- `pipexpy.textutils`:
  - `split(text, sep)` splits on a single character and drops empty words.
  - `atoi(text)` parses a leading integer. It skips leading whitespace,
    accepts one optional sign and stops at the first non-digit.
  - `trim(text, charset)` strips characters found in `charset` from both
    ends.
  - `read_lines(stream)` yields lines of a text or binary stream, keeping
    the newlines. It reads in chunks of 42 characters or bytes.
- `pipexpy.printf` provides formatters for the conversions
  `%c %s %p %d %i %u %x %X %%`:
  - `sprintf(fmt, *args)` returns the formatted text. Unknown conversions
    are kept literally. A trailing lone `%` is kept. Missing arguments raise
    `TypeError`. `%d`, `%i`, `%u`, `%x` and `%X` wrap values to 32 bits.
    `%s` and `%p` print `(null)` and `(nil)` for `None`.
  - `printf(fmt, *args)` writes that text to standard output and returns
    its length.
  - `format_hex(value, uppercase=False)` renders a value as unsigned 64-bit
    hexadecimal without a prefix.

## Running the tests

```sh
pip install ".[test]"
pytest
```