"""Running ``cmd1 < infile | cmd2 > outfile``."""

from __future__ import annotations

import errno
import os
import subprocess
from collections.abc import Mapping, Sequence
from typing import IO

from pipexpy.config import PipexConfig
from pipexpy.paths import find_executable

_OUTFILE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
_OUTFILE_MODE = 0o644


class StageError(Exception):
    """A pipeline stage could not be set up or its command could not start.

    ``related`` holds failures of other stages in the same run.
    """

    def __init__(self, stage: str, message: str, cause: BaseException) -> None:
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"{message}: {reason}")
        self.stage = stage
        self.message = message
        self.cause = cause
        self.related: tuple[StageError, ...] = ()


def _open_outfile(path: str) -> IO[bytes]:
    return open(
        path, "wb", opener=lambda p, _flags: os.open(p, _OUTFILE_FLAGS, _OUTFILE_MODE)
    )


def _spawn(
    argv: Sequence[str],
    stage: str,
    env: Mapping[str, str],
    stdin: int | IO[bytes],
    stdout: int | IO[bytes],
) -> subprocess.Popen:
    message = f"Failed to execute {stage}."
    if not argv:
        raise StageError(
            stage,
            message,
            FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT)),
        )
    path = find_executable(argv[0], env)
    if path is None:
        raise StageError(
            stage,
            message,
            FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), argv[0]),
        )
    try:
        return subprocess.Popen(
            list(argv),
            executable=path,
            stdin=stdin,
            stdout=stdout,
            env=dict(env),
            close_fds=True,
        )
    except OSError as exc:
        raise StageError(stage, message, exc) from exc


def run_pipeline(config: PipexConfig) -> int:
    """Run both commands joined by a pipe and return the second one's exit status.

    Both stages are always attempted; a failure in one does not stop the
    other. After both have finished, the first failure is raised as a
    StageError with any later one in ``related``.
    """
    failures: list[StageError] = []
    upstream = downstream = None
    read_end, write_end = os.pipe()
    try:
        try:
            infile = open(config.in_file, "rb")
        except OSError as exc:
            failures.append(StageError("cmd1", "Failed to open file1.", exc))
        else:
            with infile:
                try:
                    upstream = _spawn(
                        config.cmd1, "cmd1", config.env, infile, write_end
                    )
                except StageError as exc:
                    failures.append(exc)
    finally:
        os.close(write_end)

    try:
        try:
            outfile = _open_outfile(config.out_file)
        except OSError as exc:
            failures.append(StageError("cmd2", "Failed to open file2.", exc))
        else:
            with outfile:
                try:
                    downstream = _spawn(
                        config.cmd2, "cmd2", config.env, read_end, outfile
                    )
                except StageError as exc:
                    failures.append(exc)
    finally:
        os.close(read_end)

    if upstream is not None:
        upstream.wait()
    status = downstream.wait() if downstream is not None else 1

    if failures:
        first = failures[0]
        first.related = tuple(failures[1:])
        raise first
    return status