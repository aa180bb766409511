"""Command line entry point: ``pipexpy infile cmd1 cmd2 outfile``."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from pipexpy.config import PipexConfig
from pipexpy.runner import StageError, run_pipeline


def main(argv: Sequence[str] | None = None) -> int:
    """Run the pipeline described by four operands; other counts do nothing.

    Stage failures are reported on standard error; the exit status is 0.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 4:
        return 0
    config = PipexConfig.from_argv(args, os.environ)
    try:
        run_pipeline(config)
    except StageError as error:
        for failure in (error, *error.related):
            print(failure, file=sys.stderr)
    return 0