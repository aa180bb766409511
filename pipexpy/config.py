"""The settings of one two-command pipeline."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from pipexpy.textutils import split


@dataclass(frozen=True)
class PipexConfig:
    """Input file, two commands as argument vectors, output file and environment."""

    in_file: str
    cmd1: tuple[str, ...]
    cmd2: tuple[str, ...]
    out_file: str
    env: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_argv(
        cls, argv: Sequence[str], env: Mapping[str, str] | None = None
    ) -> PipexConfig:
        """Build a config from the operands ``infile cmd1 cmd2 outfile``.

        Each command string is split into words on spaces. ``env`` defaults
        to the current process environment.
        """
        if len(argv) != 4:
            raise ValueError(
                f"expected 4 operands (infile cmd1 cmd2 outfile), got {len(argv)}"
            )
        in_file, cmd1, cmd2, out_file = argv
        return cls(
            in_file=in_file,
            cmd1=tuple(split(cmd1, " ")),
            cmd2=tuple(split(cmd2, " ")),
            out_file=out_file,
            env=dict(os.environ if env is None else env),
        )