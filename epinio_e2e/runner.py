# /*
# Copyright 2026 The Epinio E2E Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Run external tools, returning stdout and surfacing diagnostics on failure."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO

import sh

from epinio_e2e import logger
from epinio_e2e.errors import CommandExecutionError


class CommandRunner:
    """Execute external programs one at a time.

    Standard output is captured in full and returned. Standard error is
    forwarded to ``stderr`` (the parent's stderr by default) as it arrives
    and is also kept so it can be attached to a failure.
    """

    def __init__(self, stderr: TextIO | None = None) -> None:
        self._stderr = stderr

    def run(self, executable: str | os.PathLike, args: Sequence[str] = ()) -> str:
        """Run *executable* with *args* and return its standard output.

        Args:
            executable: Program name resolvable on PATH, or a path to it.
            args: Argument tokens, passed verbatim without shell interpolation.

        Returns:
            Captured standard output text.

        Raises:
            CommandExecutionError: If the program exits non-zero or cannot be started.
        """
        executable = str(executable)
        args = [str(arg) for arg in args]
        sink = self._stderr if self._stderr is not None else sys.stderr
        stderr_chunks: list[str] = []

        def _tee_stderr(chunk: str) -> None:
            stderr_chunks.append(chunk)
            sink.write(chunk)
            sink.flush()

        try:
            command = sh.Command(executable)
            return str(command(*args, _err=_tee_stderr, _tty_out=False, _decode_errors="replace"))
        except sh.ErrorReturnCode as e:
            raise _report(CommandExecutionError(
                executable, args,
                stdout=e.stdout.decode(errors="replace"),
                stderr="".join(stderr_chunks),
                exit_code=e.exit_code,
            )) from e
        except (sh.CommandNotFound, OSError) as e:
            raise _report(CommandExecutionError(
                executable, args,
                stdout="",
                stderr="".join(stderr_chunks) or str(e),
            )) from e


def _report(err: CommandExecutionError) -> CommandExecutionError:
    """Log the failed command and both captured streams."""
    logger.error("Error running %s", err.command_line)
    logger.error("stdout: %s", err.stdout)
    logger.error("stderr: %s", err.stderr)
    return err
