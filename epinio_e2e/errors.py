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

"""Error taxonomy for command execution, provisioning, and output checks."""

from __future__ import annotations

from collections.abc import Sequence


class EpinioE2EError(Exception):
    """Base class for all errors raised by epinio_e2e."""


class CommandExecutionError(EpinioE2EError):
    """An external tool exited non-zero or could not be spawned.

    Attributes:
        executable: Name or path of the program that was run.
        arguments: Argument list passed to the program.
        stdout: Captured standard output text.
        stderr: Captured standard error text.
        exit_code: Process exit status, or None if the process never started.
    """

    def __init__(
        self,
        executable: str,
        args: Sequence[str],
        stdout: str = "",
        stderr: str = "",
        exit_code: int | None = None,
    ) -> None:
        self.executable = executable
        self.arguments = list(args)
        self.stdout = stdout
        self.stderr = stderr
        self.exit_code = exit_code
        if exit_code is None:
            reason = "could not be started"
        else:
            reason = f"exited with code {exit_code}"
        super().__init__(f"Error running {self.command_line}: {reason}")

    @property
    def command_line(self) -> str:
        return " ".join([self.executable, *self.arguments])


class DownloadError(CommandExecutionError):
    """A release artifact could not be downloaded."""

    def __init__(
        self,
        url: str,
        executable: str,
        args: Sequence[str],
        stdout: str = "",
        stderr: str = "",
        exit_code: int | None = None,
    ) -> None:
        self.url = url
        super().__init__(executable, args, stdout, stderr, exit_code)

    @classmethod
    def from_command_error(cls, url: str, err: CommandExecutionError) -> DownloadError:
        return cls(url, err.executable, err.arguments, err.stdout, err.stderr, err.exit_code)


class UnsupportedPlatformError(EpinioE2EError):
    """The host platform has no matching Epinio release artifact."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"Platform type not detected. Found: {platform}")


class UnexpectedOutputError(EpinioE2EError):
    """A tool ran successfully but its output lacked the expected phrase.

    Attributes:
        step: Name of the scenario step or check that failed.
        expected: Phrase or pattern that was looked for.
        output: Full captured output that was inspected.
    """

    def __init__(self, step: str, expected: str, output: str) -> None:
        self.step = step
        self.expected = expected
        self.output = output
        super().__init__(f"{step}: expected output to contain {expected!r}")
