"""Shared fixtures: a scripted command runner and an isolated staging home."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from epinio_e2e.config import ProvisionerConfig
from epinio_e2e.errors import CommandExecutionError

Handler = Callable[[list[str]], str]


class FakeRunner:
    """Stands in for CommandRunner: records every call and replays scripted output.

    Handlers are keyed by executable basename, so the staged ``epinio``
    binary can be scripted without knowing its full path.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str]]] = []
        self.handlers: dict[str, Handler] = {}

    def on(self, executable: str, handler: Handler | str) -> None:
        if isinstance(handler, str):
            output = handler
            handler = lambda args: output  # noqa: E731
        self.handlers[executable] = handler

    def run(self, executable, args=()) -> str:
        executable = str(executable)
        args = [str(arg) for arg in args]
        self.calls.append((executable, args))
        handler = self.handlers.get(Path(executable).name)
        if handler is None:
            return ""
        return handler(args)

    def executables(self) -> list[str]:
        return [Path(executable).name for executable, _ in self.calls]


def failing(executable: str, stdout: str = "", stderr: str = "", exit_code: int = 1) -> Handler:
    """Build a handler that fails like a tool exiting non-zero."""
    def _handler(args: list[str]) -> str:
        raise CommandExecutionError(executable, args, stdout=stdout, stderr=stderr, exit_code=exit_code)
    return _handler


def curl_writing(content: bytes = b"#!/bin/sh\necho epinio\n", mode: int | None = None) -> Handler:
    """Build a curl handler that writes *content* to the ``--output`` path."""
    def _handler(args: list[str]) -> str:
        if "--output" in args:
            dest = Path(args[args.index("--output") + 1])
            dest.write_bytes(content)
            if mode is not None:
                dest.chmod(mode)
        return ""
    return _handler


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    return tmp_path / "home" / "runner"


@pytest.fixture
def provisioner_config(home_dir: Path) -> ProvisionerConfig:
    return ProvisionerConfig(home_dir=home_dir, teardown_retry_wait=0)
