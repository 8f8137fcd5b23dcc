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

"""Judging tool output by phrase, and pulling values out of human-readable text."""

from __future__ import annotations

import re

from epinio_e2e.constants import LOAD_BALANCER_LABEL
from epinio_e2e.errors import UnexpectedOutputError

_LOAD_BALANCER_IP_RE = re.compile(
    re.escape(LOAD_BALANCER_LABEL) + r"\s+((?:[0-9]{1,3}\.){3}[0-9]{1,3})"
)


def contains(output: str, phrase: str) -> bool:
    """Return True if *phrase* appears anywhere in *output*."""
    return phrase in output


def require_phrase(output: str, phrase: str, step: str) -> str:
    """Return *output* unchanged if it contains *phrase*.

    Args:
        output: Captured tool output.
        phrase: Substring that signals success.
        step: Name of the check, used in the error.

    Raises:
        UnexpectedOutputError: If the phrase is missing.
    """
    if not contains(output, phrase):
        raise UnexpectedOutputError(step, phrase, output)
    return output


def require_match(output: str, pattern: re.Pattern[str] | str, step: str) -> re.Match[str]:
    """Like :func:`require_phrase`, for a regular expression."""
    match = re.search(pattern, output)
    if match is None:
        expected = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
        raise UnexpectedOutputError(step, expected, output)
    return match


def parse_load_balancer_ip(service_description: str) -> str | None:
    """Extract the dotted-quad address after ``LoadBalancer Ingress:``.

    Args:
        service_description: Output of ``kubectl describe service``.

    Returns:
        The first load-balancer IPv4 address, or None if there is none.
    """
    match = _LOAD_BALANCER_IP_RE.search(service_description)
    return match.group(1) if match else None
