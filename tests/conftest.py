import asyncio
from typing import Any, Dict, List, Tuple

import pytest

from gh_lookup.datasources.base import FetchError
from gh_lookup.schemas import Mode


class FakeSource:
    """In-memory lookup source; names listed in ``gates`` block until released."""

    def __init__(self, responses: Dict[Tuple[Mode, str], Any] | None = None):
        self.responses = dict(responses or {})
        self.gates: Dict[str, asyncio.Event] = {}
        self.calls: List[Tuple[Mode, str]] = []

    def hold(self, name: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[name] = gate
        return gate

    async def fetch(self, mode: Mode, name: str) -> Dict[str, Any]:
        self.calls.append((mode, name))
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        outcome = self.responses.get((mode, name))
        if outcome is None:
            raise FetchError(mode, name, f"GitHub 404: no {mode.value} {name}", 404)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def source():
    return FakeSource(
        {
            (Mode.USER, "octocat"): {"login": "octocat", "public_repos": 8, "id": 583231},
            (Mode.REPO, "hello"): {"name": "hello", "stargazers_count": 42, "id": 1},
        }
    )
