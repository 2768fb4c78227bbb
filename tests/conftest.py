"""Shared fixtures for sentiment fix tests."""
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

from sentiment_fix.models import RunStats


class FakeCompletionClient:
    """Stand-in for CompletionClient returning scripted responses."""

    def __init__(self, responder: Optional[Callable[[List[Dict[str, str]]], str]] = None, responses=None):
        self.responder = responder
        self.responses = list(responses or [])
        self.calls: List[List[Dict[str, str]]] = []

    async def submit(self, messages, max_tokens=None):
        self.calls.append(messages)
        if self.responder is not None:
            return self.responder(messages)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def count_articles(messages: List[Dict[str, str]]) -> int:
    """Number of numbered article lines in a batch prompt."""
    body = messages[1]["content"].split("Articles:\n", 1)[1].split("\n\nReturn JSON array", 1)[0]
    return len(body.splitlines())


def write_json_file(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@pytest.fixture
def stats() -> RunStats:
    return RunStats()


@pytest.fixture
def news_dir(tmp_path) -> Path:
    directory = tmp_path / "news"
    directory.mkdir()
    return directory
