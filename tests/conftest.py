"""Shared fixtures: on-disk topic source trees."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest


def write_topic(source_dir: Path, topic: str, files: Dict[str, Any]) -> Path:
    """Create ``source_dir/topic`` with the given files.

    Values that are ``str`` are written verbatim, anything else as JSON.
    """
    topic_dir = source_dir / topic
    topic_dir.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        path = topic_dir / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content, ensure_ascii=False), encoding="utf-8")
    return topic_dir


@pytest.fixture
def source_dir(tmp_path):
    path = tmp_path / "topics"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "tutor-data" / "run"


@pytest.fixture
def make_topic(source_dir):
    def _make(topic: str, files: Dict[str, Any]) -> Path:
        return write_topic(source_dir, topic, files)

    return _make
