"""
Shared fixtures and utilities for predicate tests.
"""
import io
import os
from pathlib import Path
from typing import Dict

import pytest

from predicate import PredicateDispatcher, PredicateRegistry, PredicateSettings


@pytest.fixture
def registry():
    """Fixture providing the default registry."""
    return PredicateRegistry.create_default(PredicateSettings.create_default())


@pytest.fixture
def error_stream():
    """Fixture providing a stream that captures dispatcher diagnostics."""
    return io.StringIO()


@pytest.fixture
def dispatcher(registry, error_stream):
    """Fixture providing a dispatcher writing diagnostics to a captured stream."""
    return PredicateDispatcher(registry, error_stream=error_stream)


@pytest.fixture
def file_fixtures(tmp_path) -> Dict[str, Path]:
    """
    Fixture creating the filesystem entries used by file predicate tests.

    Returns:
        Dictionary mapping fixture names to paths
    """
    empty_file = tmp_path / "empty_file.txt"
    empty_file.touch()

    file_txt = tmp_path / "file.txt"
    file_txt.write_text("hello\n", encoding="utf-8")

    subdir = tmp_path / "subdir"
    subdir.mkdir()

    symlink = tmp_path / "symlink_to_file"
    symlink.symlink_to(file_txt)

    dangling = tmp_path / "dangling_link"
    dangling.symlink_to(tmp_path / "does_not_exist")

    fixtures = {
        "root": tmp_path,
        "empty_file": empty_file,
        "file": file_txt,
        "subdir": subdir,
        "symlink": symlink,
        "dangling": dangling,
        "missing": tmp_path / "nonexistent.txt",
    }

    if hasattr(os, "mkfifo"):
        named_pipe = tmp_path / "named_pipe"
        os.mkfifo(named_pipe)
        fixtures["named_pipe"] = named_pipe

    return fixtures
