"""
Global test configuration and fixtures
"""

from pathlib import Path

import pytest

from code_control.models import AnnotatedRegion, Position
from code_control.parsing.parser_registry import ParserRegistry

RESOURCES = Path(__file__).parent / "resources"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch) -> Path:
    """Keep every test away from the user's real config and CONTROL_* env."""
    for name in ("CONTROL_LOG_LEVEL", "CONTROL_LOG_FORMAT", "CONTROL_LOG_PATH", "CONTROL_COMPRESSION_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path / "control-config"
    monkeypatch.setenv("CONTROL_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def resources_dir() -> Path:
    return RESOURCES


@pytest.fixture(scope="session")
def registry() -> ParserRegistry:
    """Real grammars from tree-sitter-language-pack, loaded once."""
    return ParserRegistry()


@pytest.fixture(scope="session")
def js_parser(registry):
    return registry.get_parser("js")


@pytest.fixture(scope="session")
def java_parser(registry):
    return registry.get_parser("java")


@pytest.fixture
def make_region():
    """Factory for regions with sensible defaults."""

    def _make(
        path: str = "src/index.js",
        annotation: str = "// control T-1",
        content: str = "doSomething();",
        start: tuple[int, int] = (1, 0),
        end: tuple[int, int] = (1, 14),
    ) -> AnnotatedRegion:
        return AnnotatedRegion(
            path=path,
            annotation=annotation,
            content=content,
            start=Position(*start),
            end=Position(*end),
        )

    return _make


def pytest_collection_modifyitems(config, items):
    """Mark tests that touch real grammars or the filesystem as integration."""
    for item in items:
        if "registry" in getattr(item, "fixturenames", ()) or "resources_dir" in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
