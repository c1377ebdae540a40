"""Pytest configuration and shared fixtures."""

import textwrap
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_path():
    """Path to test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def solid_path(fixtures_path):
    """Path to the sample SOLID document."""
    return fixtures_path / "solid.md"


@pytest.fixture(scope="session")
def solid_text(solid_path):
    """Full text of the sample SOLID document."""
    return solid_path.read_text(encoding="utf-8")


@pytest.fixture
def write_doc(tmp_path):
    """Write dedented markdown to a temp file and return its path."""

    def _write(content: str, name: str = "doc.md") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def duplicate_letter_text():
    """Two principles that both abbreviate to 'S'."""
    return textwrap.dedent('''
        # Principles

        ## 1. Single Responsibility (SRP)

        > One reason to change.

        ```java
        class A {}
        ```

        ## 2. Separation of Concerns (SOC)

        > Keep concerns apart.

        ```java
        class B {}
        ```
    ''')


@pytest.fixture
def empty_definition_text():
    """A principle whose blockquote is present but blank."""
    return textwrap.dedent('''
        ## 1. Single Responsibility (SRP)

        >

        ```java
        class A {}
        ```

        ## 2. Open/Closed (OCP)

        > Open for extension, closed for modification.

        ```java
        interface Shape {}
        ```
    ''')
