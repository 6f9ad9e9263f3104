"""Pytest configuration and shared fixtures for the doccompare test suite.

This module provides shared fixtures, test configuration, and fake
extractors used across the unit and integration tests.
"""

import logging
import os
import threading

import pytest

from doccompare.comparator import DocumentComparator
from doccompare.exceptions import ExtractionError
from doccompare.models import ExtractedContent
from doccompare.options import ComparatorConfig

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


class FakeExtractor:
    """Extractor returning the payload decoded as text, with optional structure.

    ``structures`` maps a payload to the structure returned for it.
    """

    def __init__(self, structures=None):
        self.structures = structures or {}
        self.calls = []

    def extract(self, content, document_type):
        self.calls.append(document_type)
        return ExtractedContent(content.decode("utf-8"), self.structures.get(content))


class FailingExtractor:
    """Extractor that always raises."""

    def __init__(self, error=None):
        self.error = error or RuntimeError("corrupt payload")

    def extract(self, content, document_type):
        raise self.error


class BlockingExtractor:
    """Extractor that blocks until released, for timeout tests."""

    def __init__(self):
        self.release = threading.Event()

    def extract(self, content, document_type):
        self.release.wait(timeout=5)
        return ExtractedContent("late")


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handler changes made by configure_logging so caplog keeps working."""
    package_logger = logging.getLogger("doccompare")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def comparator() -> DocumentComparator:
    """Provide a comparator without an extractor."""
    return DocumentComparator()


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    """Provide an extractor that decodes payloads as UTF-8."""
    return FakeExtractor()


@pytest.fixture
def extractor_factory():
    """Provide the FakeExtractor class for tests needing custom structures."""
    return FakeExtractor


@pytest.fixture
def failing_extractor() -> FailingExtractor:
    """Provide an extractor that always fails."""
    return FailingExtractor(ExtractionError("unreadable document", document_type="pdf"))


@pytest.fixture
def blocking_extractor():
    """Provide an extractor that never finishes within a short timeout."""
    extractor = BlockingExtractor()
    yield extractor
    extractor.release.set()


@pytest.fixture
def fast_timeout_config() -> ComparatorConfig:
    """Provide a comparator config with a short extraction timeout."""
    return ComparatorConfig(extraction_timeout=0.05)


@pytest.fixture
def contract_versions() -> tuple[bytes, bytes]:
    """Provide two versions of a short contract."""
    old = (
        "Article 1: Parties\n"
        "The seller agrees to sell the property.\n"
        "\n"
        "Article 2: Price\n"
        "The price is 100 000 DZD.\n"
    )
    new = (
        "Article 1: Parties\n"
        "The seller agrees to sell the property.\n"
        "\n"
        "Article 2: Price\n"
        "The price is 120 000 DZD.\n"
        "Article 3: Delivery\n"
    )
    return old.encode("utf-8"), new.encode("utf-8")
