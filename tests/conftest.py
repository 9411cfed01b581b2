"""Shared fixtures: stored documents under tests/fixtures."""

from pathlib import Path

import pytest
from omegaconf import OmegaConf

from vellum.contexts.content.content_tree import ContentTree

FIXTURES_PATH = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_document_path() -> Path:
    return FIXTURES_PATH / "sample_document.yaml"


@pytest.fixture
def legacy_document_path() -> Path:
    return FIXTURES_PATH / "legacy_document.yaml"


@pytest.fixture
def sample_document(sample_document_path):
    return OmegaConf.to_container(OmegaConf.load(sample_document_path), resolve=True)


@pytest.fixture
def sample_content(sample_document) -> ContentTree:
    return ContentTree.from_dict(sample_document["profile"])
