# tests/conftest.py
"""Shared fixtures: small in-memory profiles and validators built on them."""

import logging

import pytest

from ldprofiles.config import ValidatorConfig
from ldprofiles.logging_config import PACKAGE_LOGGER
from ldprofiles.profiles import ProfileRegistry, profile_from_dict
from ldprofiles.validator import ProfileValidator


NEWS_PROFILE = {
    'type': 'NewsItem',
    'category': 'content',
    'description': 'Small article-like profile used across the tests',
    'required': {
        'headline': {'type': 'string', 'minLength': 3},
        'author': {
            'anyOf': [
                {'type': 'string'},
                {'type': 'object'},
            ],
        },
    },
    'recommended': {
        'image': {'type': 'string', 'format': 'uri'},
        'description': {'type': 'string', 'description': 'Summary of the news item'},
        'keywords': {'type': 'string'},
    },
    'optional': {
        'wordCount': {'type': 'integer', 'minimum': 1},
    },
    # image is in both subsets; description only in the LLM subset
    'richResultsFields': ['headline', 'image'],
    'llmOptimizedFields': ['headline', 'image', 'description'],
}

BARE_PROFILE = {
    'type': 'Bare',
    'category': 'content',
    'required': {
        'name': {'type': 'string'},
    },
    'recommended': {
        'url': {'type': 'string', 'format': 'uri'},
    },
    'richResultsFields': [],
    'llmOptimizedFields': [],
}


@pytest.fixture(autouse=True)
def restore_package_logging():
    """Undo setup_logging calls made by CLI and logging tests."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def news_profile():
    """Profile with required {headline, author} and overlapping scoring subsets."""
    return profile_from_dict(NEWS_PROFILE)


@pytest.fixture
def bare_profile():
    """Profile whose scoring subsets are both empty."""
    return profile_from_dict(BARE_PROFILE)


@pytest.fixture
def registry(news_profile, bare_profile):
    """Registry holding only the in-memory test profiles."""
    return ProfileRegistry([news_profile, bare_profile])


@pytest.fixture
def validator(registry):
    """Validator over the test registry with sanitization off."""
    return ProfileValidator(registry=registry, config=ValidatorConfig(sanitize_inputs=False))


@pytest.fixture
def sanitizing_validator(registry):
    """Validator over the test registry with sanitization on."""
    return ProfileValidator(registry=registry, config=ValidatorConfig(sanitize_inputs=True))


@pytest.fixture
def complete_news_item():
    """A NewsItem document populating every declared field."""
    return {
        'headline': 'Local team wins the cup',
        'author': {'@type': 'Person', 'name': 'Jane Doe'},
        'image': 'https://example.com/cup.jpg',
        'description': 'The local team won the regional cup on Sunday.',
        'keywords': 'sports, football',
        'wordCount': 450,
    }
