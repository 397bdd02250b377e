"""Test configuration and fixtures for declql."""

import logging

import pytest

from declql.config import GeneratorOptions
from declql.core.context import BuildContext
from declql.core.resolvers import resolver_registry
from declql.generators import BuildStep, SharedPartBuilder
from declql.naming import IdentityNameConverter

from tests.models import ALL, make_index


@pytest.fixture(autouse=True)
def clean_resolver_registry():
    """Each test starts and ends with an empty process-wide resolver registry."""
    resolver_registry.clear()
    yield
    resolver_registry.clear()


@pytest.fixture
def declaration_index():
    return make_index()


@pytest.fixture
def make_context(declaration_index):
    def _make(declaration, *, name_converter=None, options=None):
        return BuildContext(
            declaration,
            name_converter=name_converter or IdentityNameConverter(),
            options=options or GeneratorOptions(),
            resolver=declaration_index,
        )
    return _make


@pytest.fixture
def build_step(declaration_index):
    return BuildStep(index=declaration_index)


@pytest.fixture
async def generated_part(build_step):
    """Every sample declaration run through the default generators."""
    return await SharedPartBuilder().build(ALL, build_step)


@pytest.fixture
def debug_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="declql")
    return caplog
