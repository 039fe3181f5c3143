"""Shared fixtures: a stub chat model and a TestClient factory."""

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from riskatlas.app import get_app
from riskatlas.configs.config import AppConfig
from riskatlas.core.llm import get_llm_factory
from stubs import StubChatModel, StubLLMFactory, build_test_config


@pytest.fixture
def stub_llm() -> StubChatModel:
    return StubChatModel()


@pytest.fixture
def make_client(
    stub_llm: StubChatModel,
) -> Callable[..., tuple[TestClient, StubLLMFactory]]:
    """Build a TestClient wired to a stub model.

    Returns ``(client, factory)``; ``factory.llm`` is the stub model.
    """

    def _make_client(
        config: AppConfig | None = None, llm: StubChatModel | None = None
    ) -> tuple[TestClient, StubLLMFactory]:
        config = config or build_test_config()
        factory = StubLLMFactory(llm or stub_llm)

        app = get_app(config)
        app.dependency_overrides[get_llm_factory] = lambda: factory
        return TestClient(app), factory

    return _make_client


@pytest.fixture
def client(make_client) -> TestClient:
    test_client, _ = make_client()
    return test_client
