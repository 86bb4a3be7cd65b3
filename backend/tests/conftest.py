import pytest
from answer_engine.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "SERPAPI_API_KEY": "serp-test-key",
        "OPENAI_API_KEY": "openai-test-key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()
