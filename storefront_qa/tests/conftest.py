import pytest

from storefront_qa.app.core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Isolate every test from the developer's .env and cached settings."""
    monkeypatch.chdir(tmp_path)
    for name in ("SPEECH_KEY", "SPEECH_REGION", "TEST_SESSION_TIMESTAMP"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def speech_configured(monkeypatch):
    monkeypatch.setenv("SPEECH_KEY", "test-key")
    monkeypatch.setenv("SPEECH_REGION", "eastus")
    get_settings.cache_clear()


def make_violation(rule_id="image-alt", impact="serious", nodes=1, html="<img src=\"a.png\">"):
    return {
        "id": rule_id,
        "impact": impact,
        "description": f"Description of {rule_id}",
        "help": f"Help for {rule_id}",
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.4/{rule_id}",
        "tags": ["wcag2a"],
        "nodes": [
            {"target": ["body", f"#node-{i}"], "html": html, "failureSummary": "Fix it"}
            for i in range(nodes)
        ],
    }


@pytest.fixture
def violation_factory():
    return make_violation
