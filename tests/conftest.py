"""
Shared test configuration.
Fixtures build small member lists and a fake Gemini client so no test touches the network.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, List

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from nysc_extract.models import CorpsMember  # noqa: E402
from nysc_extract.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the env vars settings read so a developer .env does not leak in."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    for name in ("API_KEY", "GEMINI_MODEL", "LOG_LEVEL", "DEFAULT_PROVIDER", "MAX_UPLOAD_MB"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def members() -> List[CorpsMember]:
    return [
        CorpsMember(
            id="a1", sn=1, state_code="TA/24B/0001", surname="ADEYEMI", first_name="TOLU",
            middle_name="GRACE", gender="F", phone="08030000001", company_name="GOVT SECONDARY SCHOOL MANI",
        ),
        CorpsMember(
            id="a2", sn=2, state_code="TA/24B/0002", surname="BELLO", first_name="MUSA",
            gender="M", phone="08030000002", company_name="GOVT SECONDARY SCHOOL MANI",
        ),
        CorpsMember(
            id="a3", sn=3, state_code="TA/24B/0003", surname="CHUKWU", first_name="EMEKA",
            middle_name="JOHN", gender="M", phone="08030000003", company_name="MANI LGA SECRETARIAT",
        ),
        CorpsMember(
            id="a4", sn=4, state_code="KT/24B/0104", surname="DANJUMA", first_name="AISHA",
            gender="F", phone="", company_name="PRIMARY HEALTH CENTRE",
        ),
    ]


class FakeModels:
    def __init__(self, reply: Any = None, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: List[dict] = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        text = self.reply if isinstance(self.reply, str) or self.reply is None else json.dumps(self.reply)
        return SimpleNamespace(text=text)


class FakeClient:
    """Stands in for google.genai.Client; only `models.generate_content` is used."""

    def __init__(self, reply: Any = None, error: Exception | None = None):
        self.models = FakeModels(reply, error)


@pytest.fixture
def fake_client_factory():
    return FakeClient
