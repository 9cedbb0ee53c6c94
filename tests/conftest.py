# tests/conftest.py
import pytest

from funnelscope import config

# The worked example used across the suite: a webinar funnel doing 4000/day.
WEBINAR_BASE = {
    "name": "Asha Rao",
    "business_name": "Rao Fitness Academy",
    "funnel_type": "webinar",
    "current_daily_spend": 4000,
    "current_cpa_stage1": 600,
    "current_stage2_rate": 70,
    "current_conversion_rate": 30,
    "high_ticket_price": 89000,
}


@pytest.fixture
def webinar_row():
    return dict(WEBINAR_BASE)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATA_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def client(data_dir):
    from fastapi.testclient import TestClient
    from funnelscope.main import app
    return TestClient(app)
