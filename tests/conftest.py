"""
Pytest configuration and fixtures
Shared test setup for all test modules
"""

import os
from typing import List

import pytest

from hookradar.core.config import DecisionSettings
from hookradar.schemas import Finding, RemediationInput
from tests.factories import make_finding, make_input


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep the developer's home config, .env files and HOOK_RADAR_* vars out of tests"""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("HOOK_RADAR_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture
def high_finding() -> Finding:
    return make_finding(severity="high", type="github_token", description="GitHub personal access token")


@pytest.fixture
def sample_findings() -> List[Finding]:
    return [
        make_finding(severity="info", type="aws_access_key_id", location="test-file.txt", description="AWS access key ID"),
        make_finding(severity="high", type="github_token", location="test-file.txt", description="GitHub personal access token"),
    ]


@pytest.fixture
def decision_settings() -> DecisionSettings:
    return DecisionSettings(block_on_findings=True, severity_threshold="high")


@pytest.fixture
def remediation_input(sample_findings) -> RemediationInput:
    return make_input(sample_findings)
