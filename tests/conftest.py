"""Pytest configuration and fixtures."""

import pytest

from tests.builds import ENV_KEY, PROJECT_KEY, VERSION_KEY


@pytest.fixture
def dashboard_config() -> dict[str, str]:
    """Enabled dashboard settings using the test parameter keys."""
    return {
        "dashboardEnabled": "true",
        "projectKey": PROJECT_KEY,
        "versionKey": VERSION_KEY,
        "environmentKey": ENV_KEY,
        "environments": "DEV, UAT, PRD",
        "customKey": "BRANCH",
        "refreshSecs": "30",
        "multiEnvConfig": "false",
    }
