"""Pytest configuration and shared fixtures."""

import pytest

from modcheck.config import reset_settings
from modcheck.utils.logging import setup_logging

SAMPLE_CHECKLIST = """\
# Modernization Checklist

Work through these before moving the app to the cloud.

## General Fixup

- [x] Upgrade to a supported runtime
- [ ] Remove hard-coded connection strings
  - [ ] Move secrets to a vault
  - [ ] Read settings from environment variables
    See the twelve-factor docs.
- [ ] Replace local file storage

## Deployment

```yaml
steps:
  - [ ] not an item
# not a heading
```

1. [ ] Containerize the application
2. [X] Add a health check endpoint
"""


@pytest.fixture(autouse=True)
def reset_config_settings():
    """Reset the settings singleton before and after each test.

    This ensures that environment variable changes made by monkeypatch
    are properly reflected in the settings, since pydantic-settings
    reads env vars at instantiation time.
    """
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Route structlog through stdlib logging so CLI output stays clean."""
    setup_logging()


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_CHECKLIST


@pytest.fixture
def checklist_file(tmp_path, sample_text):
    path = tmp_path / "CHECKLIST.md"
    path.write_text(sample_text, encoding="utf-8")
    return path
