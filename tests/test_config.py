from __future__ import annotations

import pytest

from pqconform.registry import DEFAULT_ADAPTERS
from pqconform_cli.config import Settings


def test_defaults_without_environment():
    settings = Settings.from_env({})
    assert settings == Settings(jobs=1, log_level="WARNING", adapters=DEFAULT_ADAPTERS)


def test_values_are_read_from_environment():
    settings = Settings.from_env(
        {
            "PQCONFORM_JOBS": "4",
            "PQCONFORM_LOG_LEVEL": "debug",
            "PQCONFORM_ADAPTERS": "pqconform_classic, ,my_adapters",
        }
    )
    assert settings.jobs == 4
    assert settings.log_level == "DEBUG"
    assert settings.adapters == ("pqconform_classic", "my_adapters")


@pytest.mark.parametrize(
    "env",
    [
        {"PQCONFORM_JOBS": "many"},
        {"PQCONFORM_JOBS": "0"},
        {"PQCONFORM_LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_values_are_rejected(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)
