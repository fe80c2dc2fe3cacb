import pytest

from ieee754 import config
from ieee754.errors import IEEE754Error, LayoutNotFoundError, PrecisionError
from ieee754.layout import FLOAT32_LAYOUT, FLOAT64_LAYOUT


def test_defaults(monkeypatch):
    monkeypatch.delenv(config.PRECISION_ENV_VAR, raising=False)
    monkeypatch.delenv(config.LAYOUT_ENV_VAR, raising=False)
    assert config.get_default_precision() == config.DEFAULT_PRECISION == 20
    assert config.get_default_layout() == FLOAT32_LAYOUT


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv(config.PRECISION_ENV_VAR, " 7 ")
    monkeypatch.setenv(config.LAYOUT_ENV_VAR, "fp64")
    assert config.get_default_precision() == 7
    assert config.get_default_layout() == FLOAT64_LAYOUT


def test_blank_environment_uses_defaults(monkeypatch):
    monkeypatch.setenv(config.PRECISION_ENV_VAR, "")
    monkeypatch.setenv(config.LAYOUT_ENV_VAR, "  ")
    assert config.get_default_precision() == config.DEFAULT_PRECISION
    assert config.get_default_layout() == FLOAT32_LAYOUT


def test_bad_environment(monkeypatch):
    monkeypatch.setenv(config.PRECISION_ENV_VAR, "many")
    monkeypatch.setenv(config.LAYOUT_ENV_VAR, "float12")
    with pytest.raises(PrecisionError) as info:
        config.get_default_precision()
    assert isinstance(info.value, IEEE754Error)
    assert info.value.precision == "many"
    with pytest.raises(LayoutNotFoundError):
        config.get_default_layout()
