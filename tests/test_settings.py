import pytest
from django.core.exceptions import ImproperlyConfigured

from consensus.settings import _env_positive_int

ENV = "STANCE_REPORTS_MAX_WORKERS"


def test_unset_means_unbounded(monkeypatch):
    monkeypatch.delenv(ENV, raising=False)

    assert _env_positive_int(ENV) is None


def test_blank_means_unbounded(monkeypatch):
    monkeypatch.setenv(ENV, "  ")

    assert _env_positive_int(ENV) is None


def test_number_is_parsed(monkeypatch):
    monkeypatch.setenv(ENV, " 4 ")

    assert _env_positive_int(ENV) == 4


@pytest.mark.parametrize("raw", ["four", "2.5"])
def test_non_numeric_value_names_the_variable(monkeypatch, raw):
    monkeypatch.setenv(ENV, raw)

    with pytest.raises(ImproperlyConfigured, match=ENV):
        _env_positive_int(ENV)


def test_zero_is_rejected(monkeypatch):
    monkeypatch.setenv(ENV, "0")

    with pytest.raises(ImproperlyConfigured, match="at least 1"):
        _env_positive_int(ENV)
