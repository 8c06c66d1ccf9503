"""Config loading tests."""

import dataclasses

import pytest

from common.config import Config


ENV = {
    "PROJECT": "proj",
    "REGION": "europe-west4",
    "VERTEX_CF_AUTH_TOKEN": "topsecret",
    "MODEL_NAME": "gemini-2.0-flash",
    "RAG_CORPUS": "projects/proj/locations/europe-west4/ragCorpora/7",
}


def test_from_env_reads_all_fields(monkeypatch):
    for k, v in ENV.items():
        monkeypatch.setenv(k, v)
    monkeypatch.setenv("GATEWAY_PORT", "9000")
    monkeypatch.setenv("STRICT_NO_LOGGING_MODE", "yes")

    cfg = Config.from_env()

    assert cfg.PROJECT == "proj"
    assert cfg.REGION == "europe-west4"
    assert cfg.VERTEX_CF_AUTH_TOKEN == "topsecret"
    assert cfg.MODEL_NAME == "gemini-2.0-flash"
    assert cfg.RAG_CORPUS.endswith("ragCorpora/7")
    assert cfg.GATEWAY_PORT == 9000
    assert cfg.STRICT_NO_LOGGING_MODE is True
    assert cfg.missing_fields() == []


def test_missing_values_reported_not_raised(monkeypatch):
    for k in ENV:
        monkeypatch.delenv(k, raising=False)

    cfg = Config.from_env()

    assert set(cfg.missing_fields()) == set(ENV)


def test_bad_int_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("GATEWAY_PORT", "not-a-port")
    assert Config.from_env().GATEWAY_PORT == Config.GATEWAY_PORT


def test_secret_hidden_from_repr():
    cfg = Config(VERTEX_CF_AUTH_TOKEN="topsecret")
    assert "topsecret" not in repr(cfg)


def test_config_is_immutable():
    cfg = Config(PROJECT="proj")
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.PROJECT = "other"
