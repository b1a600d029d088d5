"""Tests for NotionkitConfig validation and token masking."""

from __future__ import annotations

import pytest

from notionkit.config import NotionkitConfig


def test_defaults():
    cfg = NotionkitConfig(token="tok")
    assert cfg.base_url == "https://api.notion.com/v1"
    assert cfg.timeout_seconds == 30.0
    assert cfg.http_proxy is None
    assert cfg.debug_dump_payload is False


@pytest.mark.parametrize(
    "base_url",
    ["http://localhost:8080/v1", "http://127.0.0.1/v1", "https://proxy.internal/v1"],
)
def test_allowed_base_urls(base_url):
    assert NotionkitConfig(token="t", base_url=base_url).base_url == base_url


def test_plain_http_remote_host_rejected():
    with pytest.raises(ValueError, match="insecure HTTP"):
        NotionkitConfig(token="t", base_url="http://api.notion.com/v1")


def test_non_http_scheme_rejected():
    with pytest.raises(ValueError, match="http"):
        NotionkitConfig(token="t", base_url="ftp://api.notion.com")


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_non_positive_timeout_rejected(timeout):
    with pytest.raises(ValueError, match="timeout_seconds"):
        NotionkitConfig(token="t", timeout_seconds=timeout)


def test_repr_masks_token():
    text = repr(NotionkitConfig(token="secret_abcdefgh"))
    assert "secret_abcdefgh" not in text
    assert "token='...efgh'" in text


def test_repr_short_token():
    assert "token='****'" in repr(NotionkitConfig(token="ab"))
