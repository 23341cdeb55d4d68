"""Tests for httpx client construction."""

import logging
import ssl

import httpx
import pytest

from jira_rest_client.client.factory import (
    create_http_client,
    create_proxy,
    create_ssl_context,
    create_timeout,
)


class TestSSLContext:
    """Tests for create_ssl_context."""

    def test_full_verification_by_default(self, config):
        context = create_ssl_context(config)
        assert context.check_hostname is True
        assert context.verify_mode == ssl.CERT_REQUIRED

    def test_host_verification_disabled(self, config):
        context = create_ssl_context(config.model_copy(update={"ssl_verify_host": False}))
        assert context.check_hostname is False
        assert context.verify_mode == ssl.CERT_REQUIRED

    def test_peer_verification_disabled(self, config):
        context = create_ssl_context(config.model_copy(update={"ssl_verify_peer": False}))
        assert context.check_hostname is False
        assert context.verify_mode == ssl.CERT_NONE

    def test_missing_client_certificate(self, config, tmp_path):
        cfg = config.model_copy(update={"ssl_cert": str(tmp_path / "client.pem")})
        with pytest.raises(OSError):
            create_ssl_context(cfg)


class TestProxy:
    """Tests for create_proxy."""

    def test_no_proxy(self, config):
        assert create_proxy(config) is None

    def test_proxy_without_credentials(self, config):
        proxy = create_proxy(config.model_copy(update={"proxy_server": "proxy.local", "proxy_port": 3128}))
        assert str(proxy.url) == "http://proxy.local:3128"
        assert proxy.auth is None

    def test_proxy_with_credentials(self, config):
        proxy = create_proxy(config.model_copy(update={
            "proxy_server": "proxy.local",
            "proxy_port": 3128,
            "proxy_user": "pu",
            "proxy_password": "pp",
        }))
        assert proxy.auth == ("pu", "pp")


class TestTimeout:
    """Tests for create_timeout."""

    def test_read_waits_indefinitely_by_default(self, config):
        timeout = create_timeout(config)
        assert timeout.connect == 30.0
        assert timeout.read is None

    def test_read_timeout(self, config):
        timeout = create_timeout(config.model_copy(update={"timeout": 5.0, "read_timeout": 120.0}))
        assert timeout.connect == 5.0
        assert timeout.read == 120.0


class TestCreateHttpClient:
    """Tests for create_http_client."""

    def test_client_settings(self, config):
        with create_http_client(config) as client:
            assert client.follow_redirects is True
            assert client.trust_env is False
            assert client.headers["User-Agent"] == "jira-rest-client"
            assert client.timeout.connect == 30.0

    def test_redirects_disabled(self, config):
        with create_http_client(config.model_copy(update={"follow_redirects": False})) as client:
            assert client.follow_redirects is False

    def test_custom_user_agent(self, config):
        with create_http_client(config.model_copy(update={"user_agent": "jira-sync/2.0"})) as client:
            assert client.headers["User-Agent"] == "jira-sync/2.0"

    def test_no_hooks_unless_verbose(self, config):
        with create_http_client(config) as client:
            assert client.event_hooks["request"] == []
            assert client.event_hooks["response"] == []

    def test_verbose_trace_redacts_credentials(self, config, caplog):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, headers={"Set-Cookie": "JSESSIONID=abc"})
        )
        cfg = config.model_copy(update={"verbose": True})
        log = logging.getLogger("jira-rest-client")

        with caplog.at_level(logging.DEBUG, logger="jira-rest-client"):
            with create_http_client(cfg, transport, log) as client:
                client.get("https://jira.example.com/", headers={"Authorization": "Basic c2VjcmV0"})

        text = caplog.text
        assert "> GET https://jira.example.com/" in text
        assert "< 200 OK" in text
        assert "> authorization: [redacted]" in text
        assert "< set-cookie: [redacted]" in text
        assert "c2VjcmV0" not in text
        assert "JSESSIONID" not in text
