#!/usr/bin/env python3
"""Tests for _update_check module.

The network is never touched: requests.get and subprocess.Popen are patched.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

# Add lib to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

import _update_check  # noqa: E402
from _update_check import (  # noqa: E402
    fetch_latest_version,
    is_cache_fresh,
    read_cached_update,
    refresh_update_cache,
    spawn_background_refresh,
    write_cache,
)

NOW = 1_700_000_000.0


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / "cache.json"


def release_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


class TestReadCachedUpdate:
    def test_newer_version_from_fresh_cache(self, cache_file):
        write_cache("v1.3.0", "1.2.0", now=NOW, cache_file=cache_file)
        assert read_cached_update("1.2.0", now=NOW + 60, cache_file=cache_file) == "v1.3.0"

    def test_stale_cache(self, cache_file):
        write_cache("v1.3.0", "1.2.0", now=NOW, cache_file=cache_file)
        assert read_cached_update("1.2.0", now=NOW + 86400, cache_file=cache_file) is None

    def test_cache_for_other_version(self, cache_file):
        write_cache("v1.3.0", "1.1.0", now=NOW, cache_file=cache_file)
        assert read_cached_update("1.2.0", now=NOW, cache_file=cache_file) is None

    def test_same_version_ignoring_prefix(self, cache_file):
        write_cache("v1.2.0", "1.2.0", now=NOW, cache_file=cache_file)
        assert read_cached_update("1.2.0", now=NOW, cache_file=cache_file) is None

    def test_missing_cache(self, cache_file):
        assert read_cached_update("1.2.0", now=NOW, cache_file=cache_file) is None

    @pytest.mark.parametrize(
        "content",
        [
            "{broken",
            "[]",
            json.dumps({"latest_version": "v2.0.0", "current_version": "1.2.0", "timestamp": "x"}),
            json.dumps({"latest_version": 2, "current_version": "1.2.0", "timestamp": NOW}),
        ],
    )
    def test_corrupt_cache(self, cache_file, content):
        cache_file.write_text(content, encoding="utf-8")
        assert read_cached_update("1.2.0", now=NOW, cache_file=cache_file) is None

    def test_default_cache_location(self, tmp_path):
        write_cache("v3.0.0", "1.2.0", now=NOW)
        assert (tmp_path / "update_check.json").exists()
        assert read_cached_update("1.2.0", now=NOW) == "v3.0.0"

    @pytest.mark.parametrize("ttl", ["1d", None, 0])
    def test_bad_ttl_config_uses_default_ttl(self, cache_file, config_file, ttl):
        config_file.write_text(json.dumps({"update_check": {"ttl_seconds": ttl}}))
        write_cache("v1.3.0", "1.2.0", now=NOW, cache_file=cache_file)

        assert is_cache_fresh(now=NOW + 3600, cache_file=cache_file) is True
        assert read_cached_update("1.2.0", now=NOW + 3600, cache_file=cache_file) == "v1.3.0"
        assert read_cached_update("1.2.0", now=NOW + 86400, cache_file=cache_file) is None


class TestFetchLatestVersion:
    def test_returns_tag_name(self):
        with patch.object(
            _update_check.requests, "get", return_value=release_response({"tag_name": "v2.0.0"})
        ) as mock_get:
            assert fetch_latest_version() == "v2.0.0"

        _, kwargs = mock_get.call_args
        assert kwargs["timeout"] == 2

    def test_network_error(self):
        with patch.object(
            _update_check.requests,
            "get",
            side_effect=requests.exceptions.ConnectionError("offline"),
        ):
            assert fetch_latest_version() is None

    def test_http_error(self):
        response = release_response({})
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("403")
        with patch.object(_update_check.requests, "get", return_value=response):
            assert fetch_latest_version() is None

    def test_invalid_json(self):
        response = MagicMock()
        response.json.side_effect = ValueError("not json")
        with patch.object(_update_check.requests, "get", return_value=response):
            assert fetch_latest_version() is None

    def test_missing_tag(self):
        with patch.object(
            _update_check.requests, "get", return_value=release_response({"name": "x"})
        ):
            assert fetch_latest_version() is None


class TestRefreshUpdateCache:
    def test_writes_cache(self, cache_file):
        with patch.object(
            _update_check.requests, "get", return_value=release_response({"tag_name": "v1.5.0"})
        ):
            assert refresh_update_cache("1.2.0", cache_file=cache_file) == "v1.5.0"

        data = json.loads(cache_file.read_text(encoding="utf-8"))
        assert data["latest_version"] == "v1.5.0"
        assert data["current_version"] == "1.2.0"
        assert isinstance(data["timestamp"], int)

    def test_failed_fetch_leaves_no_cache(self, cache_file):
        with patch.object(
            _update_check.requests,
            "get",
            side_effect=requests.exceptions.Timeout("slow"),
        ):
            assert refresh_update_cache("1.2.0", cache_file=cache_file) is None
        assert not cache_file.exists()

    def test_disabled(self, cache_file, config_file):
        config_file.write_text(json.dumps({"update_check": {"enabled": False}}))
        with patch.object(_update_check.requests, "get") as mock_get:
            assert refresh_update_cache("1.2.0", cache_file=cache_file) is None
        mock_get.assert_not_called()


class TestSpawnBackgroundRefresh:
    def test_fresh_cache_skips_refresh(self):
        write_cache("v1.0.0", "1.0.0", now=NOW)
        with patch.object(_update_check.subprocess, "Popen") as mock_popen:
            assert spawn_background_refresh(now=NOW + 10) is False
        mock_popen.assert_not_called()

    def test_stale_cache_starts_detached_process(self):
        assert is_cache_fresh(now=NOW) is False
        with patch.object(_update_check.subprocess, "Popen") as mock_popen:
            assert spawn_background_refresh(now=NOW) is True

        args, kwargs = mock_popen.call_args
        assert args[0][-1].endswith("update_check.py")
        assert kwargs["start_new_session"] is True

    def test_popen_failure(self):
        with patch.object(
            _update_check.subprocess, "Popen", side_effect=OSError("no fork")
        ):
            assert spawn_background_refresh(now=NOW) is False

    def test_disabled(self, config_file):
        config_file.write_text(json.dumps({"update_check": {"enabled": False}}))
        with patch.object(_update_check.subprocess, "Popen") as mock_popen:
            assert spawn_background_refresh(now=NOW) is False
        mock_popen.assert_not_called()
