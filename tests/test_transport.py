"""Tests for host-failover transport."""

from __future__ import annotations

import logging
from typing import Any

import pytest
import requests

from tests.conftest import ACTIVE, STANDBY
from tests.fakes import FakeWebHdfs, make_response
from webhdfs_client._errors import (
    BadRequest,
    InvalidRequest,
    NetworkFailure,
    NoActiveHost,
    NotFound,
    StandbyError,
)
from webhdfs_client._path import HdfsPath
from webhdfs_client._transport import Transport


class Recorder:
    """Executor that records calls and replays canned responses or exceptions."""

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def __call__(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append((method, url, kwargs))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def _transport(executor: Any, hosts: list[str] | None = None, **kwargs: Any) -> Transport:
    return Transport(hosts or [ACTIVE, STANDBY], "hdfs", executor=executor, **kwargs)


class TestConstruction:
    def test_requires_hosts(self) -> None:
        with pytest.raises(ValueError):
            Transport([], "hdfs", executor=Recorder())

    def test_properties(self) -> None:
        t = _transport(Recorder(), timeout=7)
        assert t.hosts == (ACTIVE, STANDBY)
        assert t.user == "hdfs"
        assert t.timeout == 7

    def test_trailing_slash_stripped(self) -> None:
        t = _transport(Recorder(), hosts=["http://nn1:50070/"])
        assert t.hosts == ("http://nn1:50070",)

    def test_owns_session_without_executor(self) -> None:
        t = Transport([ACTIVE], "hdfs")
        assert t._session is not None
        t.close()
        assert t._session is None
        t.close()


class TestBuildUrl:
    def test_default_api_root(self) -> None:
        url = _transport(Recorder()).build_url(ACTIVE, HdfsPath("/user/data.csv"))
        assert url == "http://nn1:50070/webhdfs/v1/user/data.csv"

    def test_root_path(self) -> None:
        assert _transport(Recorder()).build_url(ACTIVE, HdfsPath("/")) == "http://nn1:50070/webhdfs/v1/"

    def test_custom_api_root(self) -> None:
        t = _transport(Recorder(), api_root="gateway/webhdfs/v1")
        assert t.build_url(ACTIVE, HdfsPath("/a")) == "http://nn1:50070/gateway/webhdfs/v1/a"

    def test_path_is_url_encoded(self) -> None:
        url = _transport(Recorder()).build_url(ACTIVE, HdfsPath("/dir with space/50%.txt"))
        assert url.endswith("/webhdfs/v1/dir%20with%20space/50%25.txt")

    @pytest.mark.parametrize("host", ["nn1:50070", "ftp://nn1", "http://", "not a url"])
    def test_invalid_host(self, host: str) -> None:
        with pytest.raises(InvalidRequest):
            _transport(Recorder()).build_url(host, HdfsPath("/a"))


class TestExecute:
    def test_query_parameters(self) -> None:
        rec = Recorder(make_response(200, {"boolean": True}))
        _transport(rec).execute("DELETE", "/a", "DELETE", {"recursive": True, "skip": None, "n": 3})
        method, url, kwargs = rec.calls[0]
        assert method == "DELETE"
        assert url == "http://nn1:50070/webhdfs/v1/a"
        assert kwargs["params"] == [("op", "DELETE"), ("user.name", "hdfs"), ("recursive", "true"), ("n", "3")]

    def test_false_is_serialized(self) -> None:
        rec = Recorder(make_response(200, {"boolean": True}))
        _transport(rec).execute("DELETE", "/a", "DELETE", {"recursive": False})
        assert ("recursive", "false") in rec.calls[0][2]["params"]

    def test_timeout_passed(self) -> None:
        rec = Recorder(make_response(200, {}))
        _transport(rec, timeout=3).execute("GET", "/a", "GETFILESTATUS")
        assert rec.calls[0][2]["timeout"] == 3

    @pytest.mark.parametrize(("method", "follow"), [("GET", True), ("PUT", False), ("POST", False), ("DELETE", False)])
    def test_redirects_followed_only_for_get(self, method: str, follow: bool) -> None:
        rec = Recorder(make_response(200, {}))
        _transport(rec).execute(method, "/a", "OP")
        assert rec.calls[0][2]["allow_redirects"] is follow

    def test_redirect_status_is_success(self) -> None:
        rec = Recorder(make_response(307, headers={"Location": "http://dn/x"}))
        response = _transport(rec).execute("PUT", "/a", "CREATE")
        assert response.headers["Location"] == "http://dn/x"

    def test_invalid_host_not_retried(self) -> None:
        rec = Recorder()
        with pytest.raises(InvalidRequest):
            _transport(rec, hosts=["nn1:50070", ACTIVE]).execute("GET", "/a", "GETFILESTATUS")
        assert rec.calls == []

    def test_invalid_url_from_http_layer(self) -> None:
        rec = Recorder(requests.exceptions.InvalidURL("bad"), make_response(200, {}))
        with pytest.raises(InvalidRequest):
            _transport(rec).execute("GET", "/a", "GETFILESTATUS")
        assert len(rec.calls) == 1


class TestFailover:
    def test_first_host_down_uses_second(self) -> None:
        fake = FakeWebHdfs(down={"nn1:50070"})
        fake.add_file("/a.txt", b"abc")
        payload = _transport(fake).execute_json("GET", "/a.txt", "GETFILESTATUS")
        assert payload["FileStatus"]["length"] == 3
        assert [c.host for c in fake.calls] == ["nn1:50070", "nn2:50070"]

    def test_each_call_restarts_from_first_host(self) -> None:
        rec = Recorder(
            requests.ConnectionError("down"),
            make_response(200, {}),
            requests.ConnectionError("down"),
            make_response(200, {}),
        )
        t = _transport(rec)
        t.execute("GET", "/a", "GETFILESTATUS")
        t.execute("GET", "/a", "GETFILESTATUS")
        hosts = [url.split("/webhdfs")[0] for _, url, _ in rec.calls]
        assert hosts == [ACTIVE, STANDBY, ACTIVE, STANDBY]

    @pytest.mark.parametrize(
        "failure",
        [
            requests.ConnectionError("refused"),
            requests.exceptions.ConnectTimeout("slow"),
            requests.exceptions.ReadTimeout("slow"),
            requests.exceptions.ChunkedEncodingError("cut"),
        ],
    )
    def test_network_failures_fail_over(self, failure: Exception) -> None:
        rec = Recorder(failure, make_response(200, {"boolean": True}))
        assert _transport(rec).execute_json("PUT", "/a", "MKDIRS") == {"boolean": True}

    def test_all_hosts_down(self) -> None:
        last = requests.ConnectionError("nn2 refused")
        rec = Recorder(requests.ConnectionError("nn1 refused"), last)
        with pytest.raises(NoActiveHost) as exc_info:
            _transport(rec).execute("GET", "/a", "GETFILESTATUS")
        err = exc_info.value
        assert isinstance(err, NetworkFailure)
        assert isinstance(err.last_error, NetworkFailure)
        assert err.last_error.host == STANDBY
        assert err.last_error.__cause__ is last
        assert err.path == "/a"

    def test_application_error_is_authoritative(self) -> None:
        fake = FakeWebHdfs()
        with pytest.raises(NotFound) as exc_info:
            _transport(fake).execute("GET", "/missing", "GETFILESTATUS")
        assert exc_info.value.host == ACTIVE
        assert [c.host for c in fake.calls] == ["nn1:50070"]

    def test_standby_not_retried(self) -> None:
        fake = FakeWebHdfs()
        fake.standby.add("nn1:50070")
        with pytest.raises(StandbyError):
            _transport(fake).execute("GET", "/", "GETFILESTATUS")
        assert len(fake.calls) == 1

    def test_error_after_failover(self) -> None:
        rec = Recorder(requests.ConnectionError("down"), make_response(400, "bad op"))
        with pytest.raises(BadRequest) as exc_info:
            _transport(rec).execute("GET", "/a", "NOPE")
        assert exc_info.value.host == STANDBY

    def test_logs_inactive_host(self, caplog: pytest.LogCaptureFixture) -> None:
        rec = Recorder(requests.ConnectionError("down"), make_response(200, {}))
        with caplog.at_level(logging.INFO, logger="webhdfs_client._transport"):
            _transport(rec).execute("GET", "/a", "GETFILESTATUS")
        assert f"Host '{ACTIVE}' is inactive, or unreachable" in caplog.text


class TestExecuteJson:
    def test_decodes_object(self) -> None:
        rec = Recorder(make_response(200, {"boolean": False}))
        assert _transport(rec).execute_json("PUT", "/a", "RENAME") == {"boolean": False}

    def test_unparseable_body_is_network_failure(self) -> None:
        rec = Recorder(make_response(200, "<html>proxy</html>"))
        with pytest.raises(NetworkFailure):
            _transport(rec).execute_json("GET", "/a", "GETFILESTATUS")

    def test_non_object_body_is_network_failure(self) -> None:
        rec = Recorder(make_response(200, "[1, 2]"))
        with pytest.raises(NetworkFailure):
            _transport(rec).execute_json("GET", "/a", "GETFILESTATUS")


class TestRequest:
    def test_single_url_no_failover(self) -> None:
        rec = Recorder(requests.ConnectionError("dn down"), make_response(201))
        with pytest.raises(NetworkFailure) as exc_info:
            _transport(rec).request("PUT", "http://dn:50075/webhdfs/v1/a?op=CREATE", data=b"x")
        assert not isinstance(exc_info.value, NoActiveHost)
        assert exc_info.value.host == "dn:50075"
        assert len(rec.calls) == 1

    def test_sends_body_and_headers(self) -> None:
        rec = Recorder(make_response(201))
        _transport(rec).request("PUT", "http://dn/x", data=b"payload", headers={"Content-Type": "application/octet-stream"})
        _, url, kwargs = rec.calls[0]
        assert url == "http://dn/x"
        assert kwargs["data"] == b"payload"
        assert kwargs["headers"] == {"Content-Type": "application/octet-stream"}
        assert kwargs["allow_redirects"] is False

    def test_classifies_errors(self) -> None:
        rec = Recorder(make_response(404, "gone"))
        with pytest.raises(NotFound):
            _transport(rec).request("POST", "http://dn/x", data=b"")
