import pytest

requests = pytest.importorskip("requests")

import cli


class FakeResponse:
    def __init__(self, body, status_code=200):
        self._body = body
        self.status_code = status_code
        self.text = str(body)

    def json(self):
        return self._body


@pytest.fixture
def calls(monkeypatch):
    seen = []

    def fake_get(url, params=None, timeout=None):
        seen.append(("GET", url, params))
        return FakeResponse({"success": True})

    def fake_post(url, json=None, timeout=None):
        seen.append(("POST", url, json))
        if json.get("candidate") == "Zed":
            return FakeResponse({"success": False, "kind": "InvalidCandidate"}, 500)
        return FakeResponse({"success": True})

    monkeypatch.setattr(cli.requests, "get", fake_get)
    monkeypatch.setattr(cli.requests, "post", fake_post)
    return seen


def test_vote_command_posts_body(calls, capsys):
    assert cli.main(["--url", "http://x", "vote", "--candidate", "Alice", "--from", "0xA"]) == 0
    assert calls == [("POST", "http://x/api/vote", {"candidate": "Alice", "from": "0xA"})]
    assert '"success": true' in capsys.readouterr().out


def test_vote_failure_exit_code(calls):
    assert cli.main(["--url", "http://x", "vote", "--candidate", "Zed"]) == 1
    assert calls[0][2] == {"candidate": "Zed"}


def test_results_passes_candidates(calls):
    cli.main(["--url", "http://x", "results", "--candidate", "Bob", "--candidate", "Alice"])
    assert calls == [("GET", "http://x/api/results", {"candidate": ["Bob", "Alice"]})]


def test_votes_and_status(calls):
    cli.main(["--url", "http://x", "votes", "--candidate", "Bob"])
    cli.main(["--url", "http://x", "status", "0xA"])
    assert calls[0] == ("GET", "http://x/api/votes", {"candidate": "Bob"})
    assert calls[1] == ("GET", "http://x/api/voters/0xA", None)


def test_connection_error_exit_code(monkeypatch):
    def refuse(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(cli.requests, "get", refuse)
    assert cli.main(["candidates"]) == 2
