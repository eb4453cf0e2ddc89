# tests/test_api.py
"""Tests for the REST API, using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from repochat.api import create_app
from repochat.core.config import RepoChatConfig
from repochat.runtime import build_runtime


@pytest.fixture
def runtime(completion, store):
    config = RepoChatConfig.model_validate(
        {"ingest": {"inter_file_delay": 0}, "storage": {"backend": "memory"}}
    )
    return build_runtime(config, completion=completion, store=store)


@pytest.fixture
def client(runtime):
    return TestClient(create_app(runtime))


@pytest.fixture
def repo(tmp_path):
    (tmp_path / "main.py").write_text("print('hello')\n", encoding="utf-8")
    (tmp_path / "util.py").write_text("def helper(): ...\n", encoding="utf-8")
    (tmp_path / "debug.log").write_text("noise\n", encoding="utf-8")
    return tmp_path


def _ingest(client, repo):
    response = client.post("/sessions", json={"path": str(repo)})
    assert response.status_code == 200, response.text
    return response.json()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["storage_available"] is True


class TestSessions:
    def test_create_session(self, client, repo):
        data = _ingest(client, repo)

        assert data["session"]["session_id"].startswith("repo-")
        assert data["session"]["chat_id"].startswith("chat-")
        assert data["report"]["attempted"] == 2
        assert data["report"]["stored"] == 2
        assert data["status"] == "Processed 2 files. Ready to query!"

    def test_missing_path_is_404(self, client, tmp_path):
        response = client.post("/sessions", json={"path": str(tmp_path / "nope")})

        assert response.status_code == 404

    def test_busy_is_409(self, client, runtime, repo):
        runtime.manager._lock.acquire()
        try:
            response = client.post("/sessions", json={"path": str(repo)})
            query = client.post("/query", json={"question": "anything"})
        finally:
            runtime.manager._lock.release()

        assert response.status_code == 409
        assert query.status_code == 409

    def test_list_sessions_and_summaries(self, client, repo):
        session_id = _ingest(client, repo)["session"]["session_id"]

        sessions = client.get("/sessions").json()
        summaries = client.get(f"/sessions/{session_id}/summaries").json()

        assert [s["session_id"] for s in sessions] == [session_id]
        assert [s["path"] for s in summaries] == ["main.py", "util.py"]
        assert all(s["status"] == "ok" for s in summaries)

    def test_unknown_session_summaries_404(self, client):
        assert client.get("/sessions/repo-nope/summaries").status_code == 404


class TestQuery:
    def test_query_active_session(self, client, repo, completion):
        session_id = _ingest(client, repo)["session"]["session_id"]

        response = client.post("/query", json={"question": "How many files?"})

        assert response.status_code == 200
        data = response.json()
        assert data["answer"] == "A short summary."
        assert data["status"] == "answered"
        assert data["intent"] == "file_count"
        assert data["artifact_count"] == 2
        assert data["session_id"] == session_id
        assert "The repository contains 2 files" in completion.prompts[-1]

    def test_query_explicit_session(self, client, tmp_path, completion):
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "alpha.py").write_text("A = 1\n", encoding="utf-8")
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "beta.py").write_text("B = 2\n", encoding="utf-8")
        first = _ingest(client, tmp_path / "a")["session"]
        _ingest(client, tmp_path / "b")

        request = {"question": "q", "session_id": first["session_id"]}
        data = client.post("/query", json=request).json()

        assert data["session_id"] == first["session_id"]
        assert data["chat_id"] == first["chat_id"]
        assert "File: alpha.py" in completion.prompts[-1]
        assert "beta.py" not in completion.prompts[-1]
        messages = client.get(f"/transcripts/{first['chat_id']}").json()["messages"]
        assert messages[-2] == {"sender": "User", "text": "q"}

    def test_query_after_restart_uses_latest(self, client, repo, store, completion):
        session = _ingest(client, repo)["session"]
        config = RepoChatConfig.model_validate(
            {"ingest": {"inter_file_delay": 0}, "storage": {"backend": "memory"}}
        )
        restarted = TestClient(create_app(build_runtime(config, completion=completion, store=store)))

        data = restarted.post("/query", json={"question": "q"}).json()

        assert data["status"] == "answered"
        assert data["session_id"] == session["session_id"]

    def test_query_unknown_session_404(self, client):
        response = client.post("/query", json={"question": "q", "session_id": "repo-nope"})

        assert response.status_code == 404

    def test_query_before_ingest(self, client):
        data = client.post("/query", json={"question": "q"}).json()

        assert data["status"] == "no_session"
        assert data["session_id"] is None

    def test_empty_question_rejected(self, client):
        assert client.post("/query", json={"question": ""}).status_code == 422


class TestTranscripts:
    def test_transcript(self, client, repo):
        chat_id = _ingest(client, repo)["session"]["chat_id"]
        client.post("/query", json={"question": "What is this repo about?"})

        data = client.get(f"/transcripts/{chat_id}").json()

        senders = [m["sender"] for m in data["messages"]]
        assert senders[0] == "AI"
        assert data["messages"][-2] == {"sender": "User", "text": "What is this repo about?"}
        assert senders[-1] == "AI"

    def test_unknown_transcript_404(self, client):
        assert client.get("/transcripts/chat-nope").status_code == 404
