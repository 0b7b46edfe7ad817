"""Tests for the HTTP endpoints."""

from langchain_core.messages import HumanMessage

from agent.core.memory import ASSISTANT, SYSTEM, USER


class TestHealthAndPresets:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["message"]

    def test_presets(self, client):
        body = client.get("/api/presets").json()
        assert len(body["presets"]) == 6
        assert body["outputFormats"] == ["Text", "Markdown", "JSON", "List"]
        assert {p["outputFormat"] for p in body["presets"]} <= set(body["outputFormats"])


class TestChatEndpoint:
    """Test POST /api/chat."""

    def test_missing_message(self, client, store, llm, settings):
        response = client.post("/api/chat", json={})

        assert response.status_code == 400
        assert "error" in response.json()
        assert not store.exists(settings.default_session_id)
        assert llm.calls == []

    def test_empty_message(self, client, store):
        response = client.post("/api/chat", json={"message": "", "sessionId": "s1"})
        assert response.status_code == 400
        assert not store.exists("s1")

    def test_malformed_body(self, client):
        response = client.post("/api/chat", json={"message": "hi", "agentConfig": "nope"})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_new_session_created(self, client, store, llm, settings):
        response = client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 200
        assert response.json() == {"message": "reply 1", "sessionId": settings.default_session_id}
        assert llm.calls == [[HumanMessage(content="hi")]]
        assert [m.role for m in store.transcript(settings.default_session_id)] == [USER, ASSISTANT]

    def test_agent_config(self, client, store):
        payload = {
            "message": "hi",
            "sessionId": "s1",
            "agentConfig": {"role": "X", "goal": "Y", "outputFormat": "JSON"},
        }
        client.post("/api/chat", json=payload)
        client.post("/api/chat", json=payload)

        transcript = store.transcript("s1")
        assert [m.role for m in transcript] == [SYSTEM, USER, ASSISTANT, USER, ASSISTANT]
        assert "valid JSON" in transcript[0].content

    def test_partial_agent_config(self, client, store):
        client.post("/api/chat", json={"message": "hi", "sessionId": "s1", "agentConfig": {"goal": "G"}})
        assert store.transcript("s1")[0].content == "Goal: G"

    def test_upstream_failure(self, client, store, llm):
        llm.error = RuntimeError("quota exceeded")

        response = client.post("/api/chat", json={"message": "orphan", "sessionId": "s1"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"]
        assert body["details"] == "quota exceeded"

        llm.error = None
        response = client.post("/api/chat", json={"message": "again", "sessionId": "s1"})
        assert response.status_code == 200
        assert llm.calls[-1][0] == HumanMessage(content="orphan")


class TestResetEndpoint:
    """Test POST /api/reset."""

    def test_reset_session(self, client, store):
        client.post("/api/chat", json={"message": "hi", "sessionId": "s1"})

        response = client.post("/api/reset", json={"sessionId": "s1"})

        assert response.status_code == 200
        assert "message" in response.json()
        assert store.transcript("s1") == []

    def test_reset_default_without_body(self, client, store, settings):
        client.post("/api/chat", json={"message": "hi"})

        response = client.post("/api/reset")

        assert response.status_code == 200
        assert store.transcript(settings.default_session_id) == []

    def test_reset_unknown_session(self, client):
        response = client.post("/api/reset", json={"sessionId": "never-seen"})
        assert response.status_code == 200

    def test_reset_numeric_session_id(self, client, store):
        client.post("/api/chat", json={"message": "hi", "sessionId": "42"})

        response = client.post("/api/reset", json={"sessionId": 42})

        assert response.status_code == 200
        assert store.transcript("42") == []

    def test_reset_non_object_body(self, client, store, settings):
        client.post("/api/chat", json={"message": "hi"})

        response = client.post("/api/reset", json=[])

        assert response.status_code == 200
        assert "message" in response.json()
        assert store.transcript(settings.default_session_id) == []
