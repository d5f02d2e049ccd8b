"""Integration tests for the Cornucopia REST API."""

import pytest
from fastapi.testclient import TestClient

from cornucopia.api.app import create_app

SMALL_GAME = {"map_size": 2, "tribute_count": 6, "finale_day": 2, "random_seed": 42}


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


def _create(client, **body):
    body.setdefault("config", SMALL_GAME)
    resp = client.post("/api/games", json=body)
    assert resp.status_code == 200
    return resp.json()


class TestHealthCheck:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestGameLifecycle:
    def test_create_defaults(self, client):
        resp = client.post("/api/games", json={})
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "created"
        assert data["phase"] == "SETUP"
        assert data["day"] == 1
        assert data["weather"] == "Clear"
        assert data["tribute_count"] == 24
        assert data["survivors"] == 24
        assert data["steps"] == 0
        assert data["config"]["lethality"] == "medium"

    def test_create_with_config(self, client):
        data = _create(client, name="practice")
        assert data["name"] == "practice"
        assert data["tribute_count"] == 6
        assert data["config"]["map_size"] == 2

    def test_create_from_preset(self, client):
        data = _create(client, config=None, preset="battle_royale", seed=3)
        assert data["config"]["lethality"] == "high"
        assert data["config"]["random_seed"] == 3

    def test_unknown_preset(self, client):
        resp = client.post("/api/games", json={"preset": "hunger_mountain"})
        assert resp.status_code == 422
        assert "Unknown preset" in resp.json()["detail"]

    def test_bad_config_value(self, client):
        resp = client.post("/api/games", json={"config": {"lethality": "extreme"}})
        assert resp.status_code == 422

    def test_unknown_config_key(self, client):
        resp = client.post("/api/games", json={"config": {"arena_shape": "square"}})
        assert resp.status_code == 422

    def test_list_games(self, client):
        _create(client)
        _create(client)
        resp = client.get("/api/games")
        assert resp.status_code == 200
        assert len(resp.json()) == 2
        assert "config" not in resp.json()[0]

    def test_get_game(self, client):
        gid = _create(client)["id"]
        resp = client.get(f"/api/games/{gid}")
        assert resp.status_code == 200
        assert resp.json()["id"] == gid

    def test_get_game_not_found(self, client):
        assert client.get("/api/games/nonexistent").status_code == 404

    def test_delete_game(self, client):
        gid = _create(client)["id"]
        resp = client.delete(f"/api/games/{gid}")
        assert resp.status_code == 200
        assert resp.json()["deleted"] is True
        assert client.get(f"/api/games/{gid}").status_code == 404
        assert client.delete(f"/api/games/{gid}").status_code == 404

    def test_session_limit(self, monkeypatch):
        monkeypatch.setenv("CORNUCOPIA_MAX_SESSIONS", "1")
        client = TestClient(create_app())
        _create(client)
        resp = client.post("/api/games", json={"config": SMALL_GAME})
        assert resp.status_code == 409
        assert "limit" in resp.json()["detail"]


class TestAdvance:
    def test_single_step(self, client):
        gid = _create(client)["id"]
        resp = client.post(f"/api/games/{gid}/advance", json={})
        assert resp.status_code == 200
        data = resp.json()
        assert data["steps_taken"] == 1
        assert data["steps"] == 1
        assert data["phase"] == "BLOODBATH"
        assert data["status"] == "running"

    def test_multiple_steps_with_auto_continue(self, client):
        gid = _create(client)["id"]
        resp = client.post(f"/api/games/{gid}/advance", json={"n": 5, "auto_continue": True})
        data = resp.json()
        assert data["steps_taken"] == 5 or data["status"] == "completed"
        assert data["pending_deceased"] == 0
        assert data["paused_for_deceased"] is False

    def test_pauses_for_the_fallen(self, client):
        gid = _create(client)["id"]
        data = client.post(f"/api/games/{gid}/advance", json={"n": 1000}).json()
        if data["paused_for_deceased"]:
            assert data["pending_deceased"] > 0
            assert data["steps_taken"] < 1000
            ack = client.post(f"/api/games/{gid}/acknowledge").json()
            assert ack["pending_deceased"] == 0

    def test_runs_to_completion(self, client):
        gid = _create(client)["id"]
        data = client.post(
            f"/api/games/{gid}/advance", json={"n": 1000, "auto_continue": True},
        ).json()
        assert data["status"] == "completed"
        assert data["phase"] == "GAME_OVER"
        assert data["survivors"] <= 1

        again = client.post(f"/api/games/{gid}/advance", json={}).json()
        assert again["steps_taken"] == 0
        assert again["steps"] == data["steps"]

    def test_invalid_step_count(self, client):
        gid = _create(client)["id"]
        assert client.post(f"/api/games/{gid}/advance", json={"n": 0}).status_code == 422

    def test_advance_not_found(self, client):
        assert client.post("/api/games/nonexistent/advance", json={}).status_code == 404


class TestStateAndLogs:
    def test_state(self, client):
        gid = _create(client)["id"]
        data = client.get(f"/api/games/{gid}/state").json()
        assert data["phase"] == "SETUP"
        assert len(data["tributes"]) == 6
        assert data["grid"]["radius"] == 2
        assert len(data["grid"]["tiles"]) == 19

    def test_logs(self, client):
        gid = _create(client)["id"]
        client.post(f"/api/games/{gid}/advance", json={"n": 3, "auto_continue": True})
        logs = client.get(f"/api/games/{gid}/logs").json()
        assert logs[0]["message"] == "THE GAMES HAVE BEGUN!"
        assert [entry["seq"] for entry in logs] == list(range(len(logs)))

    def test_logs_since(self, client):
        gid = _create(client)["id"]
        client.post(f"/api/games/{gid}/advance", json={"n": 3, "auto_continue": True})
        logs = client.get(f"/api/games/{gid}/logs", params={"since": 1}).json()
        assert logs[0]["seq"] == 1

    def test_logs_by_category(self, client):
        gid = _create(client)["id"]
        client.post(f"/api/games/{gid}/advance", json={})
        logs = client.get(f"/api/games/{gid}/logs", params={"category": "gamemaker"}).json()
        assert [entry["message"] for entry in logs] == ["THE GAMES HAVE BEGUN!"]


class TestTributes:
    def test_list(self, client):
        gid = _create(client)["id"]
        resp = client.get(f"/api/games/{gid}/tributes")
        assert resp.status_code == 200
        tributes = resp.json()
        assert len(tributes) == 6
        assert tributes[0]["id"] == "tribute-1"
        assert tributes[0]["district"] == "D1"

    def test_filter_by_district(self, client):
        gid = _create(client)["id"]
        tributes = client.get(f"/api/games/{gid}/tributes", params={"district": "D2"}).json()
        assert [t["id"] for t in tributes] == ["tribute-3", "tribute-4"]

    def test_alive_only(self, client):
        gid = _create(client)["id"]
        client.post(f"/api/games/{gid}/advance", json={"n": 1000, "auto_continue": True})
        alive = client.get(f"/api/games/{gid}/tributes", params={"alive_only": True}).json()
        assert all(t["is_alive"] for t in alive)
        assert len(alive) <= 1

    def test_detail(self, client):
        gid = _create(client)["id"]
        resp = client.get(f"/api/games/{gid}/tributes/tribute-1")
        assert resp.status_code == 200
        data = resp.json()
        assert set(data["stats"]) == {"strength", "speed", "constitution", "intellect", "aggression"}
        assert data["relationships"]["tribute-2"] == {"trust": 65.0, "type": "Close Ally"}
        assert data["inventory"] == []

    def test_detail_not_found(self, client):
        gid = _create(client)["id"]
        assert client.get(f"/api/games/{gid}/tributes/tribute-99").status_code == 404
        assert client.get("/api/games/nonexistent/tributes").status_code == 404


class TestInteract:
    def test_forced_alliance(self, client):
        gid = _create(client, config={**SMALL_GAME, "use_career_alliance": False})["id"]
        resp = client.post(f"/api/games/{gid}/interact", json={
            "action": "alliance", "actor_id": "tribute-1", "target_id": "tribute-3",
        })
        assert resp.status_code == 200
        detail = client.get(f"/api/games/{gid}/tributes/tribute-1").json()
        assert detail["relationships"]["tribute-3"]["trust"] == 30
        logs = client.get(f"/api/games/{gid}/logs", params={"category": "gamemaker"}).json()
        assert logs[-1]["message"].startswith("GAMEMAKER: Forced")

    def test_unknown_action(self, client):
        gid = _create(client)["id"]
        resp = client.post(f"/api/games/{gid}/interact", json={
            "action": "sponsor", "actor_id": "tribute-1", "target_id": "tribute-2",
        })
        assert resp.status_code == 422

    def test_missing_tribute_is_ignored(self, client):
        gid = _create(client)["id"]
        resp = client.post(f"/api/games/{gid}/interact", json={
            "action": "gift", "actor_id": "tribute-1", "target_id": "tribute-99",
        })
        assert resp.status_code == 200
        assert client.get(f"/api/games/{gid}/logs").json() == []


class TestExperiments:
    def test_list_presets(self, client):
        resp = client.get("/api/presets")
        assert resp.status_code == 200
        names = [p["name"] for p in resp.json()]
        assert names == ["standard", "battle_royale", "long_survival", "chaos_mode"]

    def test_get_preset(self, client):
        resp = client.get("/api/presets/long_survival")
        assert resp.status_code == 200
        assert resp.json()["config"]["map_size"] == 7

    def test_get_preset_not_found(self, client):
        assert client.get("/api/presets/nonexistent").status_code == 404

    def test_compare(self, client):
        resp = client.post("/api/experiments/compare", json={
            "presets": ["standard", "chaos_mode"], "seeds": [0], "max_steps": 3,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["presets"]["standard"]["games"] == 1
        assert data["presets"]["chaos_mode"]["mean_steps"] == 3
        assert data["config_diffs"]["standard_vs_chaos_mode"]["tribute_count"] == [24, 36]

    def test_compare_unknown_preset(self, client):
        resp = client.post("/api/experiments/compare", json={"presets": ["standard", "nope"]})
        assert resp.status_code == 422


class TestSessionCap:
    @pytest.mark.parametrize("raw", ["", "0", "-3"])
    def test_unset_or_non_positive_is_unlimited(self, monkeypatch, raw):
        monkeypatch.setenv("CORNUCOPIA_MAX_SESSIONS", raw)
        client = TestClient(create_app())
        _create(client)
        _create(client)
        assert len(client.get("/api/games").json()) == 2

    def test_each_app_starts_empty(self):
        _create(TestClient(create_app()))
        assert TestClient(create_app()).get("/api/games").json() == []
