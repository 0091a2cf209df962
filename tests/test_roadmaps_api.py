"""
Tests for the roadmaps API.
"""


def create_roadmap(client, headers, goal_id, **extra):
    return client.post("/api/roadmaps", json={"goal_id": goal_id, "name": "Launch roadmap", **extra}, headers=headers)


class TestRoadmaps:
    def test_create(self, client, auth_headers, make_goal):
        goal = make_goal(auth_headers)
        r = create_roadmap(client, auth_headers, goal["id"], description="Four sprints")
        assert r.status_code == 201
        roadmap = r.json()["roadmap"]
        assert roadmap["status"] == "DRAFT"
        assert roadmap["description"] == "Four sprints"
        assert roadmap["goal"] == {"id": goal["id"], "title": goal["title"], "channel": "TRADING"}
        assert roadmap["sprints"] == []

    def test_one_roadmap_per_goal(self, client, auth_headers, make_goal):
        goal = make_goal(auth_headers)
        create_roadmap(client, auth_headers, goal["id"])
        r = create_roadmap(client, auth_headers, goal["id"])
        assert r.status_code == 409
        assert r.json() == {"error": "Roadmap already exists for this goal"}

    def test_name_is_required(self, client, auth_headers, make_goal):
        goal = make_goal(auth_headers)
        r = client.post("/api/roadmaps", json={"goal_id": goal["id"], "name": ""}, headers=auth_headers)
        assert r.status_code == 400

    def test_cannot_create_for_someone_elses_goal(self, client, auth_headers, other_headers, make_goal):
        goal = make_goal(auth_headers)
        r = create_roadmap(client, other_headers, goal["id"])
        assert r.status_code == 404
        assert r.json() == {"error": "Goal not found or access denied"}

    def test_list_scoped_and_filtered(self, client, auth_headers, other_headers, make_goal):
        first = make_goal(auth_headers)
        second = make_goal(auth_headers)
        theirs = make_goal(other_headers)
        create_roadmap(client, auth_headers, first["id"])
        create_roadmap(client, auth_headers, second["id"])
        create_roadmap(client, other_headers, theirs["id"])

        mine = client.get("/api/roadmaps", headers=auth_headers).json()["roadmaps"]
        assert {rm["goal_id"] for rm in mine} == {first["id"], second["id"]}

        filtered = client.get("/api/roadmaps", params={"goal_id": first["id"]}, headers=auth_headers).json()
        assert [rm["goal_id"] for rm in filtered["roadmaps"]] == [first["id"]]

    def test_update(self, client, auth_headers, make_goal):
        goal = make_goal(auth_headers)
        roadmap = create_roadmap(client, auth_headers, goal["id"]).json()["roadmap"]

        r = client.patch(f"/api/roadmaps/{roadmap['id']}", json={"status": "ACTIVE"}, headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["roadmap"]["status"] == "ACTIVE"
        assert r.json()["roadmap"]["name"] == "Launch roadmap"

    def test_other_user_sees_nothing(self, client, auth_headers, other_headers, make_goal):
        goal = make_goal(auth_headers)
        roadmap = create_roadmap(client, auth_headers, goal["id"]).json()["roadmap"]

        for method in ("get", "delete"):
            r = getattr(client, method)(f"/api/roadmaps/{roadmap['id']}", headers=other_headers)
            assert r.status_code == 404
            assert r.json() == {"error": "Roadmap not found or access denied"}
        r = client.patch(f"/api/roadmaps/{roadmap['id']}", json={"name": "Mine now"}, headers=other_headers)
        assert r.status_code == 404

    def test_delete(self, client, auth_headers, make_goal):
        goal = make_goal(auth_headers)
        roadmap = create_roadmap(client, auth_headers, goal["id"]).json()["roadmap"]

        r = client.delete(f"/api/roadmaps/{roadmap['id']}", headers=auth_headers)
        assert r.json() == {"success": True}
        assert client.get(f"/api/roadmaps/{roadmap['id']}", headers=auth_headers).status_code == 404

        # the goal can get a fresh roadmap afterwards
        assert create_roadmap(client, auth_headers, goal["id"]).status_code == 201
