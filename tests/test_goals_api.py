"""
Tests for the goals and goal templates APIs, including prompt rendering.
"""

from goalpath.db.models.generated_plan import GeneratedPlan, GeneratedPlanItem
from goalpath.db.models.knowledge_assessment import KnowledgeAssessment
from goalpath.db.models.roadmap import Roadmap


def template_id_by_name(client, headers, name):
    templates = client.get("/api/goal-templates", headers=headers).json()["templates"]
    return next(t["id"] for t in templates if t["name"] == name)


class TestGoals:
    def test_create_with_defaults(self, client, auth_headers, make_project):
        project = make_project(auth_headers)
        r = client.post(
            "/api/goals",
            json={"project_id": project["id"], "title": "First $50", "channel": "YOUTUBE"},
            headers=auth_headers,
        )
        assert r.status_code == 201
        goal = r.json()["goal"]
        assert goal["timebox_days"] == 30
        assert goal["budget_usd"] == 0
        assert goal["success_metric"] == "$50 net"
        assert goal["constraints"] == []
        assert goal["active_plan_id"] is None

    def test_unknown_channel(self, client, auth_headers, make_project):
        project = make_project(auth_headers)
        r = client.post(
            "/api/goals",
            json={"project_id": project["id"], "title": "Nope", "channel": "PODCAST"},
            headers=auth_headers,
        )
        assert r.status_code == 400

    def test_project_must_exist(self, client, auth_headers):
        r = client.post(
            "/api/goals",
            json={"project_id": "00000000-0000-0000-0000-000000000000", "title": "Orphan", "channel": "SEO"},
            headers=auth_headers,
        )
        assert r.status_code == 404
        assert r.json() == {"error": "Project not found"}

    def test_template_must_exist(self, client, auth_headers, make_project):
        project = make_project(auth_headers)
        r = client.post(
            "/api/goals",
            json={
                "project_id": project["id"],
                "title": "Templated",
                "channel": "SEO",
                "template_id": "00000000-0000-0000-0000-000000000000",
            },
            headers=auth_headers,
        )
        assert r.status_code == 404

    def test_list_is_scoped_to_owner(self, client, auth_headers, other_headers, make_goal):
        mine = make_goal(auth_headers)
        make_goal(other_headers)

        goals = client.get("/api/goals", headers=auth_headers).json()["goals"]
        assert [g["id"] for g in goals] == [mine["id"]]

    def test_list_filters_by_project(self, client, auth_headers, make_goal):
        first = make_goal(auth_headers)
        make_goal(auth_headers)

        r = client.get("/api/goals", params={"project_id": first["project_id"]}, headers=auth_headers)
        assert [g["id"] for g in r.json()["goals"]] == [first["id"]]

    def test_other_users_goal_looks_missing(self, client, auth_headers, other_headers, make_goal):
        goal = make_goal(auth_headers)
        r = client.get(f"/api/goals/{goal['id']}", headers=other_headers)
        assert r.status_code == 404
        assert r.json() == {"error": "Goal not found or access denied"}
        assert client.delete(f"/api/goals/{goal['id']}", headers=other_headers).status_code == 404

    def test_update(self, client, auth_headers, make_goal):
        goal = make_goal(auth_headers)
        r = client.patch(
            f"/api/goals/{goal['id']}",
            json={"timebox_days": 14, "niche": "options", "profile_json": {"capital": 1000}},
            headers=auth_headers,
        )
        assert r.status_code == 200
        body = r.json()["goal"]
        assert body["timebox_days"] == 14
        assert body["niche"] == "options"
        assert body["profile_json"] == {"capital": 1000}
        assert body["title"] == goal["title"]

    def test_update_rejects_null_required_field(self, client, auth_headers, make_goal):
        goal = make_goal(auth_headers)
        r = client.patch(f"/api/goals/{goal['id']}", json={"title": None}, headers=auth_headers)
        assert r.status_code == 400
        assert r.json() == {"error": "title cannot be null"}

    def test_delete_cascades_to_assessment_plan_and_roadmap(self, client, auth_headers, completed_assessment, db):
        goal, assessment_id, _ = completed_assessment()
        r = client.post(
            "/api/plans",
            json={"goal_id": goal["id"], "assessment_id": assessment_id, "template_id": "trading-beginner-plan"},
            headers=auth_headers,
        )
        assert r.status_code == 201
        client.post("/api/roadmaps", json={"goal_id": goal["id"], "name": "Road"}, headers=auth_headers)
        assert db.query(GeneratedPlanItem).count() > 0

        r = client.delete(f"/api/goals/{goal['id']}", headers=auth_headers)
        assert r.json() == {"success": True}
        assert client.get(f"/api/goals/{goal['id']}", headers=auth_headers).status_code == 404

        db.expire_all()
        assert db.query(KnowledgeAssessment).count() == 0
        assert db.query(GeneratedPlan).count() == 0
        assert db.query(GeneratedPlanItem).count() == 0
        assert db.query(Roadmap).count() == 0


class TestGoalPrompt:
    def test_renders_trading_template(self, client, auth_headers, make_goal):
        template_id = template_id_by_name(client, auth_headers, "Trading Goal Template")
        goal = make_goal(
            auth_headers,
            template_id=template_id,
            profile_json={"capital": 500, "risk_tolerance": "low", "markets": "stocks", "paper_trade_only": True},
        )

        r = client.get(f"/api/goals/{goal['id']}/prompt", headers=auth_headers)
        assert r.status_code == 200
        body = r.json()
        assert body["template_name"] == "Trading Goal Template"
        assert "- Title: Make $50 trading" in body["prompt"]
        assert "- Capital: $500" in body["prompt"]
        assert "- Timebox: 30 days" in body["prompt"]
        assert body["system_msg"].startswith("Focus on risk management")
        assert "strategy" in body["output_schema"]["required"]

    def test_renders_generic_template_lists(self, client, auth_headers, make_goal):
        template_id = template_id_by_name(client, auth_headers, "Generic $50 Goal")
        goal = make_goal(auth_headers, template_id=template_id, constraints=["no ads", "solo"])

        prompt = client.get(f"/api/goals/{goal['id']}/prompt", headers=auth_headers).json()["prompt"]
        assert "- Constraints: no ads, solo" in prompt
        assert '"epics"' in prompt

    def test_goal_without_template(self, client, auth_headers, make_goal):
        goal = make_goal(auth_headers)
        r = client.get(f"/api/goals/{goal['id']}/prompt", headers=auth_headers)
        assert r.status_code == 400
        assert r.json() == {"error": "Goal has no template"}

    def test_broken_template_is_a_bad_request(self, client, auth_headers, make_goal):
        r = client.post(
            "/api/goal-templates",
            json={"name": "Broken", "prompt_text": "{% for x in %}", "output_schema": {}},
            headers=auth_headers,
        )
        goal = make_goal(auth_headers, template_id=r.json()["template"]["id"])

        r = client.get(f"/api/goals/{goal['id']}/prompt", headers=auth_headers)
        assert r.status_code == 400
        assert r.json()["error"] == "Goal template could not be rendered"
        assert "details" in r.json()


class TestGoalTemplates:
    def test_seeded_templates_are_listed(self, client, auth_headers):
        names = {t["name"] for t in client.get("/api/goal-templates", headers=auth_headers).json()["templates"]}
        assert {"Generic $50 Goal", "Trading Goal Template", "YouTube Content Goal Template"} <= names

    def test_create_and_duplicate_name(self, client, auth_headers):
        body = {"name": "Newsletter", "prompt_text": "Write about {{ goal.niche }}", "output_schema": {"type": "object"}}
        r = client.post("/api/goal-templates", json=body, headers=auth_headers)
        assert r.status_code == 201
        assert r.json()["template"]["output_schema"] == {"type": "object"}

        r = client.post("/api/goal-templates", json=body, headers=auth_headers)
        assert r.status_code == 409

    def test_update(self, client, auth_headers):
        created = client.post(
            "/api/goal-templates",
            json={"name": "Draft", "prompt_text": "v1", "output_schema": {}},
            headers=auth_headers,
        ).json()["template"]

        r = client.patch(f"/api/goal-templates/{created['id']}", json={"prompt_text": "v2"}, headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["template"]["prompt_text"] == "v2"
        assert r.json()["template"]["name"] == "Draft"

    def test_update_rejects_null_required_fields(self, client, auth_headers):
        created = client.post(
            "/api/goal-templates",
            json={"name": "Strict", "prompt_text": "v1", "output_schema": {"type": "object"}},
            headers=auth_headers,
        ).json()["template"]

        for field in ("name", "prompt_text", "output_schema"):
            r = client.patch(f"/api/goal-templates/{created['id']}", json={field: None}, headers=auth_headers)
            assert r.status_code == 400
            assert r.json() == {"error": f"{field} cannot be null"}

        r = client.get("/api/goal-templates", headers=auth_headers)
        assert r.status_code == 200
        stored = next(t for t in r.json()["templates"] if t["id"] == created["id"])
        assert stored["output_schema"] == {"type": "object"}

    def test_cannot_delete_template_in_use(self, client, auth_headers, make_goal):
        template_id = template_id_by_name(client, auth_headers, "Generic $50 Goal")
        make_goal(auth_headers, template_id=template_id)

        r = client.delete(f"/api/goal-templates/{template_id}", headers=auth_headers)
        assert r.status_code == 409
        assert r.json() == {"error": "Cannot delete template that is being used by goals", "details": {"goals": 1}}

    def test_delete_unused_template(self, client, auth_headers):
        template_id = template_id_by_name(client, auth_headers, "YouTube Content Goal Template")
        r = client.delete(f"/api/goal-templates/{template_id}", headers=auth_headers)
        assert r.json() == {"success": True}
        assert client.patch(f"/api/goal-templates/{template_id}", json={"name": "x"}, headers=auth_headers).status_code == 404
