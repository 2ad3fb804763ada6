from azport.models import JobOpening


def _payload(**overrides):
    body = {
        "title": "Warehouse Lead",
        "department": "logistics",
        "location": "Baku, Azerbaijan",
        "type": "Full-time",
        "description": "Runs the Baku warehouse floor.",
    }
    body.update(overrides)
    return body


def test_list_all_and_active_only(client, auth_headers):
    assert len(client.get("/api/job-openings").json()) == 3
    created = client.post("/api/job-openings", json=_payload(active=False), headers=auth_headers)
    assert created.status_code == 201
    assert created.json()["active"] is False

    everything = client.get("/api/job-openings").json()
    active = client.get("/api/job-openings?active=true").json()
    assert len(everything) == 4
    assert len(active) == 3
    assert all(j["active"] is True for j in active)
    assert everything[0]["id"] == created.json()["id"]


def test_get_job_opening_by_id(client):
    job_id = client.get("/api/job-openings").json()[0]["id"]
    resp = client.get(f"/api/job-openings/{job_id}")
    assert resp.status_code == 200
    assert resp.json()["id"] == job_id
    assert client.get("/api/job-openings/9999").status_code == 404


def test_create_defaults(client, auth_headers):
    resp = client.post("/api/job-openings", json=_payload(department=None), headers=auth_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["department"] == "general"
    assert body["active"] is True
    assert body["created_at"]


def test_create_requires_fields(client, auth_headers):
    for field in ("title", "location", "type", "description"):
        resp = client.post("/api/job-openings", json=_payload(**{field: ""}), headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Required fields are missing"


def test_update_by_body_id_keeps_active_flag(client, auth_headers):
    job_id = client.post("/api/job-openings", json=_payload(active=False), headers=auth_headers).json()["id"]
    resp = client.put("/api/job-openings", json=_payload(id=job_id, title="Senior Warehouse Lead"), headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["title"] == "Senior Warehouse Lead"
    assert resp.json()["active"] is False


def test_update_by_query_id_sets_active(client, auth_headers):
    job_id = client.post("/api/job-openings", json=_payload(), headers=auth_headers).json()["id"]
    resp = client.put(f"/api/job-openings?id={job_id}", json=_payload(active=False), headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["active"] is False
    assert job_id not in [j["id"] for j in client.get("/api/job-openings?active=true").json()]


def test_update_errors(client, auth_headers):
    assert client.put("/api/job-openings", json=_payload(), headers=auth_headers).status_code == 400
    missing = client.put("/api/job-openings?id=9999", json=_payload(), headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Job opening not found"


def test_delete_job_opening(client, auth_headers):
    job_id = client.get("/api/job-openings").json()[0]["id"]
    assert client.delete("/api/job-openings", headers=auth_headers).status_code == 400
    assert client.delete(f"/api/job-openings?id={job_id}", headers=auth_headers).status_code == 200
    assert client.delete(f"/api/job-openings?id={job_id}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/job-openings/{job_id}").status_code == 404


def test_invalid_token_is_rejected(client, db):
    bad = {"Authorization": "Bearer garbage"}
    assert client.post("/api/job-openings", json=_payload(), headers=bad).status_code == 401
    assert client.put("/api/job-openings?id=1", json=_payload(), headers=bad).status_code == 401
    assert client.delete("/api/job-openings?id=1", headers=bad).status_code == 401
    db.expire_all()
    assert db.query(JobOpening).count() == 3
