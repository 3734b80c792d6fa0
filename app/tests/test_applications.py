from app import crud, models


JOB = {
    "title": "Software Engineer",
    "company": "Google",
    "jobDescription": "Build amazing things.",
}


def _create(client, headers, **overrides):
    r = client.post("/api/application", json={**JOB, **overrides}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_application_defaults_and_owner(client, auth_headers):
    headers = auth_headers()
    me = client.get("/api/auth/me", headers=headers).json()

    job = _create(client, headers, userId=me["id"] + 100, jobUrl="https://example.com/jobs/1")
    assert job["title"] == "Software Engineer"
    assert job["status"] == "APPLIED"
    assert job["jobUrl"] == "https://example.com/jobs/1"
    assert job["notes"] is None
    # caller-supplied owner is ignored
    assert job["userId"] == me["id"]
    assert {"id", "applicationDate", "createdAt", "updatedAt"}.issubset(job.keys())


def test_create_application_validation(client, auth_headers):
    headers = auth_headers()
    r = client.post(
        "/api/application",
        json={"company": "Google", "jobDescription": "...", "status": "GHOSTED", "jobUrl": "nope"},
        headers=headers,
    )
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed."
    assert [e["path"] for e in body["errors"]] == ["title", "status", "jobUrl"]


def test_requires_token(client):
    assert client.get("/api/application").status_code == 401
    r = client.post("/api/application", json=JOB)
    assert r.status_code == 401
    assert r.json() == {"message": "Not authorized, no token."}


def test_list_only_own_newest_first(client, auth_headers):
    alice = auth_headers("alice@example.com")
    bob = auth_headers("bob@example.com")
    first = _create(client, alice, title="First")
    second = _create(client, alice, title="Second")
    _create(client, bob, title="Bob's")

    r = client.get("/api/application", headers=alice)
    assert r.status_code == 200
    assert [j["id"] for j in r.json()] == [second["id"], first["id"]]

    r = client.get("/api/application", headers=bob)
    assert [j["title"] for j in r.json()] == ["Bob's"]


def test_get_application(client, auth_headers):
    headers = auth_headers()
    job = _create(client, headers, status="WISHLIST", notes="referral")
    r = client.get(f"/api/application/{job['id']}", headers=headers)
    assert r.status_code == 200
    assert r.json() == job


def test_foreign_record_looks_like_missing_record(client, auth_headers):
    alice = auth_headers("alice@example.com")
    bob = auth_headers("bob@example.com")
    job = _create(client, alice)
    missing_id = job["id"] + 1000

    for method, body in (("GET", None), ("PUT", {"title": "Hijacked"}), ("DELETE", None)):
        foreign = client.request(method, f"/api/application/{job['id']}", json=body, headers=bob)
        missing = client.request(method, f"/api/application/{missing_id}", json=body, headers=bob)
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()

    assert client.get(f"/api/application/{job['id']}", headers=bob).json() == {
        "message": "Job application not found."
    }
    # untouched for the real owner
    r = client.get(f"/api/application/{job['id']}", headers=alice)
    assert r.status_code == 200
    assert r.json()["title"] == "Software Engineer"


def test_partial_update(client, auth_headers):
    headers = auth_headers()
    job = _create(client, headers, notes="first call")
    r = client.put(
        f"/api/application/{job['id']}",
        json={"status": "INTERVIEW", "userId": 999},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    updated = r.json()
    assert updated["status"] == "INTERVIEW"
    assert updated["title"] == job["title"]
    assert updated["notes"] == "first call"
    assert updated["userId"] == job["userId"]


def test_update_rejects_null_for_required_fields(client, auth_headers):
    headers = auth_headers()
    job = _create(client, headers)
    r = client.put(f"/api/application/{job['id']}", json={"title": None}, headers=headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["path"] == "title"


def test_update_missing(client, auth_headers):
    r = client.put("/api/application/12345", json={"notes": "x"}, headers=auth_headers())
    assert r.status_code == 404
    assert r.json() == {"message": "Job application not found or not authorized."}


def test_delete_twice(client, auth_headers, db_session):
    headers = auth_headers()
    job = _create(client, headers)
    r = client.delete(f"/api/application/{job['id']}", headers=headers)
    assert r.status_code == 204
    assert r.content == b""

    r = client.delete(f"/api/application/{job['id']}", headers=headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Job application not found or not authorized."}
    assert db_session.query(models.JobApplication).count() == 0


def test_scoped_mutations_report_row_counts(client, auth_headers, db_session):
    headers = auth_headers()
    job = _create(client, headers)
    owner = job["userId"]
    assert crud.update_application(db_session, job["id"], owner + 1, {"notes": "x"}) == 0
    assert crud.update_application(db_session, job["id"], owner, {"notes": "x"}) == 1
    assert crud.delete_application(db_session, job["id"], owner + 1) == 0
    assert crud.delete_application(db_session, job["id"], owner) == 1
    assert crud.delete_application(db_session, job["id"], owner) == 0


def test_unexpected_errors_are_masked(client, auth_headers, monkeypatch):
    from fastapi.testclient import TestClient
    from app.main import app

    headers = auth_headers()

    def boom(db, user_id):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(crud, "list_applications", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/api/application", headers=headers)
    assert r.status_code == 500
    assert r.json() == {"message": "Something went wrong!"}


def test_unusable_ids_look_like_missing_ids(client, auth_headers):
    headers = auth_headers()
    missing = "12345"
    for raw in ("abc", str(2**70), "0", "1.5"):
        for method, body in (("GET", None), ("PUT", {"notes": "x"}), ("DELETE", None)):
            r = client.request(method, f"/api/application/{raw}", json=body, headers=headers)
            expected = client.request(method, f"/api/application/{missing}", json=body, headers=headers)
            assert r.status_code == expected.status_code == 404, (method, raw)
            assert r.json() == expected.json()


def test_parse_record_id():
    assert crud.parse_record_id("42") == 42
    assert crud.parse_record_id(str(crud.MAX_RECORD_ID)) == crud.MAX_RECORD_ID
    for raw in ("", "abc", "0", "-1", "²", str(crud.MAX_RECORD_ID + 1), "9" * 5000):
        assert crud.parse_record_id(raw) is None


def test_gate_runs_before_body_parsing(client, auth_headers):
    r = client.post(
        "/api/application", content=b"{bad", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 401
    assert r.json() == {"message": "Not authorized, no token."}

    headers = {**auth_headers(), "Content-Type": "application/json"}
    r = client.post("/api/application", content=b"{bad", headers=headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Validation failed."


def test_job_url_is_stored_as_sent(client, auth_headers):
    headers = auth_headers()
    job = _create(client, headers, jobUrl="https://example.com")
    assert job["jobUrl"] == "https://example.com"

    r = client.put(f"/api/application/{job['id']}", json={"jobUrl": "https://Example.com/a?b=1"}, headers=headers)
    assert r.json()["jobUrl"] == "https://Example.com/a?b=1"

    r = client.put(f"/api/application/{job['id']}", json={"jobUrl": "ftp//nope"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["path"] == "jobUrl"
