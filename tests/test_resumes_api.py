from app.models import ParsedResume, ResumeCreate


def seed(store, name):
    parsed = ParsedResume.from_recovered({"personal": {"name": name, "email": f"{name}@example.com"}})
    record = ResumeCreate.from_parsed(parsed, file_name=f"{name}.pdf", raw_text=name)
    return store.insert_full(record).id


def test_list_resumes(client, store):
    first = seed(store, "ann")
    fallback = store.insert_fallback("x-raw.pdf", "no json here").id
    last = seed(store, "bob")

    r = client.get("/api/resumes")
    assert r.status_code == 200
    rows = r.json()
    assert [row["id"] for row in rows] == [last, fallback, first]
    assert rows[0] == {
        "id": last,
        "name": "bob",
        "email": "bob@example.com",
        "file_name": "bob.pdf",
        "created_at": rows[0]["created_at"],
    }
    assert rows[1]["name"] is None


def test_list_empty(client):
    r = client.get("/api/resumes")
    assert r.status_code == 200
    assert r.json() == []


def test_detail(client, store):
    resume_id = seed(store, "ann")
    r = client.get(f"/api/resumes/{resume_id}")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == resume_id
    assert body["name"] == "ann"
    assert body["raw_text"] == "ann"
    assert body["projects"] == []


def test_detail_not_found(client):
    r = client.get("/api/resumes/999")
    assert r.status_code == 404
    assert r.json() == {"error": "Not found"}


def test_detail_non_numeric_id(client):
    r = client.get("/api/resumes/abc")
    assert r.status_code == 400
    assert "error" in r.json()


def test_reads_are_idempotent(client, store):
    resume_id = seed(store, "ann")
    store.insert_fallback("y.pdf", "raw")

    assert client.get("/api/resumes").json() == client.get("/api/resumes").json()
    detail = client.get(f"/api/resumes/{resume_id}").json()
    assert client.get(f"/api/resumes/{resume_id}").json() == detail


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_root(client):
    assert client.get("/").status_code == 200


def test_cors_allows_frontend_origin(client, settings):
    r = client.get("/api/resumes", headers={"Origin": settings.frontend_origin})
    assert r.headers["access-control-allow-origin"] == settings.frontend_origin
