# File: backend/tests/test_pathogens_api.py
# Version: v0.1.0
"""
Tests for the Pathogens API (status codes, `{error}` payloads, shapes).
"""
from backend.app.services.errors import StoreError
from backend.app.services.pathogen_store import PathogenRepository


def _seed(client, make_payload):
    r1 = client.post("/api/pathogens", json=make_payload("Staphylococcus aureus", "USA300"))
    r2 = client.post("/api/pathogens", json=make_payload("Escherichia coli", "K-12 MG1655"))
    assert r1.status_code == 201 and r2.status_code == 201
    return r1.json(), r2.json()


def test_create_returns_201_with_shaped_pathogen(client, make_payload):
    r = client.post("/api/pathogens", json=make_payload())
    assert r.status_code == 201
    data = r.json()
    assert data["id"]
    assert data["created_at"] and data["updated_at"]
    assert data["cas_system"] == {"type": "Cas9", "description": "Streptococcus pyogenes Cas9"}
    assert data["targets"] == [
        {"sequence": "ATCG", "pam": "NGG", "start_pos": 10, "end_pos": 14, "strand": "+", "gc_content": 50.0}
    ]
    assert "cas_type" not in data


def test_list_returns_sorted_pathogens(client, make_payload):
    _seed(client, make_payload)
    r = client.get("/api/pathogens")
    assert r.status_code == 200
    names = [p["name"] for p in r.json()]
    assert names == ["Escherichia coli", "Staphylococcus aureus"]
    gc = r.json()[0]["targets"][0]["gc_content"]
    assert isinstance(gc, float) and gc == 50.0


def test_search_filters_case_insensitively(client, make_payload):
    _seed(client, make_payload)
    r = client.get("/api/pathogens/search", params={"name": "escher"})
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["Escherichia coli"]

    r = client.get("/api/pathogens/search", params={"name": "a"})
    assert {p["name"] for p in r.json()} == {"Escherichia coli", "Staphylococcus aureus"}


def test_search_requires_name(client):
    r = client.get("/api/pathogens/search")
    assert r.status_code == 400
    assert r.json() == {"error": "Name query parameter is required"}

    r = client.get("/api/pathogens/search", params={"name": ""})
    assert r.status_code == 400


def test_search_with_whitespace_name_lists_everything(client, make_payload):
    _seed(client, make_payload)
    r = client.get("/api/pathogens/search", params={"name": "  "})
    assert r.status_code == 200
    assert len(r.json()) == 2


def test_create_missing_fields_is_400_and_persists_nothing(client, make_payload, db):
    for field in ("name", "strain", "cas_system", "targets"):
        payload = make_payload()
        del payload[field]
        r = client.post("/api/pathogens", json=payload)
        assert r.status_code == 400, field
        assert field in r.json()["error"]
    assert PathogenRepository(db).count() == (0, 0)


def test_create_wrong_type_is_422(client, make_payload):
    payload = make_payload()
    payload["targets"][0]["start_pos"] = "abc"
    r = client.post("/api/pathogens", json=payload)
    assert r.status_code == 422


def test_duplicate_submissions_create_duplicate_rows(client, make_payload):
    a = client.post("/api/pathogens", json=make_payload()).json()
    b = client.post("/api/pathogens", json=make_payload()).json()
    assert a["id"] != b["id"]
    assert len(client.get("/api/pathogens").json()) == 2


def test_store_failure_is_500_with_message_verbatim(client, monkeypatch, make_payload):
    def boom(self, *args, **kwargs):
        raise StoreError('relation "pathogens" does not exist')

    monkeypatch.setattr(PathogenRepository, "list_all", boom)
    monkeypatch.setattr(PathogenRepository, "search_by_name", boom)
    monkeypatch.setattr(PathogenRepository, "create", boom)

    r = client.get("/api/pathogens")
    assert r.status_code == 500
    assert r.json() == {"error": 'relation "pathogens" does not exist'}

    assert client.get("/api/pathogens/search", params={"name": "coli"}).status_code == 500
    assert client.post("/api/pathogens", json=make_payload()).status_code == 500


def test_gc_content_round_trips_exactly(client, make_payload):
    payload = make_payload()
    payload["targets"][0]["gc_content"] = 33.3333
    r = client.post("/api/pathogens", json=payload)
    assert r.status_code == 201
    assert r.json()["targets"][0]["gc_content"] == 33.3333

    listed = client.get("/api/pathogens").json()
    assert listed[0]["targets"][0]["gc_content"] == 33.3333


def test_timestamps_carry_utc_offset(client, make_payload):
    data = client.post("/api/pathogens", json=make_payload()).json()
    assert data["created_at"] == data["updated_at"]
    assert data["created_at"].endswith(("Z", "+00:00"))

    (listed,) = client.get("/api/pathogens").json()
    assert listed["created_at"].endswith(("Z", "+00:00"))
