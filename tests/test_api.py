from __future__ import annotations

from unittest.mock import AsyncMock, patch

from linkstash.core.errors import PersistenceError
from linkstash.models.link.schemas import BatchResult

from conftest import make_record


class TestPostLinks:
    def test_post_adds_links(self, client, stub_extract, links_repo):
        resp = client.post("/links", json={"urls": ["https://a.com", "https://b.com"]})

        assert resp.status_code == 200
        body = resp.json()
        assert (body["added"], body["skipped"], body["failed"]) == (2, 0, 0)
        assert [o["label"] for o in body["outcomes"]] == ["added", "added"]
        assert "new_records" not in body
        assert [r.url for r in links_repo.load()] == ["https://a.com", "https://b.com"]

    def test_post_reports_invalid_and_duplicate(self, client, stub_extract, links_repo):
        links_repo.save([make_record("https://example.com/x")])

        resp = client.post(
            "/links",
            json={"urls": ["not-a-url", "https://EXAMPLE.com/x/", "https://ok.com"]},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert [o["label"] for o in body["outcomes"]] == [
            "skipped: invalid URL",
            "skipped: duplicate",
            "added",
        ]
        assert body["outcomes"][0] == {
            "url": "not-a-url",
            "status": "skipped",
            "reason": "invalid URL",
            "label": "skipped: invalid URL",
        }

    def test_post_drops_blank_and_comment_lines(self, client, stub_extract):
        resp = client.post("/links", json={"urls": ["  ", "# note", "  https://a.com  "]})

        assert resp.status_code == 200
        assert [o["url"] for o in resp.json()["outcomes"]] == ["https://a.com"]

    def test_post_missing_body_returns_422(self, client):
        resp = client.post("/links", json={})
        assert resp.status_code == 422

    def test_post_persistence_error_returns_500(self, client):
        with patch(
            "linkstash.api.links.routes.LinkService.ingest",
            new_callable=AsyncMock,
            side_effect=PersistenceError("links.json must contain an array"),
        ):
            resp = client.post("/links", json={"urls": ["https://a.com"]})
        assert resp.status_code == 500
        assert "must contain an array" in resp.json()["detail"]

    def test_post_returns_service_result(self, client):
        with patch(
            "linkstash.api.links.routes.LinkService.ingest",
            new_callable=AsyncMock,
            return_value=BatchResult(added=0, skipped=0, failed=0),
        ) as mock_ingest:
            resp = client.post("/links", json={"urls": ["https://a.com"]})
        assert resp.status_code == 200
        mock_ingest.assert_called_once_with(["https://a.com"])


class TestGetLinks:
    def test_get_empty_collection(self, client):
        resp = client.get("/links")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_get_returns_stored_links_in_order(self, client, links_repo):
        links_repo.save([make_record("https://b.com/"), make_record("https://a.com/")])

        resp = client.get("/links")

        assert resp.status_code == 200
        assert [r["url"] for r in resp.json()] == ["https://b.com/", "https://a.com/"]
        assert resp.json()[0]["source"] == "web"

    def test_get_malformed_store_returns_500(self, client, links_repo):
        links_repo.path.write_text("[oops")
        resp = client.get("/links")
        assert resp.status_code == 500
        assert "Invalid JSON" in resp.json()["detail"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
