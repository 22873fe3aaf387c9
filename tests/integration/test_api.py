"""End-to-end tests through the Flask test client and the demo blueprint."""

from __future__ import annotations

import logging

from tests.factories.article import ArticleFactory, AuthorFactory
from tests.helpers.assertions import assert_pagination, assert_problem, query_of
from tests.helpers.http import build_url, json_headers


class TestTransferObjectEndpoints:
    def test_blank_first_name_is_unprocessable(self, client):
        resp = client.post("/people", json={"firstName": ""})

        assert resp.status_code == 422
        assert resp.mimetype == "application/problem+json"
        body = resp.get_json()
        assert_problem(body, status=422, code="validation_error")
        assert [e["field"] for e in body["details"]["errors"]] == ["firstName"]

    def test_valid_payload_is_bound(self, client):
        resp = client.post(
            "/people",
            json={"firstName": "John", "age": "41", "tags": ["a"], "internalNote": "x"},
        )

        assert resp.status_code == 201
        assert resp.get_json() == {
            "firstName": "John",
            "lastName": None,
            "age": 41,
            "tags": ["a"],
        }

    def test_query_string_and_array_suffix(self, client):
        resp = client.post(build_url("/people", firstName="Ada", **{"tags[]": "x"}))

        assert resp.status_code == 201
        assert resp.get_json()["tags"] == ["x"]

    def test_endpoint_groups_replace_default(self, client):
        resp = client.post("/people/strict", json={"firstName": "John"})

        assert resp.status_code == 422
        errors = resp.get_json()["details"]["errors"]
        assert errors == [{"field": "lastName", "message": "This value should not be blank."}]

    def test_all_violations_are_reported(self, client):
        resp = client.post("/people", json={"firstName": "", "age": -3})

        fields = [e["field"] for e in resp.get_json()["details"]["errors"]]
        assert fields == ["firstName", "age"]

    def test_binding_error_is_bad_request(self, client):
        resp = client.post("/people", json={"firstName": "John", "tags": "solo"})

        assert resp.status_code == 400
        body = resp.get_json()
        assert_problem(body, status=400, code="binding_error")
        assert body["details"] == {"field": "tags"}

    def test_request_id_is_echoed(self, client):
        resp = client.post("/people", json={"firstName": ""}, headers=json_headers("req-42"))

        assert resp.get_json()["request_id"] == "req-42"
        assert resp.headers["X-Request-ID"] == "req-42"

    def test_each_request_gets_its_own_id(self, client):
        first = client.post("/people", json={"firstName": ""}, headers=json_headers("one"))
        second = client.post("/people", json={"firstName": ""}, headers=json_headers("two"))
        third = client.post("/people", json={"firstName": ""})

        assert first.headers["X-Request-ID"] == "one"
        assert second.get_json()["request_id"] == "two"
        assert third.headers["X-Request-ID"] not in {"one", "two"}


class TestPaginatedEndpoints:
    def test_in_memory_page(self, client):
        resp = client.get(build_url("/numbers", page=2, pageSize=10))

        assert resp.status_code == 200
        body = resp.get_json()
        assert_pagination(body)
        assert body["items"] == list(range(11, 21))
        assert body["total"] == 25
        assert query_of(body["_links"]["next"])["page"] == ["3"]
        assert query_of(body["_links"]["prev"])["page"] == ["1"]
        assert resp.headers["X-Total-Count"] == "25"
        assert 'rel="next"' in resp.headers["Link"]

    def test_default_page_size_comes_from_config(self, client):
        body = client.get("/numbers").get_json()

        assert body["pageSize"] == 10
        assert body["count"] == 10

    def test_page_past_the_end_is_not_found(self, client):
        resp = client.get(build_url("/numbers", page=9, pageSize=10))

        assert resp.status_code == 404
        assert_problem(resp.get_json(), status=404, code="not_found")

    def test_invalid_page_is_unprocessable(self, client):
        resp = client.get(build_url("/numbers", page=0))

        assert resp.status_code == 422
        assert "page" in resp.get_json()["details"]["errors"]

    def test_empty_collection(self, client):
        resp = client.get(build_url("/numbers/empty", page=4))

        body = resp.get_json()
        assert resp.status_code == 200
        assert body["items"] == []
        assert body["total"] == 0
        assert query_of(body["_links"]["self"])["page"] == ["1"]

    def test_sql_provider(self, client, session):
        articles = [ArticleFactory() for _ in range(3)]
        session.commit()

        body = client.get(build_url("/articles", pageSize=2)).get_json()

        assert body["items"] == [{"id": a.id, "title": a.title} for a in articles[:2]]
        assert body["total"] == 3

    def test_orm_provider(self, client, session):
        author = AuthorFactory()
        ArticleFactory(author=author)
        ArticleFactory()
        session.commit()

        body = client.get(f"/authors/{author.id}/articles").get_json()

        assert body["total"] == 1
        assert body["_links"]["self"].startswith(f"/authors/{author.id}/articles")

    def test_unsupported_provider_is_a_server_error(self, client):
        resp = client.get("/broken")

        assert resp.status_code == 500
        assert_problem(resp.get_json(), status=500, code="internal_server_error")


def test_timed_view_logs_elapsed_time(client, caplog):
    with caplog.at_level(logging.DEBUG, logger="tinyrest.api.deps"):
        client.get("/numbers")

    record = next(r for r in caplog.records if r.getMessage() == "view.elapsed")
    assert record.endpoint == "demo.list_numbers"
    assert record.elapsed_ms >= 0
