"""Tests for the HTTP surface in clarify/main.py."""

import pytest
from fastapi.testclient import TestClient

from clarify.main import app


@pytest.fixture
def client():
    return TestClient(app)


class TestEnrichEndpoint:

    def test_no_match_found(self, client):
        response = client.post("/enrich", json={
            "formula_name": "LOOKUP",
            "presentation": {"panel": "errors"},
            "failure": {
                "message": "No matches found",
                "kind": "spreadsheet",
                "structured_fields": {"token": "XYZ"},
            },
        })

        assert response.status_code == 200
        assert response.json() == {
            "formula_name": "LOOKUP",
            "message": "No match found for token [XYZ] related to formula 'LOOKUP'.",
            "presentation": {"panel": "errors"},
        }

    def test_missing_lookup_table(self, client):
        response = client.post("/enrich", json={
            "formula_name": "TOTAL",
            "failure": {
                "message": "Object reference not set to an instance of an object",
                "stack_frames": ["at VLookup(...)", "at Main()"],
            },
        })
        assert response.json()["message"] == "Missing Lookup Table"

    def test_unknown_kind_falls_back(self, client):
        """An unrecognized kind is generic, so the message passes through."""
        response = client.post("/enrich", json={
            "formula_name": "LOOKUP",
            "failure": {"message": "No matches found", "kind": "mystery"},
        })
        assert response.status_code == 200
        assert response.json()["message"] == "No matches found"

    def test_circular_reference_with_cell_list(self, client):
        """Cells sent as a JSON list are joined into the message."""
        response = client.post("/enrich", json={
            "formula_name": "TOTAL",
            "failure": {
                "message": "Circular Reference detected",
                "kind": "spreadsheet",
                "structured_fields": {"cells": ["A1", "B2"]},
            },
        })
        assert response.json()["message"] == (
            "Circular Reference in spreadsheet related to formula 'TOTAL'. Cells: A1,B2"
        )

    @pytest.mark.parametrize("frames", [5, True])
    def test_scalar_stack_frames_ignored(self, client, frames):
        """A non-list stack_frames value is ignored instead of failing the request."""
        response = client.post("/enrich", json={
            "formula_name": "TOTAL",
            "failure": {"message": "m", "stack_frames": frames},
        })
        assert response.status_code == 200
        assert response.json()["message"] == "m"

    def test_null_formula_name_and_message(self, client):
        """JSON nulls become empty text."""
        response = client.post("/enrich", json={
            "formula_name": None,
            "failure": {"message": None},
        })
        assert response.json()["formula_name"] == ""
        assert response.json()["message"] == ""

    def test_invalid_json(self, client):
        response = client.post(
            "/enrich",
            content=b"{not json",
            headers={"content-type": "application/json"}
        )
        assert response.status_code == 400

    def test_missing_failure(self, client):
        response = client.post("/enrich", json={"formula_name": "TOTAL"})
        assert response.status_code == 400


class TestServiceEndpoints:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy", "service": "clarify"}

    def test_root_lists_classifiers(self, client):
        body = client.get("/").json()
        assert body["name"] == "Clarify"
        assert body["classifiers"][-1] == "generic"
