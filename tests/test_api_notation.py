"""
Tests for the /api/notation routes.
"""

import xml.etree.ElementTree as ET

from fastapi.testclient import TestClient


class TestNotationRoutes:
    """Tests for svg, layout and check endpoints."""

    def test_svg(self, client: TestClient):
        resp = client.get("/api/notation/svg", params={"motif": "C#D*"})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("image/svg+xml")
        root = ET.fromstring(resp.text)
        assert root.get("width") == "250"

    def test_svg_empty_motif(self, client: TestClient):
        root = ET.fromstring(client.get("/api/notation/svg").text)
        assert root.get("width") == "150"

    def test_layout(self, client: TestClient):
        body = client.get("/api/notation/layout", params={"motif": 'xC*D"'}).json()
        assert body["tokens"] == [
            {"letter": "C", "sharp": False, "octave_shift": 1},
            {"letter": "D", "sharp": False, "octave_shift": -1},
        ]
        drawing = body["drawing"]
        assert drawing["width"] == 250
        assert [n["y"] for n in drawing["notes"]] == [25, 90]
        assert [line["y"] for line in drawing["staff_lines"]] == [30, 40, 50, 60, 70]

    def test_check_ok(self, client: TestClient):
        body = client.post("/api/notation/check", json={"motif": "Cmaj", "part_of_speech": "noun"}).json()
        assert body["well_formed"] is False
        assert body["first_note_violation"] is None

    def test_check_violations(self, client: TestClient):
        body = client.post("/api/notation/check", json={"motif": "A-B", "part_of_speech": "noun"}).json()
        assert body["alphabet_violation"] == 'Only use letters A-G, #, *, and " for notation'
        assert body["first_note_violation"] == "Nouns must start with C"
        assert [t["letter"] for t in body["tokens"]] == ["A", "B"]

    def test_check_without_part_of_speech(self, client: TestClient):
        body = client.post("/api/notation/check", json={"motif": 'A#B*C" D'}).json()
        assert body["well_formed"] is True
        assert body["alphabet_violation"] is None
        assert body["first_note_violation"] is None
