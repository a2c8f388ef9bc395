"""
Unit tests for the HTTP routes.

Run: pytest tests/unit/test_routes.py -v
"""

from config import settings


def csv_bytes(rows: list) -> bytes:
    return "\n".join(",".join(cell for cell in row) for row in rows).encode("utf-8")


class TestHealth:
    """Tests for GET /health"""

    def test_health(self, test_client, reference_data):
        """Reports reference data counts."""
        response = test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["reference_data"]["iso_codes"] == len(reference_data.iso_codes)


class TestParsePackingList:
    """Tests for POST /api/packing-lists/parse"""

    def test_csv_upload(self, test_client, iceland_csv_rows):
        """A CSV upload returns the validated envelope."""
        response = test_client.post(
            "/api/packing-lists/parse",
            files={"file": ("iceland.csv", csv_bytes(iceland_csv_rows), "text/csv")},
            data={"dispatch_location": "DL-7"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["parserModel"] == "ICELAND2"
        assert body["dispatchLocationNumber"] == "DL-7"
        assert body["business_checks"]["all_required_fields_present"] is True
        assert body["items"][0]["description"] == "Prawn Ring"
        assert body["items"][0]["row_location"] == {"rowNumber": 2, "sheetName": None, "pageNumber": None}

    def test_unknown_extension(self, test_client):
        """Unrecognised uploads still return an envelope."""
        response = test_client.post(
            "/api/packing-lists/parse",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 200
        assert response.json()["parserModel"] == "NOMATCH"

    def test_unreadable_spreadsheet(self, test_client):
        """A corrupt workbook is rejected with the standard error format."""
        response = test_client.post(
            "/api/packing-lists/parse",
            files={"file": ("broken.xlsx", b"not a workbook", "application/octet-stream")},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "UNSUPPORTED_FILE"

    def test_file_too_large(self, test_client, monkeypatch):
        """Uploads over the limit are rejected."""
        monkeypatch.setattr(settings, "max_upload_bytes", 1024)

        response = test_client.post(
            "/api/packing-lists/parse",
            files={"file": ("big.csv", b"x" * 2048, "text/csv")},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "FILE_TOO_LARGE"
