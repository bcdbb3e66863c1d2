"""Business settings upsert and logo uploads."""
from pathlib import Path

import pytest

from invoicely.core.config import settings


@pytest.fixture
def settings_payload(user_id):
    def build(**overrides):
        payload = {
            "userId": user_id,
            "businessName": "Northwind Design",
            "address": "42 Harbor Street",
            "city": "Portland",
            "state": "OR",
            "zipCode": "97201",
            "phone": "(503) 555-0134",
            "email": "billing@northwind.example",
        }
        payload.update(overrides)
        return payload

    return build


class TestBusinessSettings:

    def test_empty_object_before_first_save(self, client, user_id):
        resp = client.get(f"/api/business-settings/{user_id}")
        assert resp.status_code == 200
        assert resp.json() == {}

    def test_create_then_read(self, client, settings_payload, user_id):
        created = client.post("/api/business-settings", json=settings_payload())
        assert created.status_code == 200

        body = client.get(f"/api/business-settings/{user_id}").json()
        assert body["businessName"] == "Northwind Design"
        assert body["zipCode"] == "97201"
        assert body["userId"] == user_id
        assert body["logo"] is None

    def test_second_save_updates_same_row(self, client, settings_payload):
        first = client.post("/api/business-settings", json=settings_payload()).json()
        second = client.post("/api/business-settings", json=settings_payload(
            businessName="Northwind Studio", logo="/uploads/logo.png",
        )).json()
        assert second["id"] == first["id"]
        assert second["businessName"] == "Northwind Studio"
        assert second["logo"] == "/uploads/logo.png"

    def test_user_id_from_path(self, client, settings_payload, user_id):
        payload = settings_payload()
        del payload["userId"]
        resp = client.post(f"/api/business-settings/{user_id}", json=payload)
        assert resp.status_code == 200
        assert resp.json()["userId"] == user_id

    def test_missing_user_id(self, client, settings_payload):
        payload = settings_payload()
        del payload["userId"]
        resp = client.post("/api/business-settings", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"message": "userId is required"}

    def test_required_fields(self, client, settings_payload):
        resp = client.post("/api/business-settings", json=settings_payload(city="  "))
        assert resp.status_code == 400
        assert "city" in resp.json()["message"]

    def test_blank_optional_fields_stored_as_null(self, client, settings_payload):
        body = client.post("/api/business-settings", json=settings_payload(phone="", email="")).json()
        assert body["phone"] is None
        assert body["email"] is None


class TestLogoUpload:

    def test_upload_and_serve(self, client):
        png = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
        resp = client.post("/api/upload-logo", files={"logo": ("brand.png", png, "image/png")})
        assert resp.status_code == 200
        url = resp.json()["url"]
        assert url.startswith("/uploads/") and url.endswith(".png")
        assert (Path(settings.UPLOAD_DIR) / Path(url).name).read_bytes() == png

        served = client.get(url)
        assert served.status_code == 200
        assert served.content == png

    def test_no_file(self, client):
        resp = client.post("/api/upload-logo")
        assert resp.status_code == 400
        assert resp.json() == {"message": "No file uploaded"}

    def test_rejects_non_image(self, client):
        resp = client.post("/api/upload-logo", files={"logo": ("tool.exe", b"MZ", "application/octet-stream")})
        assert resp.status_code == 400

    def test_rejects_svg(self, client):
        svg = b"<svg xmlns=\"http://www.w3.org/2000/svg\"><script>alert(1)</script></svg>"
        resp = client.post("/api/upload-logo", files={"logo": ("logo.svg", svg, "image/svg+xml")})
        assert resp.status_code == 400
        assert resp.json() == {"message": "Unsupported logo type '.svg'"}

    def test_rejects_empty_file(self, client):
        resp = client.post("/api/upload-logo", files={"logo": ("logo.png", b"", "image/png")})
        assert resp.status_code == 400
        assert resp.json() == {"message": "Uploaded file is empty"}
