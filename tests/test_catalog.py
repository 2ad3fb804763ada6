import base64
import json

import pytest

import azport.routers.catalog as catalog_mod
from azport.services.catalog_store import CatalogStore, InvalidCatalogError

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"


def _data_url(content: bytes = PDF_BYTES) -> str:
    return "data:application/pdf;base64," + base64.b64encode(content).decode("ascii")


# --- store ---


def test_decode_accepts_data_url_and_bare_base64():
    assert CatalogStore.decode_payload(_data_url()) == PDF_BYTES
    bare = base64.b64encode(PDF_BYTES).decode("ascii")
    assert CatalogStore.decode_payload(bare) == PDF_BYTES
    wrapped = "\n".join(bare[i : i + 16] for i in range(0, len(bare), 16))
    assert CatalogStore.decode_payload(wrapped) == PDF_BYTES


def test_decode_rejects_bad_payloads():
    with pytest.raises(InvalidCatalogError):
        CatalogStore.decode_payload("data:application/pdf;base64,@@not-base64@@")
    with pytest.raises(InvalidCatalogError):
        CatalogStore.decode_payload(base64.b64encode(b"plain text").decode("ascii"))


def test_store_save_status_locate_delete(catalog_store):
    assert catalog_store.status() == {"catalog": None}
    assert catalog_store.locate() is None
    assert catalog_store.delete() is False

    info = catalog_store.save(PDF_BYTES)
    assert info["path"] == "/uploads/catalog.pdf"
    assert info["lastUpdated"].endswith("Z")
    assert json.loads(catalog_store.info_path.read_text()) == info

    status = catalog_store.status()
    assert status["catalog"] == _data_url()
    assert status["fileName"] == "catalog.pdf"

    path, name = catalog_store.locate()
    assert path.read_bytes() == PDF_BYTES
    assert name.startswith("catalog_") and name.endswith(".pdf")

    assert catalog_store.delete() is True
    assert catalog_store.status() == {"catalog": None}
    assert not path.exists()


def test_store_ignores_sidecar_pointing_outside_public_dir(catalog_store, tmp_path):
    outside = tmp_path / "secret.pdf"
    outside.write_bytes(PDF_BYTES)
    catalog_store.public_dir.mkdir(parents=True, exist_ok=True)
    catalog_store.info_path.write_text(json.dumps({"path": "/../secret.pdf", "fileName": "secret.pdf"}))
    assert catalog_store.status() == {"catalog": None}
    assert catalog_store.locate() is None


# --- routes ---


def test_upload_requires_token(client, catalog_store):
    resp = client.post("/api/catalog/upload", json={"catalog": _data_url()})
    assert resp.status_code == 401
    assert catalog_store.read_info() is None


def test_upload_validation(client, auth_headers):
    assert client.post("/api/catalog/upload", json={}, headers=auth_headers).status_code == 400
    bad = client.post("/api/catalog/upload", json={"catalog": "data:application/pdf;base64,%%%"}, headers=auth_headers)
    assert bad.status_code == 400
    text = base64.b64encode(b"hello").decode("ascii")
    not_pdf = client.post("/api/catalog/upload", json={"catalog": text}, headers=auth_headers)
    assert not_pdf.status_code == 400
    assert not_pdf.json()["message"] == "Catalog must be a PDF document"


def test_upload_too_large(monkeypatch, client, auth_headers, catalog_store):
    monkeypatch.setattr(catalog_mod.settings, "max_catalog_upload_mb", 1)
    huge = b"%PDF" + b"A" * (1024 * 1024 + 10)
    resp = client.post("/api/catalog/upload", json={"catalog": _data_url(huge)}, headers=auth_headers)
    assert resp.status_code == 413
    assert catalog_store.read_info() is None


def test_upload_status_download_delete(client, auth_headers):
    empty = client.get("/api/catalog/status")
    assert empty.status_code == 200
    assert empty.json() == {"catalog": None}
    assert client.get("/api/catalog/download").status_code == 404

    first = client.post("/api/catalog/upload", json={"catalog": _data_url()}, headers=auth_headers)
    assert first.status_code == 200
    assert first.json()["path"] == "/uploads/catalog.pdf"

    replacement = PDF_BYTES + b"% v2\n"
    second = client.post("/api/catalog/upload", json={"catalog": _data_url(replacement)}, headers=auth_headers)
    assert second.json()["lastUpdated"] >= first.json()["lastUpdated"]

    status = client.get("/api/catalog/status")
    assert status.json()["catalog"] == _data_url(replacement)
    assert status.json()["lastUpdated"] == second.json()["lastUpdated"]
    assert "no-store" in status.headers["cache-control"]

    download = client.get("/api/catalog/download")
    assert download.status_code == 200
    assert download.content == replacement
    assert download.headers["content-type"] == "application/pdf"
    disposition = download.headers["content-disposition"]
    assert disposition.startswith("attachment")
    assert 'filename="catalog_' in disposition
    assert "no-store" in download.headers["cache-control"]

    assert client.delete("/api/catalog/delete").status_code == 401
    assert client.delete("/api/catalog/delete", headers=auth_headers).status_code == 200
    assert client.get("/api/catalog/status").json() == {"catalog": None}
