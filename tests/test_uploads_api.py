"""HTTP tests for catalog uploads and upload history."""

from app.domain.models.product import Product

VENDOR_CSV = (
    "Material\tTexto breve material\tUtilização livre\n"
    "1001\tLeite Integral\t50\n"
    "1002\t\t30\n"
    "Total\t\t80\n"
)


def test_upload_requires_authentication(client):
    response = client.post("/api/uploads", json={"csv": VENDOR_CSV})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UnauthorizedException"


def test_upload_requires_admin(client, db, viewer_headers):
    response = client.post("/api/uploads", json={"csv": VENDOR_CSV}, headers=viewer_headers)

    assert response.status_code == 403
    assert db.query(Product).count() == 0


def test_upload_without_csv_is_bad_request(client, admin_headers):
    assert client.post("/api/uploads", json={"filename": "x.csv"}, headers=admin_headers).status_code == 400
    assert client.post("/api/uploads", json={"csv": "  \n"}, headers=admin_headers).status_code == 400
    assert client.post("/api/uploads", headers=admin_headers).status_code == 400


def test_upload_vendor_catalog(client, admin_headers):
    response = client.post(
        "/api/uploads",
        json={"csv": VENDOR_CSV, "filename": "spani.csv"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["productsCount"] == 2
    assert body["duplicates"] == 0
    assert body["upload"]["filename"] == "spani.csv"
    assert body["upload"]["products_count"] == 2
    assert body["upload"]["uploaded_by"] == "admin@test.com"
    assert body["upload"]["status"] == "active"
    assert body["skipped"] == [{"line": 4, "reason": "invalid_code", "raw": "Total\t\t80"}]

    products = client.get("/api/products", headers=admin_headers).json()
    assert [(p["code"], p["name"], p["category"]) for p in products] == [
        ("1001", "Leite Integral", "Quantidade: 50"),
        ("1002", "Produto 1002", "Quantidade: 30"),
    ]


def test_upload_counts_only_new_products(client, admin_headers):
    client.post("/api/uploads", json={"csv": VENDOR_CSV}, headers=admin_headers)
    response = client.post("/api/uploads", json={"csv": VENDOR_CSV}, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["productsCount"] == 0
    assert response.json()["duplicates"] == 2
    assert response.json()["upload"]["filename"] == "estoque.csv"


def test_upload_without_name_column_is_rejected(client, db, admin_headers):
    response = client.post(
        "/api/uploads",
        json={"csv": "sku,categoria\nA1,Grãos\n", "filename": "ruim.csv"},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "CatalogFormatError"
    assert db.query(Product).count() == 0
    assert client.get("/api/uploads", headers=admin_headers).json() == []


def test_upload_file_decodes_latin1(client, admin_headers):
    content = "nome,categoria\nFeijão,Grãos\nAçúcar,Mercearia\n".encode("latin-1")

    response = client.post(
        "/api/uploads/file",
        files={"file": ("catalogo.csv", content, "text/csv")},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["productsCount"] == 2
    names = [p["name"] for p in client.get("/api/products", headers=admin_headers).json()]
    assert names == ["Feijão", "Açúcar"]


def test_upload_file_rejects_other_extensions(client, admin_headers):
    response = client.post(
        "/api/uploads/file",
        files={"file": ("planilha.xlsx", b"PK\x03\x04", "application/octet-stream")},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_upload_history_and_delete(client, db, admin_headers, viewer_headers):
    upload_id = client.post(
        "/api/uploads", json={"csv": VENDOR_CSV, "filename": "a.csv"}, headers=admin_headers
    ).json()["upload"]["id"]

    history = client.get("/api/uploads", headers=viewer_headers).json()
    assert [u["id"] for u in history] == [upload_id]

    assert client.delete(f"/api/uploads/{upload_id}", headers=viewer_headers).status_code == 403

    response = client.delete(f"/api/uploads/{upload_id}", headers=admin_headers)
    assert response.status_code == 200
    assert client.get("/api/uploads", headers=admin_headers).json() == []
    # Deleting the record keeps the products it created
    assert db.query(Product).count() == 2


def test_delete_missing_upload(client, admin_headers):
    response = client.delete("/api/uploads/999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "EntityNotFoundException"


def test_decode_upload_strips_utf8_bom():
    from app.application.services.upload_service import decode_upload

    assert decode_upload("\ufeffnome\nCafé\n".encode("utf-8")) == "nome\nCafé\n"


def test_upload_with_byte_order_mark(client, admin_headers):
    response = client.post(
        "/api/uploads",
        json={"csv": "\ufeffnome,codigo\nArroz,1\n"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["productsCount"] == 1


def test_upload_file_imports_in_threadpool(client, admin_headers, monkeypatch):
    from starlette.concurrency import run_in_threadpool

    from app.interfaces.api import uploads

    calls = []

    async def recording_threadpool(func, *args, **kwargs):
        calls.append(func.__name__)
        return await run_in_threadpool(func, *args, **kwargs)

    monkeypatch.setattr(uploads, "run_in_threadpool", recording_threadpool)

    response = client.post(
        "/api/uploads/file",
        files={"file": ("catalogo.csv", b"nome\nArroz\n", "text/csv")},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert calls == ["_run_import"]
