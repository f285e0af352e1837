"""HTTP tests for product listing, search, entries and expiration status."""

from datetime import timedelta

import pytest

from app.application.services.expiration_service import get_current_date
from app.domain.models.product import Product


@pytest.fixture
def products(db):
    items = [
        Product(name="Leite Integral", code="1001", category="Quantidade: 50"),
        Product(name="Leite Desnatado", code="1002"),
        Product(name="Pão 100% Integral"),
        Product(name="Queijo Minas"),
    ]
    db.add_all(items)
    db.commit()
    return {p.name: p.id for p in items}


def _add_entry(client, headers, product_id, days, **extra):
    expiration = get_current_date() + timedelta(days=days)
    return client.post(
        "/api/products/entries",
        json={"product_id": product_id, "expiration_date": expiration.isoformat(), **extra},
        headers=headers,
    )


def test_products_require_authentication(client):
    assert client.get("/api/products").status_code == 401


def test_list_products(client, viewer_headers, products):
    response = client.get("/api/products", headers=viewer_headers)

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == list(products)


def test_search_is_case_insensitive_substring(client, viewer_headers, products):
    response = client.get("/api/products/search", params={"q": "LEITE"}, headers=viewer_headers)

    assert sorted(p["name"] for p in response.json()) == ["Leite Desnatado", "Leite Integral"]


def test_search_treats_wildcards_literally(client, viewer_headers, products):
    response = client.get("/api/products/search", params={"q": "100%"}, headers=viewer_headers)
    assert [p["name"] for p in response.json()] == ["Pão 100% Integral"]

    response = client.get("/api/products/search", params={"q": "_"}, headers=viewer_headers)
    assert response.json() == []


def test_search_blank_query_returns_nothing(client, viewer_headers, products):
    assert client.get("/api/products/search", params={"q": "  "}, headers=viewer_headers).json() == []
    assert client.get("/api/products/search", headers=viewer_headers).json() == []


def test_search_is_capped(client, db, viewer_headers):
    db.add_all([Product(name=f"Iogurte {i:03d}") for i in range(120)])
    db.commit()

    response = client.get("/api/products/search", params={"q": "iogurte"}, headers=viewer_headers)
    assert len(response.json()) == 100


def test_create_entry(client, viewer_headers, products):
    response = _add_entry(client, viewer_headers, products["Queijo Minas"], 10, quantity=3, notes="Câmara fria")

    assert response.status_code == 201
    body = response.json()
    assert body["product_id"] == products["Queijo Minas"]
    assert body["quantity"] == 3
    assert body["notes"] == "Câmara fria"
    assert body["is_expired"] is False


def test_create_entry_in_the_past_is_flagged_expired(client, viewer_headers, products):
    response = _add_entry(client, viewer_headers, products["Leite Integral"], -1)
    assert response.json()["is_expired"] is True


def test_create_entry_validation(client, viewer_headers, products):
    assert _add_entry(client, viewer_headers, products["Leite Integral"], 5, quantity=0).status_code == 422

    response = _add_entry(client, viewer_headers, 999, 5)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "EntityNotFoundException"


def test_expiration_views_and_summary(client, viewer_headers, products):
    for name, days in (
        ("Leite Integral", 30),
        ("Leite Desnatado", 15),
        ("Pão 100% Integral", 7),
        ("Queijo Minas", 0),
        ("Queijo Minas", -1),
    ):
        assert _add_entry(client, viewer_headers, products[name], days).status_code == 201

    views = client.get("/api/products/expiration", headers=viewer_headers).json()
    assert [(v["name"], v["days_remaining"], v["status"]) for v in views] == [
        ("Queijo Minas", -1, "VENCIDO"),
        ("Queijo Minas", 0, "VENCENDO"),
        ("Pão 100% Integral", 7, "VENCENDO"),
        ("Leite Desnatado", 15, "ATTENTION"),
        ("Leite Integral", 30, "OK"),
    ]
    assert views[-1]["code"] == "1001"
    assert views[-1]["category"] == "Quantidade: 50"

    summary = client.get("/api/products/expiration-status", headers=viewer_headers).json()
    assert summary == {
        "total": 5,
        "valid": 4,
        "expired": 1,
        "ok": 1,
        "attention": 1,
        "vencendo": 2,
        "valid_percentage": 80.0,
    }


def test_expiration_status_with_no_entries(client, viewer_headers):
    summary = client.get("/api/products/expiration-status", headers=viewer_headers).json()

    assert summary["total"] == 0
    assert summary["valid_percentage"] == 0.0


def test_mark_entry_expired(client, viewer_headers, products):
    entry_id = _add_entry(client, viewer_headers, products["Leite Integral"], 20).json()["id"]

    response = client.patch(f"/api/products/entries/{entry_id}/expired", headers=viewer_headers)

    assert response.status_code == 200
    assert response.json()["is_expired"] is True
    [view] = client.get("/api/products/expiration", headers=viewer_headers).json()
    assert view["is_expired"] is True
    assert view["status"] == "OK"


def test_mark_missing_entry_expired(client, viewer_headers):
    response = client.patch("/api/products/entries/404/expired", headers=viewer_headers)
    assert response.status_code == 404
