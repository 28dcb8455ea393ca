import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from storefront.api.accounts import account_router
from storefront.api.carts import cart_router
from storefront.api.orders import order_router
from storefront.api.products import product_router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(account_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def create_product(client):
    def _create(name="Sneakers", price=80.00, stock=10, **extra):
        response = client.post("/products", json={"name": name, "price": price, "stock": stock, **extra})
        assert response.status_code == 201
        return response.json()["product_id"]

    return _create
