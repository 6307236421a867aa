import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers

from storefront.api import auth_router, order_router
from storefront.auth.credentials import ROLE_ADMIN, issue_token
from storefront.notifications.channel import set_email_channel
from storefront.notifications.channel.fake_email import FakeEmailAdapter


@pytest.fixture()
def client(storefront_domain):
    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with storefront_domain.domain_context():
            return await call_next(request)

    app.include_router(order_router)
    app.include_router(auth_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def fake_email():
    adapter = FakeEmailAdapter()
    set_email_channel(adapter)
    return adapter


@pytest.fixture()
def admin_headers():
    return {"Authorization": f"Bearer {issue_token('admin', role=ROLE_ADMIN)}"}
