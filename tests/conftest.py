import os

# must be set before storefront modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_PRODUCTS", "0")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storefront.api import create_app
from storefront.data.database import create_tables, get_db
from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel
from storefront.services.auth_service import TokenService, hash_password

TEST_SECRET = "test-secret"
TEST_PASSWORD = "password123"


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory):
    app = create_app(jwt_secret=TEST_SECRET, init_db=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def make_product(db):
    def _make(product_id=None, title="Test product", price="10.00", stock=5):
        product = ProductModel(title=title, price=Decimal(str(price)), stock=stock)
        if product_id:
            product.id = product_id
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def make_user(db):
    def _make(email="john@example.com", first_name="John", last_name="Doe"):
        user = UserModel(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(TEST_PASSWORD),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def auth_headers(user, token_service):
    return {"Authorization": f"Bearer {token_service.create_access_token(user)}"}
