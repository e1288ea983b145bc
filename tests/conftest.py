import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from agrimarket.auth.security import get_password_hash
from agrimarket.db.init import init_db
from agrimarket.db.session import build_engine, get_db
from agrimarket.main import app
from agrimarket.models.listing import Listing
from agrimarket.models.user import User


@pytest.fixture
def engine(tmp_path):
    engine_test = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=engine_test)
    yield engine_test
    engine_test.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, username, role, full_name=None):
    user = User(
        username=username,
        email=f"{username}@farmmail.in",
        hashed_password=get_password_hash("secret"),
        full_name=full_name,
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_listing(db, seller, crop_name="Tomato", price=50, quantity=10, unit="kg"):
    listing = Listing(
        seller_id=seller.id,
        seller_name=seller.display_name,
        crop_name=crop_name,
        price_per_unit=price,
        quantity=quantity,
        unit=unit,
        is_available=quantity > 0,
    )
    db.add(listing)
    db.commit()
    db.refresh(listing)
    return listing


@pytest.fixture
def farmer(db):
    return make_user(db, "ramesh", "farmer", full_name="Ramesh Patil")


@pytest.fixture
def buyer(db):
    return make_user(db, "anita", "customer", full_name="Anita Rao")


@pytest.fixture
def user_factory(db):
    def factory(username, role="customer", full_name=None):
        return make_user(db, username, role, full_name=full_name)
    return factory


@pytest.fixture
def listing_factory(db, farmer):
    def factory(**kwargs):
        return make_listing(db, kwargs.pop("seller", farmer), **kwargs)
    return factory
