import pytest

from app import build_components, create_app
from common.models.user import ROLE_USER, CurrentUser
from config import StoreConfig
from services import ensure_data_files

ADMIN_PASSWORD = "admin-pass"


@pytest.fixture()
def config(tmp_path):
    return StoreConfig(
        jwt_secret="test-secret-key-for-hs256-signing-0001",
        data_dir=tmp_path / "data",
        admin_password=ADMIN_PASSWORD,
        log_level="WARNING",
    )


@pytest.fixture()
def components(config):
    """Services wired the same way create_app wires them, without Flask."""
    built = build_components(config)
    ensure_data_files(built["store"], config)
    return built


@pytest.fixture()
def shopper(components):
    """Factory: open a login session and return the CurrentUser for it."""

    def _shopper(user_id=100, username="budi"):
        sid = components["sessions"].open_session(user_id)
        return CurrentUser(id=user_id, username=username, role=ROLE_USER, sid=sid)

    return _shopper


SHIPPING = {
    "receiverName": "Budi Santoso",
    "contactPhone": "081234567890",
    "contactEmail": "budi@example.com",
    "deliveryAddress": "Jl. Merdeka 10",
    "deliveryProvince": "Jawa Timur",
    "deliveryCity": "Malang",
    "deliveryDistrict": "Klojen",
}


@pytest.fixture()
def shipping():
    return dict(SHIPPING)


@pytest.fixture()
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


def login(client, email, password):
    response = client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.get_json()
    return {"Authorization": f"Bearer {response.get_json()['token']}"}


@pytest.fixture()
def admin_headers(client, config):
    return login(client, config.admin_email, ADMIN_PASSWORD)


@pytest.fixture()
def register_user(client):
    def _register(username="budi", email="budi@example.com", password="rahasia1"):
        response = client.post(
            "/api/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.get_json()
        return login(client, email, password)

    return _register


@pytest.fixture()
def user_headers(register_user):
    return register_user()
