"""
Tests for the Watchpost Server HTTP endpoints

Requests go through FastAPI's TestClient. The lifespan handler is not
run; stores are pointed at temporary files instead.
"""

import logging
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import app_config
import database
import notifications
from config_store import IniConfigStore
from managers.database_manager import DatabaseManager
from managers.role_manager import RoleManager
from routes.common import GetRoleManager
from server import app

USER = {"X-Remote-User": "alice"}


class FailingStore(IniConfigStore):
    """Store whose file can never be written"""

    def Save(self) -> bool:
        return False


class FailingDatabaseManager(DatabaseManager):
    def SaveUserPreferences(self, username, preferences) -> bool:
        return False


@pytest.fixture
def client(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "roles.ini").write_text(
        "[admins]\nusers = alice\npermissions = *\n\n[viewers]\ngroups = noc\n",
        encoding="utf-8"
    )
    (config_dir / "config.ini").write_text("[global]\ndateFormat = d.m.Y\n", encoding="utf-8")

    monkeypatch.setattr(app_config, "ROLES_FILE", config_dir / "roles.ini")
    monkeypatch.setattr(app_config, "CONFIG_FILE", config_dir / "config.ini")
    monkeypatch.setattr(app_config, "LOCALE_DIR", tmp_path / "locale")
    monkeypatch.setattr(database, "db_manager", DatabaseManager(str(tmp_path / "watchpost.db")))
    database.db_manager.InitializeDatabase()
    notifications.PopNotifications("alice")

    yield TestClient(app)

    app.dependency_overrides.clear()
    notifications.PopNotifications("alice")


def RolesOnDisk():
    return IniConfigStore(app_config.ROLES_FILE).Sections()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_requires_remote_user(client):
    """Test that requests without the authentication header are rejected"""
    response = client.get("/security")

    assert response.status_code == 401


def test_list_roles(client):
    response = client.get("/security", headers=USER)

    assert response.status_code == 200
    assert "admins" in response.text
    assert "viewers" in response.text


def test_create_role(client):
    """Test that a created role is saved and a notification is queued"""
    response = client.post(
        "/security/new",
        data={"name": "operators", "users": "carol", "btn_submit": "Create Role"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/security"
    assert RolesOnDisk() == ["admins", "viewers", "operators"]

    page = client.get("/security", headers=USER)
    assert "Role created" in page.text


def test_create_duplicate_role_redisplays_form(client):
    response = client.post(
        "/security/new",
        data={"name": "admins", "btn_submit": "Create Role"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 200
    assert "Role already exists" in response.text
    assert notifications.PopNotifications("alice") == []


def test_create_role_save_failure_has_no_notification(client):
    """Test that no success is reported when roles.ini cannot be written"""
    app.dependency_overrides[GetRoleManager] = lambda: RoleManager(FailingStore(app_config.ROLES_FILE))

    response = client.post(
        "/security/new",
        data={"name": "operators", "btn_submit": "Create Role"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 200
    assert notifications.PopNotifications("alice") == []
    assert RolesOnDisk() == ["admins", "viewers"]


def test_update_requires_role_parameter(client):
    response = client.get("/security/update", headers=USER)

    assert response.status_code == 400
    assert response.json()["detail"] == "Required parameter 'role' missing"


def test_update_unknown_role(client):
    response = client.get("/security/update", params={"role": "ghosts"}, headers=USER)

    assert response.status_code == 400


def test_update_role_renames(client):
    response = client.post(
        "/security/update?role=admins",
        data={"name": "superusers", "users": "alice", "permissions": "*", "btn_submit": "Update Role"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 303
    assert RolesOnDisk() == ["viewers", "superusers"]
    assert [n.message for n in notifications.PopNotifications("alice")] == ["Role updated"]


def test_update_role_to_existing_name(client):
    response = client.post(
        "/security/update?role=admins",
        data={"name": "viewers", "btn_submit": "Update Role"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 200
    assert "already exists" in response.text
    assert RolesOnDisk() == ["admins", "viewers"]


def test_remove_requires_role_parameter(client):
    response = client.post("/security/remove", data={"btn_submit": "Remove Role"}, headers=USER)

    assert response.status_code == 400


def test_remove_role_asks_for_confirmation(client):
    response = client.get("/security/remove", params={"role": "viewers"}, headers=USER)

    assert response.status_code == 200
    assert "Remove Role" in response.text
    assert RolesOnDisk() == ["admins", "viewers"]


def test_remove_role(client):
    response = client.post(
        "/security/remove?role=viewers",
        data={"btn_submit": "Remove Role"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 303
    assert RolesOnDisk() == ["admins"]
    assert [n.message for n in notifications.PopNotifications("alice")] == ["Role removed"]


def test_remove_role_save_failure_has_no_notification(client):
    app.dependency_overrides[GetRoleManager] = lambda: RoleManager(FailingStore(app_config.ROLES_FILE))

    response = client.post(
        "/security/remove?role=viewers",
        data={"btn_submit": "Remove Role"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 200
    assert notifications.PopNotifications("alice") == []
    assert RolesOnDisk() == ["admins", "viewers"]


def test_preferences_page_shows_global_default(client):
    response = client.get("/preferences", headers=USER)

    assert response.status_code == 200
    assert 'value="d.m.Y"' in response.text


def test_preferences_autosubmit_does_not_save(client):
    """Test that toggling a checkbox only re-renders the form"""
    response = client.post("/preferences", data={"default_date_format": "0"}, headers=USER)

    assert response.status_code == 200
    assert database.db_manager.GetUserPreferences("alice") == {}


def test_save_preferences(client):
    response = client.post(
        "/preferences",
        data={
            "default_language": "1",
            "default_timezone": "1",
            "default_date_format": "0",
            "date_format": "Y-m-d",
            "default_time_format": "1",
            "show_benchmark": "1",
            "btn_submit": "Save Changes",
        },
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 303
    assert database.db_manager.GetUserPreferences("alice") == {
        "app.dateFormat": "Y-m-d",
        "app.show_benchmark": "1",
    }
    assert [n.message for n in notifications.PopNotifications("alice")] == ["Preferences updated successfully"]


def test_save_invalid_preferences(client):
    response = client.post(
        "/preferences",
        data={"default_date_format": "0", "date_format": "not-a-format", "btn_submit": "Save Changes"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 200
    assert 'value="not-a-format"' in response.text
    assert "Invalid date format" in response.text
    assert database.db_manager.GetUserPreferences("alice") == {}


def test_preferences_save_failure_has_no_notification(client, tmp_path, monkeypatch):
    monkeypatch.setattr(database, "db_manager", FailingDatabaseManager(str(tmp_path / "failing.db")))
    database.db_manager.InitializeDatabase()

    response = client.post(
        "/preferences",
        data={"default_language": "1", "btn_submit": "Save Changes"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 200
    assert notifications.PopNotifications("alice") == []


def test_api_list_roles(client):
    """Test the JSON role listing"""
    response = client.get("/api/roles", headers=USER)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert [role["name"] for role in data["roles"]] == ["admins", "viewers"]
    assert data["roles"][0]["permissions"] == ["*"]
    assert data["roles"][1]["groups"] == ["noc"]


def test_create_role_with_reserved_name_redisplays_form(client):
    """Test that a name that can't be stored in roles.ini is an inline error"""
    response = client.post(
        "/security/new",
        data={"name": "DEFAULT", "users": "bob", "btn_submit": "Create Role"},
        headers=USER,
        follow_redirects=False
    )

    assert response.status_code == 200
    assert "The name is reserved" in response.text
    assert RolesOnDisk() == ["admins", "viewers"]
    assert client.get("/security", headers=USER).status_code == 200


def test_malformed_roles_file(client, caplog):
    """Test that a damaged roles.ini is logged and answered with 500"""
    app_config.ROLES_FILE.write_text("users = alice\n", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        response = client.get("/security", headers=USER)

    assert response.status_code == 500
    assert "Error loading roles" in caplog.text


def test_malformed_config_file(client, caplog):
    app_config.CONFIG_FILE.write_text("[global]\nlanguage = de_DE\n[global]\n", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        response = client.get("/preferences", headers=USER)

    assert response.status_code == 500
    assert "Error loading global configuration" in caplog.text
