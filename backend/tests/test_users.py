"""Tests for User endpoints and per-author listings."""
from tests.conftest import create_test_user, create_test_discussion, create_test_operation


class TestUserCRUD:
    """User create / get / list."""

    def test_create_user(self, client):
        data = create_test_user(client, name="alice")
        assert data["username"] == "alice"
        assert data["role"] == "Registered"
        assert "user_id" in data

    def test_create_guest(self, client):
        data = create_test_user(client, name="visitor", role="Guest")
        assert data["role"] == "Guest"

    def test_duplicate_username(self, client):
        create_test_user(client, name="alice")
        resp = client.post("/api/users/", json={"username": "alice"})
        assert resp.status_code == 409

    def test_duplicate_email(self, client):
        resp = client.post("/api/users/", json={"username": "alice", "email": "shared@example.com"})
        assert resp.status_code == 201
        resp = client.post("/api/users/", json={"username": "bob", "email": "shared@example.com"})
        assert resp.status_code == 409

        # The rejected insert leaves nothing behind and later registrations work
        names = [u["username"] for u in client.get("/api/users/").json()]
        assert names == ["alice"]
        create_test_user(client, name="bob")

    def test_invalid_role(self, client):
        resp = client.post("/api/users/", json={"username": "mallory", "role": "Admin"})
        assert resp.status_code == 400

    def test_get_user(self, client):
        user = create_test_user(client)
        resp = client.get(f"/api/users/{user['user_id']}")
        assert resp.status_code == 200
        assert resp.json()["username"] == "alice"

    def test_get_user_not_found(self, client):
        resp = client.get("/api/users/00000000-0000-0000-0000-000000000000")
        assert resp.status_code == 404

    def test_list_users(self, client):
        create_test_user(client, name="alice")
        create_test_user(client, name="bob")
        resp = client.get("/api/users/")
        assert resp.status_code == 200
        names = [u["username"] for u in resp.json()]
        assert "alice" in names
        assert "bob" in names


class TestAuthorListings:
    """Discussions and operations listed by author, newest first."""

    def test_user_discussions(self, client):
        alice = create_test_user(client, name="alice")
        bob = create_test_user(client, name="bob")
        first = create_test_discussion(client, alice["user_id"], starting_number=1)
        second = create_test_discussion(client, alice["user_id"], starting_number=2)
        create_test_discussion(client, bob["user_id"], starting_number=3)

        resp = client.get(f"/api/users/{alice['user_id']}/discussions")
        assert resp.status_code == 200
        ids = [d["discussion_id"] for d in resp.json()]
        assert ids == [second["discussion_id"], first["discussion_id"]]

    def test_user_operations(self, client):
        alice = create_test_user(client, name="alice")
        bob = create_test_user(client, name="bob")
        discussion = create_test_discussion(client, alice["user_id"])
        op1 = create_test_operation(client, discussion["discussion_id"], bob["user_id"])
        op2 = create_test_operation(client, discussion["discussion_id"], bob["user_id"],
                                    operation_type="SUBTRACT", operand=1,
                                    parent_id=op1["operation_id"])
        create_test_operation(client, discussion["discussion_id"], alice["user_id"])

        resp = client.get(f"/api/users/{bob['user_id']}/operations")
        assert resp.status_code == 200
        ids = [o["operation_id"] for o in resp.json()]
        assert ids == [op2["operation_id"], op1["operation_id"]]

    def test_listing_unknown_user(self, client):
        resp = client.get("/api/users/nobody/operations")
        assert resp.status_code == 404
