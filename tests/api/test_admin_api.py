"""Tests for administration and assistant endpoints."""

from prostock.core.entities import ActivityLog, User, UserRole


class TestAdminEndpoints:
    async def test_staff_cannot_edit_items(self, staff_client, fake_backend):
        response = await staff_client.put("/api/admin/items", json={"name": "Stapler"})

        assert response.status_code == 403
        assert response.json()["error_code"] == "PERMISSION_DENIED"
        fake_backend.update_item.assert_not_awaited()

    async def test_admin_saves_item(self, admin_client, fake_backend):
        response = await admin_client.put(
            "/api/admin/items",
            json={"name": "Stapler", "default_unit": "Pcs", "alt_units": [{"name": "Box", "factor": 10}]},
        )

        assert response.status_code == 200
        assert response.json()["outcome"] == "completed"
        item = fake_backend.update_item.await_args.args[0]
        assert item.to_payload()["altUnit1"] == "Box"

    async def test_bad_factor(self, admin_client):
        response = await admin_client.put(
            "/api/admin/items", json={"name": "Stapler", "alt_units": [{"name": "Box", "factor": -2}]}
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_UNIT_FACTOR"

    async def test_staff_manages_suppliers(self, staff_client, fake_backend):
        listed = await staff_client.get("/api/admin/suppliers")
        saved = await staff_client.put("/api/admin/suppliers", json={"name": "CV Maju"})

        assert listed.json()[0]["id"] == "S1"
        assert saved.status_code == 200
        fake_backend.update_supplier.assert_awaited_once()

    async def test_users_without_passwords(self, admin_client, fake_backend):
        fake_backend.get_users.return_value = [User(id="3", username="sari", role=UserRole.ADMIN)]
        users = (await admin_client.get("/api/admin/users")).json()
        assert users == [{"id": "3", "username": "sari", "name": "", "role": "ADMIN"}]

    async def test_primary_admin_cannot_be_deleted(self, admin_client, fake_backend):
        response = await admin_client.delete("/api/admin/users/1")
        assert response.status_code == 403
        fake_backend.delete_user.assert_not_awaited()

    async def test_logs(self, admin_client, fake_backend):
        fake_backend.get_activity_logs.return_value = [ActivityLog(user="admin", action="DELETE_ITEM")]
        logs = (await admin_client.get("/api/admin/logs")).json()
        assert logs[0]["action"] == "DELETE_ITEM"


class TestAssistantEndpoints:
    async def test_chat(self, staff_client, llm):
        response = await staff_client.post("/api/assistant/chat", json={"message": "How is paper?"})

        body = response.json()
        assert body["reply"]["content"] == "Paper is well stocked."
        assert body["message_count"] == 3

        messages = (await staff_client.get("/api/assistant/messages")).json()
        assert [m["role"] for m in messages] == ["assistant", "user", "assistant"]

    async def test_llm_outage_falls_back(self, staff_client, llm):
        from prostock.core.exceptions import LLMUnavailableError

        llm.chat.side_effect = LLMUnavailableError("ollama")

        response = await staff_client.post("/api/assistant/chat", json={"message": "Hi"})

        assert response.status_code == 200
        assert response.json()["reply"]["content"].startswith("The AI assistant is currently unavailable")

    async def test_insights(self, staff_client):
        body = (await staff_client.get("/api/assistant/insights")).json()
        assert body == {"insights": "1. Reorder cement."}
