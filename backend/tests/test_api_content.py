"""
LivDaily Backend — Mindfulness, Admin & AI API Tests
======================================================

What we test:
    ✅ First subscription lookup yields free/active
    ✅ Free callers see ≤103-char previews; premium callers see full bodies
    ✅ Inactive content is hidden
    ✅ Content items expose aiGenerated and isActive
    ✅ Every admin route refuses non-admins (403); roles are validated (400)
    ✅ Admin content generation saves the model's title and body as AI-generated
    ✅ Weekly motivation current/history
    ✅ AI routes are session-gated and map provider failures to 503
"""

import uuid
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest

from conftest import bearer, sign_in_anonymous
from livdaily.exceptions import LLMServiceError
from livdaily.schemas.ai import GeneratedContent, JournalPromptResponse
from livdaily.services.motivation_service import week_start

LONG_BODY = "Notice five things you can see. " * 10

_SOME_ID = str(uuid.uuid4())

# Every admin route with a body that would pass validation
ADMIN_ROUTES = [
    ("GET", "/api/admin/users", None),
    ("PUT", f"/api/admin/users/{_SOME_ID}/role", {"role": "admin"}),
    ("GET", "/api/admin/stats", None),
    ("POST", "/api/admin/subscription/grant", {"userId": _SOME_ID}),
    ("GET", "/api/admin/subscriptions", None),
    ("POST", "/api/admin/mindfulness/content", {"title": "Breathe", "content": "In, out."}),
    (
        "POST",
        "/api/admin/mindfulness/generate",
        {"contentType": "exercise", "category": "breathing"},
    ),
    ("PUT", f"/api/admin/mindfulness/content/{_SOME_ID}", {"title": "Renamed"}),
    ("DELETE", f"/api/admin/mindfulness/content/{_SOME_ID}", None),
    ("POST", "/api/admin/motivation", {"weekStartDate": "2024-06-03", "content": "Rest."}),
    ("PUT", f"/api/admin/motivation/{_SOME_ID}", {"content": "Rest more."}),
    ("DELETE", f"/api/admin/motivation/{_SOME_ID}", None),
]


async def _create_content(client, admin_headers, **fields):
    payload = {"module": "mindfulness", "title": "Five senses", "content": LONG_BODY}
    payload.update(fields)
    response = await client.post(
        "/api/admin/mindfulness/content", json=payload, headers=admin_headers
    )
    assert response.status_code == 201
    return response.json()


class TestSubscriptionAndGate:

    @pytest.mark.asyncio
    async def test_first_subscription_is_free_and_active(self, test_client, auth_headers):
        response = await test_client.get("/api/mindfulness/subscription", headers=auth_headers)

        assert response.status_code == 200
        subscription = response.json()
        assert subscription["subscriptionType"] == "free"
        assert subscription["status"] == "active"
        assert subscription["isPremium"] is False

        again = await test_client.get("/api/mindfulness/subscription", headers=auth_headers)
        assert again.json()["id"] == subscription["id"]

    @pytest.mark.asyncio
    async def test_free_user_sees_preview(self, test_client, auth_headers, admin_headers):
        await _create_content(test_client, admin_headers, is_premium=True)
        await _create_content(test_client, admin_headers, title="Short", content="Breathe.")

        items = (await test_client.get("/api/mindfulness/content", headers=auth_headers)).json()

        assert len(items) == 2
        for item in items:
            assert len(item["content"]) <= 103
            assert item["content"].endswith("...")
            assert item["isTruncated"] is True

    @pytest.mark.asyncio
    async def test_premium_user_sees_full_body(self, test_client, admin_headers):
        created = await _create_content(test_client, admin_headers, isPremium=True)
        session = await sign_in_anonymous(test_client)
        headers = bearer(session["token"])

        grant = await test_client.post(
            "/api/admin/subscription/grant",
            json={"userId": session["userId"], "subscriptionType": "premium", "durationDays": 30},
            headers=admin_headers,
        )
        assert grant.status_code == 200
        assert grant.json()["isPremium"] is True

        item = (
            await test_client.get(f"/api/mindfulness/content/{created['id']}", headers=headers)
        ).json()
        assert item["content"] == LONG_BODY
        assert item["isTruncated"] is False

    @pytest.mark.asyncio
    async def test_content_item_shape(self, test_client, auth_headers, admin_headers):
        created = await _create_content(test_client, admin_headers, category="grounding")
        assert created["aiGenerated"] is False
        assert created["isActive"] is True

        items = (await test_client.get("/api/mindfulness/content", headers=auth_headers)).json()

        assert set(items[0]) == {
            "id", "module", "title", "content", "payload", "contentType", "category",
            "duration", "isPremium", "aiGenerated", "isActive", "isTruncated", "createdAt",
        }
        assert items[0]["aiGenerated"] is False
        assert items[0]["isActive"] is True

    @pytest.mark.asyncio
    async def test_module_filter_and_inactive_items(self, test_client, auth_headers, admin_headers):
        breath = await _create_content(test_client, admin_headers, module="breathwork")
        await _create_content(test_client, admin_headers, module="sleep")
        await test_client.put(
            f"/api/admin/mindfulness/content/{breath['id']}",
            json={"isActive": False},
            headers=admin_headers,
        )

        filtered = await test_client.get(
            "/api/mindfulness/content?module=breathwork", headers=auth_headers
        )
        detail = await test_client.get(
            f"/api/mindfulness/content/{breath['id']}", headers=auth_headers
        )

        assert filtered.json() == []
        assert detail.status_code == 404

    @pytest.mark.asyncio
    async def test_mindfulness_journal(self, test_client, auth_headers, admin_headers):
        item = await _create_content(test_client, admin_headers)

        response = await test_client.post(
            "/api/mindfulness/journal",
            json={"contentItemId": item["id"], "content": "Felt my feet on the floor."},
            headers=auth_headers,
        )
        assert response.status_code == 201

        entries = (await test_client.get("/api/mindfulness/journal", headers=auth_headers)).json()
        assert entries[0]["contentItemId"] == item["id"]

        missing = await test_client.post(
            "/api/mindfulness/journal",
            json={"contentItemId": str(uuid.uuid4()), "content": "?"},
            headers=auth_headers,
        )
        assert missing.status_code == 404


class TestAdminApi:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path,body", ADMIN_ROUTES, ids=[f"{m} {p}" for m, p, _ in ADMIN_ROUTES]
    )
    async def test_non_admin_is_forbidden(self, test_client, auth_headers, method, path, body):
        response = await test_client.request(method, path, json=body, headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    @pytest.mark.asyncio
    async def test_anonymous_caller_is_unauthorized(self, test_client):
        response = await test_client.get("/api/admin/users")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_role_is_rejected(self, test_client, admin_headers):
        session = await sign_in_anonymous(test_client)

        response = await test_client.put(
            f"/api/admin/users/{session['userId']}/role",
            json={"role": "superuser"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_promote_user(self, test_client, admin_headers):
        session = await sign_in_anonymous(test_client)

        response = await test_client.put(
            f"/api/admin/users/{session['userId']}/role",
            json={"role": "admin"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["role"] == "admin"

        promoted = await test_client.get("/api/admin/users", headers=bearer(session["token"]))
        assert promoted.status_code == 200

    @pytest.mark.asyncio
    async def test_role_update_for_unknown_user(self, test_client, admin_headers):
        response = await test_client.put(
            f"/api/admin/users/{uuid.uuid4()}/role", json={"role": "user"}, headers=admin_headers
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_stats_count_records(self, test_client, auth_headers, admin_headers):
        await test_client.post("/api/journal", json={"content": "hello"}, headers=auth_headers)

        stats = (await test_client.get("/api/admin/stats", headers=admin_headers)).json()

        assert stats["totalUsers"] == 2
        assert stats["totalJournalEntries"] == 1
        assert stats["activePremiumSubscriptions"] == 0

    @pytest.mark.asyncio
    async def test_generate_saves_ai_content(self, test_client, auth_headers, admin_headers):
        generated = GeneratedContent(title="Feet on the floor", content="Notice the ground.")
        content_item = AsyncMock(return_value=generated)
        with patch("livdaily.services.mindfulness_service.ai_service.content_item", content_item):
            response = await test_client.post(
                "/api/admin/mindfulness/generate",
                json={"contentType": "exercise", "category": "grounding", "duration": 5},
                headers=admin_headers,
            )

        assert response.status_code == 201
        item = response.json()
        assert item["title"] == "Feet on the floor"
        assert item["content"] == "Notice the ground."
        assert item["aiGenerated"] is True
        assert item["isActive"] is True
        assert item["contentType"] == "exercise"
        assert item["category"] == "grounding"
        content_item.assert_awaited_once_with("exercise", "grounding", 5)

        listed = (await test_client.get("/api/mindfulness/content", headers=auth_headers)).json()
        assert [i["id"] for i in listed] == [item["id"]]
        assert listed[0]["aiGenerated"] is True

    @pytest.mark.asyncio
    async def test_generate_provider_failure_saves_nothing(
        self, test_client, auth_headers, admin_headers
    ):
        failing = AsyncMock(side_effect=LLMServiceError(message="AI generation failed."))
        with patch("livdaily.services.mindfulness_service.ai_service.content_item", failing):
            response = await test_client.post(
                "/api/admin/mindfulness/generate",
                json={"contentType": "meditation", "category": "sleep"},
                headers=admin_headers,
            )

        assert response.status_code == 503
        listed = await test_client.get("/api/mindfulness/content", headers=auth_headers)
        assert listed.json() == []


class TestMotivationApi:

    @pytest.mark.asyncio
    async def test_current_week(self, test_client, auth_headers, admin_headers):
        missing = await test_client.get("/api/motivation/current", headers=auth_headers)
        assert missing.status_code == 404

        monday = week_start(date.today()).isoformat()
        response = await test_client.post(
            "/api/admin/motivation",
            json={"weekStartDate": monday, "content": "Rest is productive.", "author": "LivDaily"},
            headers=admin_headers,
        )
        assert response.status_code == 201

        current = await test_client.get("/api/motivation/current", headers=auth_headers)
        assert current.status_code == 200
        assert current.json()["content"] == "Rest is productive."

    @pytest.mark.asyncio
    async def test_history_respects_limit(self, test_client, auth_headers, admin_headers):
        for monday in ("2024-05-20", "2024-05-27", "2024-06-03"):
            await test_client.post(
                "/api/admin/motivation",
                json={"weekStartDate": monday, "content": f"Week of {monday}"},
                headers=admin_headers,
            )

        history = (
            await test_client.get("/api/motivation/history?limit=2", headers=auth_headers)
        ).json()

        assert [m["weekStartDate"] for m in history] == ["2024-06-03", "2024-05-27"]


class TestAiApi:

    @pytest.mark.asyncio
    async def test_requires_session(self, test_client):
        response = await test_client.post(
            "/api/ai/journal-prompt", json={"mood": "ok", "energy": "ok", "rhythmPhase": "night"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_journal_prompt(self, test_client, auth_headers):
        reply = JournalPromptResponse(prompt="What can you let go of?", supportive_message="Rest.")
        with patch(
            "livdaily.routes.ai.ai_service.journal_prompt", AsyncMock(return_value=reply)
        ):
            response = await test_client.post(
                "/api/ai/journal-prompt",
                json={"mood": "tired", "energy": "low", "rhythmPhase": "night"},
                headers=auth_headers,
            )

        assert response.status_code == 200
        assert response.json() == {
            "prompt": "What can you let go of?",
            "supportiveMessage": "Rest.",
        }

    @pytest.mark.asyncio
    async def test_provider_failure_is_503(self, test_client, auth_headers):
        with patch(
            "livdaily.routes.ai.ai_service.weekly_motivation",
            AsyncMock(side_effect=LLMServiceError(message="AI generation failed.")),
        ):
            response = await test_client.post(
                "/api/ai/weekly-motivation", json={"weekTheme": "ease"}, headers=auth_headers
            )

        assert response.status_code == 503
        assert response.json()["error"] == "llm_service_error"
