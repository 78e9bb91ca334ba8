"""Unit tests for the SendGrid client."""

import json

import httpx
import pytest

from heritage_hub.api.sendgrid import SendGridClient
from heritage_hub.core.exceptions import ConfigurationError, SendGridError


def make_client(handler, api_key="SG.test", from_email="orders@heritagebox.com") -> SendGridClient:
    return SendGridClient(
        api_key=api_key,
        from_email=from_email,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestSendEmail:
    @pytest.mark.asyncio
    async def test_message_shape(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(202)

        client = make_client(handler)
        await client.send_email(
            "ada@example.com", "Hello", "<p>Hi</p>", reply_to="prospect@example.com"
        )
        await client.close()

        assert seen["path"] == "/v3/mail/send"
        assert seen["auth"] == "Bearer SG.test"
        assert seen["body"] == {
            "personalizations": [{"to": [{"email": "ada@example.com"}]}],
            "from": {"email": "orders@heritagebox.com"},
            "subject": "Hello",
            "content": [{"type": "text/html", "value": "<p>Hi</p>"}],
            "reply_to": {"email": "prospect@example.com"},
        }

    @pytest.mark.asyncio
    async def test_no_reply_to_by_default(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(202)

        await make_client(handler).send_email("ada@example.com", "Hello", "<p>Hi</p>")
        assert "reply_to" not in seen["body"]

    @pytest.mark.asyncio
    async def test_missing_from_email(self):
        client = make_client(lambda request: httpx.Response(202), from_email=None)
        with pytest.raises(ConfigurationError):
            await client.send_email("ada@example.com", "Hello", "<p>Hi</p>")

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        client = make_client(lambda request: httpx.Response(202), api_key=None)
        with pytest.raises(ConfigurationError):
            await client.send_email("ada@example.com", "Hello", "<p>Hi</p>")

    @pytest.mark.asyncio
    async def test_rejected(self):
        errors = {"errors": [{"message": "The from address does not match a verified Sender"}]}
        client = make_client(lambda request: httpx.Response(403, json=errors))

        with pytest.raises(SendGridError) as exc_info:
            await client.send_email("ada@example.com", "Hello", "<p>Hi</p>")

        assert exc_info.value.details == errors


class TestAddContacts:
    @pytest.mark.asyncio
    async def test_upserts_into_list(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(202, json={"job_id": "job-1"})

        contacts = [{"email": "ada@example.com", "first_name": "Ada", "last_name": "Lovelace"}]
        result = await make_client(handler).add_contacts("list-123", contacts)

        assert result == {"job_id": "job-1"}
        assert seen["method"] == "PUT"
        assert seen["path"] == "/v3/marketing/contacts"
        assert seen["body"] == {"list_ids": ["list-123"], "contacts": contacts}

    @pytest.mark.asyncio
    async def test_empty_response_body(self):
        client = make_client(lambda request: httpx.Response(202))
        assert await client.add_contacts("list-123", [{"email": "ada@example.com"}]) == {}
