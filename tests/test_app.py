"""Tests for the aiohttp application."""

import pytest
import yaml
from aiohttp import test_utils
from structlog.testing import capture_logs

from tutor_relay.errors import InternalError, UpstreamError
from tutor_relay.main import KEYWORD_GROUPS_KEY, create_app
from tutor_relay.prompts import DEFAULT_KEYWORD_GROUPS, ModificationIntent, build_subject_prompt


def _client(app) -> test_utils.TestClient:
    return test_utils.TestClient(test_utils.TestServer(app))


ORIGIN = "http://localhost:5555"


@pytest.fixture
def app(settings, mock_mistral_client):
    return create_app(settings, mistral_client=mock_mistral_client)


@pytest.mark.asyncio
async def test_ask_returns_completion(app, mock_mistral_client, completion_body):
    async with _client(app) as client:
        resp = await client.get(
            "/mistral/ask", params={"subject": "Mathematics", "topic": "derivatives"}
        )
        assert resp.status == 200
        assert await resp.json() == completion_body

    mock_mistral_client.complete.assert_awaited_once_with(
        build_subject_prompt("Mathematics", "derivatives")
    )


@pytest.mark.asyncio
async def test_ask_with_modification_request(app, mock_mistral_client):
    async with _client(app) as client:
        resp = await client.get(
            "/mistral/ask",
            params={
                "subject": "History",
                "topic": "Rome",
                "modificationRequest": "зроби дуже коротким",
                "previousAnswer": "Rome was founded in 753 BC.",
            },
        )
        assert resp.status == 200

    mock_mistral_client.complete.assert_awaited_once_with(
        "Зроби наступну відповідь максимально короткою:\nRome was founded in 753 BC."
    )


@pytest.mark.asyncio
async def test_ask_without_parameters_is_rejected(app, mock_mistral_client):
    async with _client(app) as client:
        resp = await client.get("/mistral/ask")
        assert resp.status == 400
        assert await resp.json() == {
            "statusCode": 400,
            "message": "Missing subject/topic or modification request",
        }

    mock_mistral_client.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_upstream_error_keeps_remote_status(app, mock_mistral_client):
    mock_mistral_client.complete.side_effect = UpstreamError(429, "rate limited")

    async with _client(app) as client:
        resp = await client.get("/mistral/ask", params={"topic": "waves"})
        assert resp.status == 429
        assert await resp.json() == {
            "statusCode": 429,
            "message": "Error while contacting Mistral: 429 rate limited",
        }


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [InternalError(), RuntimeError("db password is hunter2")])
async def test_internal_failures_return_generic_500(app, mock_mistral_client, error):
    mock_mistral_client.complete.side_effect = error

    async with _client(app) as client:
        resp = await client.get("/mistral/ask", params={"topic": "waves"})
        assert resp.status == 500
        assert await resp.json() == {
            "statusCode": 500,
            "message": "Unexpected error occurred",
        }


@pytest.mark.asyncio
async def test_health(app):
    async with _client(app) as client:
        resp = await client.get("/health")
        assert resp.status == 200
        assert await resp.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_cors_allows_configured_origin(app):
    async with _client(app) as client:
        resp = await client.get("/health", headers={"Origin": ORIGIN})
        assert resp.headers["Access-Control-Allow-Origin"] == ORIGIN

        # error responses are readable by the browser too
        resp = await client.get("/mistral/ask", headers={"Origin": ORIGIN})
        assert resp.status == 400
        assert resp.headers["Access-Control-Allow-Origin"] == ORIGIN


@pytest.mark.asyncio
async def test_cors_ignores_other_origins(app):
    async with _client(app) as client:
        resp = await client.get("/health", headers={"Origin": "http://evil.example"})
        assert resp.status == 200
        assert "Access-Control-Allow-Origin" not in resp.headers


@pytest.mark.asyncio
async def test_cors_preflight(app, mock_mistral_client):
    async with _client(app) as client:
        resp = await client.options(
            "/mistral/ask",
            headers={
                "Origin": ORIGIN,
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert resp.status == 200
        assert resp.headers["Access-Control-Allow-Origin"] == ORIGIN
        assert resp.headers["Access-Control-Allow-Methods"] == "GET"
        assert "CONTENT-TYPE" in resp.headers["Access-Control-Allow-Headers"].upper()

    mock_mistral_client.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_cors_preflight_rejects_other_origin(app):
    async with _client(app) as client:
        resp = await client.options(
            "/mistral/ask",
            headers={"Origin": "http://evil.example", "Access-Control-Request-Method": "GET"},
        )
        assert resp.status == 403
        assert "Access-Control-Allow-Origin" not in resp.headers


@pytest.mark.asyncio
async def test_preflight_to_unknown_route_is_not_found(app):
    async with _client(app) as client:
        resp = await client.options(
            "/no/such/route",
            headers={"Origin": "http://evil.example", "Access-Control-Request-Method": "GET"},
        )
        assert resp.status == 404
        assert "Access-Control-Allow-Origin" not in resp.headers


@pytest.mark.asyncio
async def test_cors_disabled_without_origin(settings, mock_mistral_client):
    app = create_app(
        settings.model_copy(update={"cors_origin": ""}),
        mistral_client=mock_mistral_client,
    )

    async with _client(app) as client:
        resp = await client.get("/health", headers={"Origin": ORIGIN})
        assert "Access-Control-Allow-Origin" not in resp.headers


@pytest.mark.asyncio
async def test_client_closed_on_cleanup(app, mock_mistral_client):
    async with _client(app) as client:
        await client.get("/health")

    mock_mistral_client.close.assert_awaited_once()


def test_default_keyword_groups_without_config(app):
    assert app[KEYWORD_GROUPS_KEY] is DEFAULT_KEYWORD_GROUPS


def test_keyword_groups_loaded_from_config(settings, mock_mistral_client, tmp_path):
    path = tmp_path / "keywords.yaml"
    path.write_text(yaml.dump({"groups": [{"intent": "expand", "keywords": ["more"]}]}))

    app = create_app(
        settings.model_copy(update={"intent_keywords_path": str(path)}),
        mistral_client=mock_mistral_client,
    )

    assert [g.intent for g in app[KEYWORD_GROUPS_KEY]] == [ModificationIntent.EXPAND]


def test_invalid_keyword_config_fails_startup(settings, mock_mistral_client, tmp_path):
    with pytest.raises(FileNotFoundError):
        create_app(
            settings.model_copy(update={"intent_keywords_path": str(tmp_path / "nope.yaml")}),
            mistral_client=mock_mistral_client,
        )


def test_missing_api_key_logged_as_warning(settings, mock_mistral_client):
    with capture_logs() as logs:
        create_app(
            settings.model_copy(update={"mistral_api_key": ""}),
            mistral_client=mock_mistral_client,
        )

    assert {
        "event": "mistral_api_key_missing",
        "log_level": "warning",
        "env": "MISTRAL_API_KEY",
    } in logs
    assert not any(entry["event"] == "mistral_api_key_loaded" for entry in logs)


def test_present_api_key_logged_as_loaded(settings, mock_mistral_client):
    with capture_logs() as logs:
        create_app(settings, mistral_client=mock_mistral_client)

    assert {"event": "mistral_api_key_loaded", "log_level": "info"} in logs
    assert not any(entry["event"] == "mistral_api_key_missing" for entry in logs)
