"""Tests for the registry detection middleware."""

import json

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from regaudit.api.middleware import STATE_KEY, RegistryDetectionMiddleware
from regaudit.detectors import NpmDetector
from regaudit.services.chain import DetectorChain
from tests.fixtures.requests import DOCKER_USER_AGENT, npm_headers


def create_app(chain: DetectorChain) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RegistryDetectionMiddleware, chain=chain)

    @app.api_route("/{path:path}", methods=["GET", "PUT"])
    async def echo(request: Request, path: str) -> dict:
        metadata = getattr(request.state, STATE_KEY)
        body = await request.body()
        return {
            "metadata": metadata.model_dump() if metadata else None,
            "body": body.decode(),
            "content_length": request.headers.get("content-length"),
        }

    return app


@pytest.fixture
def client() -> TestClient:
    chain = DetectorChain()
    chain.initialize()
    return TestClient(create_app(chain))


def test_npm_install_is_classified(client: TestClient) -> None:
    response = client.get(
        "/some-pkg",
        headers=npm_headers(command="install some-pkg --save", session="abc"),
    )

    assert response.status_code == 200
    assert response.json()["metadata"] == {
        "registry_kind": "npm",
        "matched": True,
        "attributes": {
            "command": "install",
            "extra": "some-pkg --save",
            "path": "/some-pkg",
            "session": "abc",
        },
    }


def test_image_request_uses_fallback(client: TestClient) -> None:
    response = client.get(
        "/v2/library/alpine/manifests/latest",
        headers={"User-Agent": DOCKER_USER_AGENT},
    )

    assert response.json()["metadata"]["registry_kind"] == "image"


def test_publish_body_reaches_handler(client: TestClient) -> None:
    body = json.dumps(
        {"name": "some-pkg", "dist-tags": {"latest": "2.3.1"}, "versions": {}}
    ).encode()

    response = client.put(
        "/some-pkg", content=body, headers=npm_headers(command="publish")
    )

    payload = response.json()
    assert payload["metadata"]["attributes"]["extra"] == "2.3.1"
    assert payload["body"] == body.decode()
    assert payload["content_length"] == str(len(body))


def test_malformed_publish_keeps_body(client: TestClient) -> None:
    body = b'{"dist-tags": {"latest": '

    response = client.put(
        "/some-pkg", content=body, headers=npm_headers(command="publish")
    )

    payload = response.json()
    assert response.status_code == 200
    assert payload["metadata"]["registry_kind"] == "image"
    assert payload["body"] == body.decode()
    assert payload["content_length"] == str(len(body))


def test_no_hit_leaves_metadata_empty() -> None:
    chain = DetectorChain()
    chain.register(NpmDetector())
    client = TestClient(create_app(chain))
    body = b"{not json"

    response = client.put(
        "/some-pkg", content=body, headers=npm_headers(command="publish")
    )

    payload = response.json()
    assert response.status_code == 200
    assert payload["metadata"] is None
    assert payload["body"] == body.decode()


def test_empty_chain_does_not_block_requests() -> None:
    client = TestClient(create_app(DetectorChain()))

    response = client.get("/anything")

    assert response.status_code == 200
    assert response.json()["metadata"] is None
