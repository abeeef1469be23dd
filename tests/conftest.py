"""Pytest fixtures."""

import asyncio
import socket
import threading
import time

import httpx
import pytest
import uvicorn

from mood_nft.collection import TokenCollection
from mood_nft.registry import MoodRegistry
from mood_nft.server import create_app


@pytest.fixture
def live_server():
    """Run the API on a free port in a background thread and yield its URL."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    host, port = sock.getsockname()
    sock.close()
    base_url = f"http://{host}:{port}"

    registry = MoodRegistry(
        "ipfs://sad", "ipfs://happy", TokenCollection("MoodNFT", "MN")
    )
    config = uvicorn.Config(
        app=create_app(registry),
        host=host,
        port=port,
        loop="asyncio",
        lifespan="on",
        log_level="warning",
        ws="none",
    )
    server = uvicorn.Server(config)

    def run_server() -> None:
        asyncio.run(server.serve())

    thread = threading.Thread(target=run_server, daemon=True)
    thread.start()

    # Wait for server to be ready
    start = time.time()
    while time.time() - start < 5.0:
        try:
            r = httpx.get(base_url + "/", timeout=0.2)
            if r.status_code == 200:
                break
        except httpx.HTTPError:
            pass
        time.sleep(0.05)
    else:
        server.should_exit = True
        thread.join(timeout=1.0)
        pytest.fail("Server did not start in time")

    yield base_url

    server.should_exit = True
    thread.join(timeout=2.0)
