"""E2E test configuration and fixtures."""

import multiprocessing
import os
import time
from typing import Generator

import httpx
import pytest
import uvicorn

E2E_PORT = 8089


def is_server_running(port: int = E2E_PORT) -> bool:
    """Check if a server is answering on /health at the given port."""
    try:
        response = httpx.get(f"http://localhost:{port}/health", timeout=2)
        return response.status_code == 200
    except httpx.RequestError:
        return False


def run_server(port: int) -> None:
    """Run the uvicorn server in a separate process."""
    uvicorn.run("riskatlas.app:app", host="127.0.0.1", port=port, log_config=None)


@pytest.fixture(scope="session")
def server_port() -> int:
    return int(os.environ.get("RISKATLAS_E2E_PORT", E2E_PORT))


@pytest.fixture(scope="session")
def chat_server(server_port: int) -> Generator[int, None, None]:
    """Start the API server once per session, unless one is already up.

    Skips when no Anthropic key is available, since every relay test
    needs the real upstream.
    """
    if not (
        os.environ.get("ANTHROPIC_API_KEY")
        or os.environ.get("RISKATLAS_ANTHROPIC_API_KEY")
    ):
        pytest.skip("ANTHROPIC_API_KEY is not set")

    if is_server_running(server_port):
        yield server_port
        return

    process = multiprocessing.Process(target=run_server, args=(server_port,))
    process.start()

    for _ in range(30):
        if is_server_running(server_port):
            break
        if not process.is_alive():
            pytest.fail("Server process crashed during startup.", pytrace=False)
        time.sleep(1)
    else:
        process.terminate()
        pytest.fail("Server did not start within the timeout period.", pytrace=False)

    yield server_port

    process.terminate()
    process.join(timeout=10)
    if process.is_alive():
        process.kill()
        process.join()


@pytest.fixture
def base_url(chat_server: int) -> str:
    return f"http://localhost:{chat_server}"
