#!/usr/bin/env python3
"""
Example: retry a bearer-token fetch against a flaky identity provider.

The token client below is a stand-in that throttles the first two requests.
Each call builds its own client, so no client or token is shared between
calls.
"""

import asyncio
from pathlib import Path

from retryloop import RetryExecutor, RetryRecorder, TransientClassifier, load_config, setup_logging_from_config


class TokenRequestError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code


class FakeTokenClient:
    """Identity provider client that throttles until the third request."""

    def __init__(self, client_id: str):
        self.client_id = client_id
        self.requests = 0

    async def acquire_token_for_client(self, scopes: list[str]) -> dict:
        self.requests += 1
        await asyncio.sleep(0.05)
        if self.requests < 3:
            raise TokenRequestError(429, "too many requests")
        return {"access_token": f"token-for-{self.client_id}", "scopes": scopes}


async def fetch_token(executor: RetryExecutor, client_id: str, scopes: list[str]) -> str:
    client = FakeTokenClient(client_id)
    result = await executor.execute(lambda: client.acquire_token_for_client(scopes), name="acquire_token")
    return result["access_token"]


async def main() -> None:
    project_dir = Path(__file__).parent
    config = load_config(project_dir / "config.yaml")
    setup_logging_from_config(config.data, project_dir=project_dir)

    recorder = RetryRecorder()
    executor = RetryExecutor(
        # Throttling and 5xx are transient; 401/403 (bad secret, missing consent) are not
        is_transient=TransientClassifier(),
        policy=config.retry_policy("token.retry"),
        on_event=recorder,
    )

    token = await fetch_token(executor, "reporting-app", ["https://api.example.com/.default"])
    print(f"Acquired {token} after {len(recorder.events)} retries")


if __name__ == "__main__":
    asyncio.run(main())
