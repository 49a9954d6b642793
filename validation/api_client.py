"""
API client for payload verification.

Runs requests against a FastAPI app in-process through TestClient and
decodes the JSON body so responses can be checked with
`validation.comparator` and `validation.mutations`.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.logger import UnifiedLogger


@dataclass
class APIResponse:
    """Wrapper for API response data."""

    status_code: int
    data: Any = None
    text: str = ""

    def json(self) -> Any:
        return self.data if self.data is not None else {}


class APIClient:
    """In-process client for payload-returning endpoints."""

    def __init__(self, app: FastAPI, raise_server_exceptions: bool = True):
        self.logger = UnifiedLogger(tag="api-client")
        self._client = TestClient(app, raise_server_exceptions=raise_server_exceptions)

        # Track interactions for artifact logging
        self.api_calls: list[Dict[str, Any]] = []

    def call_api(
        self,
        endpoint: str,
        method: str = "POST",
        data: Optional[dict] = None,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> APIResponse:
        """Call an endpoint and decode its JSON body."""
        method = method.upper()
        interaction = {
            "timestamp": datetime.now().isoformat(),
            "method": method,
            "endpoint": endpoint,
            "data": data,
            "params": params,
        }

        try:
            response = self._client.request(
                method=method,
                url=endpoint,
                json=data,
                params=params,
                headers=headers,
            )
        finally:
            # Even if request blows up we record the attempt
            self.api_calls.append(interaction)

        text = response.text
        try:
            payload = response.json()
        except ValueError:
            payload = None

        interaction["status_code"] = response.status_code
        if payload is not None:
            interaction["response"] = payload
        else:
            interaction["response_text"] = text

        self.logger.debug("API call", method=method, endpoint=endpoint, status_code=response.status_code)
        return APIResponse(status_code=response.status_code, data=payload, text=text)

    def mutate(self, endpoint: str, data: Optional[dict] = None, **kwargs: Any) -> Dict[str, Any]:
        """POST to a mutation endpoint and return the decoded payload."""
        response = self.call_api(endpoint, method="POST", data=data, **kwargs)
        if response.status_code != 200:
            raise AssertionError(
                f"Mutation {endpoint} failed with status {response.status_code}: {response.text}"
            )
        return response.json()

    def save_interaction_log(self, log_file: Path):
        """Save all API interactions to a single log file."""
        with open(log_file, "w") as handle:
            handle.write("# API Interactions Log\n\n")

            for call in self.api_calls:
                status = call.get("status_code", "n/a")
                handle.write(f"**{call['timestamp']}**: {call['method']} {call['endpoint']} → {status}\n")
                if call.get("params"):
                    handle.write(f"  Params: {json.dumps(call['params'], indent=2)}\n")
                if call.get("data"):
                    handle.write(f"  Payload: {json.dumps(call['data'], indent=2)}\n")
                if call.get("response"):
                    handle.write(f"  Response: {json.dumps(call['response'], indent=2)}\n")
                elif call.get("response_text"):
                    handle.write(f"  Response Text: {call['response_text']}\n")
                handle.write("\n")

    def close(self):
        """Release the underlying TestClient."""
        self._client.close()
