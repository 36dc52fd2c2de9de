"""Gemini generateContent Client"""

import http.client
import json
import socket
import urllib.error
import urllib.parse
import urllib.request

from gemini_commit.config import DEFAULT_API_BASE, DEFAULT_MODEL
from gemini_commit.llm.base import LLMError, LLMResponse, extract_commit_message
from gemini_commit.llm.models import GenerationResponse, ResponseShapeError


class GeminiClient:
    """Single-shot client for the Gemini REST API. No retries."""

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        api_base: str | None = None,
        timeout: float | None = None,
    ):
        if not api_key:
            raise LLMError("No API key given to the Gemini client")
        self.api_key = api_key
        self.model = model or DEFAULT_MODEL
        self.api_base = (api_base or DEFAULT_API_BASE).rstrip('/')
        self.timeout = timeout

    @property
    def name(self) -> str:
        return f"Gemini ({self.model})"

    def _endpoint(self) -> str:
        # The key rides in the query string, so this URL must never be printed.
        model = urllib.parse.quote(self.model, safe='')
        query = urllib.parse.urlencode({"key": self.api_key})
        return f"{self.api_base}/models/{model}:generateContent?{query}"

    @staticmethod
    def build_payload(prompt: str) -> dict:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    def _call_api(self, prompt: str) -> dict:
        """POST the prompt and decode the JSON body. HTTP errors propagate as-is."""
        data = json.dumps(self.build_payload(prompt)).encode('utf-8')
        req = urllib.request.Request(
            self._endpoint(),
            data=data,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        with urllib.request.urlopen(req, **kwargs) as response:
            return json.loads(response.read().decode('utf-8'))

    @staticmethod
    def _describe_http_error(e: urllib.error.HTTPError) -> str:
        """Pull error.message out of an error body, falling back to the status reason."""
        try:
            body = json.loads(e.read().decode('utf-8'))
            message = body["error"]["message"]
            if isinstance(message, str) and message:
                return message
        except (OSError, ValueError, KeyError, TypeError, AttributeError):
            pass
        return str(e.reason)

    def _timeout_message(self) -> str:
        if self.timeout is None:
            return "Request to Gemini timed out"
        return f"Request to Gemini timed out after {self.timeout}s"

    def generate(self, prompt: str) -> LLMResponse:
        try:
            result = self._call_api(prompt)
        except urllib.error.HTTPError as e:
            detail = self._describe_http_error(e)
            if e.code in (401, 403):
                raise LLMError(f"Gemini rejected the API key ({e.code}): {detail}")
            if e.code == 404:
                raise LLMError(f"Model '{self.model}' not found ({e.code}): {detail}")
            raise LLMError(f"Gemini API error ({e.code}): {detail}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise LLMError(self._timeout_message())
            raise LLMError(f"Gemini request failed: {e.reason}")
        except socket.timeout:
            raise LLMError(self._timeout_message())
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise LLMError("Invalid response from Gemini: body is not JSON")
        except http.client.HTTPException as e:
            raise LLMError(f"Incomplete response from Gemini: {e}")
        except OSError as e:
            raise LLMError(f"Connection to Gemini lost: {e}")

        try:
            response = GenerationResponse.from_dict(result)
        except ResponseShapeError as e:
            raise LLMError(f"Unexpected response from Gemini: {e}")

        message = extract_commit_message(response)
        first = response.candidates[0] if response.candidates else None
        return LLMResponse(
            content=message,
            model=self.model,
            tokens_used=response.total_tokens,
            finish_reason=first.finish_reason if first else None,
        )
