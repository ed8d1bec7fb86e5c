"""
LLM Gateway

Sends one prompt to the hosted Gemini model and turns the textual reply into a
validated pydantic model. There is no retry or self-correction loop: a reply
that is not JSON, or JSON of the wrong shape, is reported as LLMFormatError.
"""

import json
import logging
import re
from functools import lru_cache
from typing import Any, List, Optional, Type, TypeVar, Union

import pydantic
from google import genai
from google.genai import types

from app.core.config import settings
from app.core.exceptions import LLMFormatError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=pydantic.BaseModel)

Contents = Union[str, List[Any]]

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers anywhere in the reply, then trim."""
    cleaned = _JSON_FENCE.sub("", text)
    cleaned = _FENCE.sub("", cleaned)
    return cleaned.strip()


def parse_model_reply(reply: str, schema: Type[T], error_message: Optional[str] = None) -> T:
    """Parse a model reply as JSON and validate it against `schema`."""
    cleaned = strip_code_fences(reply or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("Model reply is not valid JSON: %s", cleaned)
        raise LLMFormatError(error_message) from e

    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        logger.error("Model reply does not match %s: %s", schema.__name__, e)
        raise LLMFormatError(error_message) from e


def image_part(data: bytes, mime_type: str) -> types.Part:
    return types.Part.from_bytes(data=data, mime_type=mime_type)


class LLMGateway:
    """Thin wrapper over the google-genai async client."""

    def __init__(self, client: Optional[genai.Client] = None, model: Optional[str] = None):
        self._client = client
        self.model = model or settings.LLM_MODEL

    @property
    def client(self) -> genai.Client:
        # created lazily so importing the app does not require an API key
        if self._client is None:
            self._client = genai.Client(api_key=settings.GOOGLE_API_KEY or None)
        return self._client

    async def generate(self, contents: Contents, temperature: float) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(temperature=temperature),
        )
        return response.text or ""

    async def generate_structured(
        self,
        contents: Contents,
        schema: Type[T],
        temperature: float,
        error_message: Optional[str] = None,
    ) -> T:
        reply = await self.generate(contents, temperature)
        return parse_model_reply(reply, schema, error_message)


@lru_cache
def get_llm_gateway() -> LLMGateway:
    return LLMGateway()
