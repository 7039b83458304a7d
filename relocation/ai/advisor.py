import json
import logging
from typing import Any, Dict, Optional

import openai

from .config import AdvisoryConfig

logger = logging.getLogger(__name__)


class AdvisoryUnavailable(Exception):
    """The advisor could not produce a usable JSON answer."""


class AdvisoryClient:
    """
    Thin wrapper around the OpenAI chat completions API.

    Explicitly constructed and injected; holds no per-request state.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = AdvisoryConfig.model,
        timeout: float = AdvisoryConfig.timeout,
        temperature: float = AdvisoryConfig.temperature,
        max_tokens: int = AdvisoryConfig.max_tokens,
        client=None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens

        self.client = client
        if self.client is None and self.api_key:
            self.client = openai.OpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0,
            )

    @classmethod
    def from_config(cls, config: AdvisoryConfig) -> "AdvisoryClient":
        return cls(
            api_key=config.api_key if config.enabled else None,
            model=config.model,
            timeout=config.timeout,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    @property
    def configured(self) -> bool:
        return self.client is not None

    def complete_json(self, system_prompt: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Send one system + user exchange and decode the JSON object answer.

        Args:
            system_prompt: Instructions for the model
            payload: Serialized as the user message

        Returns:
            Decoded JSON object

        Raises:
            AdvisoryUnavailable: not configured, transport or status failure,
                timeout, empty or non-JSON body
        """
        if not self.configured:
            raise AdvisoryUnavailable("advisory not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": json.dumps(payload, indent=2)},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            raise AdvisoryUnavailable(f"advisory request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise AdvisoryUnavailable("advisory returned an empty body")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise AdvisoryUnavailable(f"advisory returned invalid JSON: {e}") from e

        if not isinstance(parsed, dict):
            raise AdvisoryUnavailable("advisory JSON is not an object")

        logger.debug(f"Advisory answered with keys {sorted(parsed)}")
        return parsed
