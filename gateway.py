"""
Delegation gateway: a single chat-completions call whose reply must match a
pydantic contract.

Every way the call can go wrong is reported as a DelegationFailure so the
generators can fall back to their local algorithms.
"""
import json
import logging
from typing import Callable, Optional, Type, TypeVar

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

import config
from errors import DelegationFailure, FailureReason

logger = logging.getLogger(__name__)

ContractT = TypeVar("ContractT", bound=BaseModel)


def extract_json_text(content: str) -> str:
    """Strip markdown code fences the model sometimes wraps around JSON."""
    json_str = content.strip()
    if "```json" in json_str:
        json_str = json_str.split("```json")[1].split("```")[0]
    elif "```" in json_str:
        json_str = json_str.split("```")[1].split("```")[0]
    return json_str.strip()


class DelegationGateway:
    """Talks to the OpenAI chat completions endpoint on behalf of the generators."""

    def __init__(
        self,
        model: str = config.MODEL_NAME,
        timeout: float = config.OPENAI_TIMEOUT,
        client_factory: Callable[..., AsyncOpenAI] = AsyncOpenAI,
    ) -> None:
        self.model = model
        self.timeout = timeout
        self.client_factory = client_factory

    async def request(
        self,
        system_prompt: str,
        user_prompt: str,
        contract: Type[ContractT],
        credential: Optional[str],
        max_tokens: int = 1000,
    ) -> ContractT:
        """Make one attempt and return the validated contract object.

        Raises DelegationFailure; never retries.
        """
        if not credential:
            raise DelegationFailure(FailureReason.MISSING_CREDENTIAL)

        client = self.client_factory(api_key=credential, timeout=self.timeout, max_retries=0)
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
            )
        except openai.APIConnectionError as e:
            raise DelegationFailure(FailureReason.TRANSPORT, str(e)) from e
        except openai.APIStatusError as e:
            raise DelegationFailure(FailureReason.HTTP_STATUS, f"API Error: {e.status_code}") from e
        except openai.OpenAIError as e:
            raise DelegationFailure(FailureReason.UNPARSABLE_BODY, str(e)) from e
        finally:
            await client.close()

        return self.parse_content(_message_content(response), contract)

    @staticmethod
    def parse_content(content: Optional[str], contract: Type[ContractT]) -> ContractT:
        """Validate the assistant message text against the contract."""
        if not content:
            raise DelegationFailure(FailureReason.UNPARSABLE_BODY, "No valid response from AI")

        json_str = extract_json_text(content)
        try:
            parsed = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise DelegationFailure(FailureReason.UNPARSABLE_BODY, str(e)) from e
        if not isinstance(parsed, dict):
            raise DelegationFailure(FailureReason.UNPARSABLE_BODY, "expected a JSON object")

        try:
            return contract.model_validate_json(json_str, strict=True)
        except ValidationError as e:
            logger.debug("Contract %s rejected body: %s", contract.__name__, json_str)
            raise DelegationFailure(FailureReason.SCHEMA_MISMATCH, str(e)) from e


def _message_content(response) -> Optional[str]:
    choices = getattr(response, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)
