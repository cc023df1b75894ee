import logging
import time
from dataclasses import dataclass

import anthropic

from ..config import GENERATION_TIMEOUT_SECS, MAX_OUTPUT_TOKENS, MODEL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation call: either raw text or a failure reason."""

    text: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GenerationClient:
    """Sends a built prompt to the Messages API and returns the raw game source.

    Each call is a single request; retries are left to the caller. Every exit
    path produces a ``GenerationResult``, nothing is raised.
    """

    def __init__(
        self,
        model: str = MODEL,
        max_tokens: int = MAX_OUTPUT_TOKENS,
        timeout: float = GENERATION_TIMEOUT_SECS,
        client=None,
    ) -> None:
        self._model = model
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._client = client

    def _get_client(self):
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(timeout=self._timeout, max_retries=0)
        return self._client

    async def generate(self, prompt: str) -> GenerationResult:
        t0 = time.time()
        try:
            response = await self._get_client().messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APITimeoutError:
            logger.warning("Generation timed out after %.1fs", time.time() - t0)
            return GenerationResult(error="The request to the generation service timed out")
        except anthropic.APIConnectionError as e:
            logger.warning("Generation service unreachable: %s", e)
            return GenerationResult(error=f"Could not reach the generation service ({e})")
        except anthropic.APIStatusError as e:
            logger.warning("Generation service returned %s: %s", e.status_code, e.message)
            return GenerationResult(
                error=f"The generation service returned an error ({e.status_code}): {e.message}"
            )
        except anthropic.AnthropicError as e:
            # Raised by the SDK itself, e.g. when no API key is configured
            logger.error("Generation client error: %s", e)
            return GenerationResult(error=str(e))
        except Exception as e:
            logger.exception("Unexpected error calling the generation service")
            return GenerationResult(error=str(e) or type(e).__name__)

        elapsed_ms = round((time.time() - t0) * 1000)
        text = extract_text(response)
        if text is None:
            logger.warning("Malformed generation payload after %dms", elapsed_ms)
            return GenerationResult(error="The generation service returned a malformed response")
        if not text:
            logger.warning("Generation returned no text after %dms", elapsed_ms)
            return GenerationResult(error="The generation service returned no game code")

        logger.info("Generated %d chars in %dms", len(text), elapsed_ms)
        return GenerationResult(text=text)

    async def close(self) -> None:
        if self._client is not None and hasattr(self._client, "close"):
            await self._client.close()


def extract_text(response) -> str | None:
    """Join the text blocks of a Messages response in order.

    Returns None when the payload has no content list at all.
    """
    content = getattr(response, "content", None)
    if not isinstance(content, list):
        return None
    parts = []
    for block in content:
        if getattr(block, "type", None) != "text":
            continue
        text = getattr(block, "text", None)
        if isinstance(text, str):
            parts.append(text)
    return "\n".join(parts).strip()
