# schemafs/core/gemini_client.py
from __future__ import annotations
import logging
import time
from dataclasses import dataclass

import google.generativeai as genai
from google.api_core.exceptions import ResourceExhausted

from schemafs.core.errors import ClassificationError

logger = logging.getLogger(__name__)


@dataclass
class GeminiClient:
    api_key: str
    model: str = "gemini-1.5-pro"
    # Used once when the primary is rate limited or quota-exhausted.
    fallback_model: str = "gemini-1.5-flash"
    temperature: float = 0.0
    available: bool = True

    def __post_init__(self) -> None:
        genai.configure(api_key=self.api_key)

    def _generate(self, model_name: str, system: str, prompt: str):
        model = genai.GenerativeModel(model_name, system_instruction=system)
        return model.generate_content(
            prompt,
            generation_config={"temperature": self.temperature},
        )

    def _try_generate(self, system: str, prompt: str):
        """Try primary model; on quota (429) fall back once to fallback model."""
        has_fallback = bool(self.fallback_model) and self.fallback_model != self.model
        try:
            return self._generate(self.model, system, prompt), self.model
        except ResourceExhausted:
            if not has_fallback:
                raise
            logger.warning("Model %s quota exhausted; retrying on %s", self.model, self.fallback_model)
            return self._generate(self.fallback_model, system, prompt), self.fallback_model
        except Exception as e:
            msg = str(e).lower()
            if ("429" in msg or "quota" in msg or "rate" in msg) and has_fallback:
                logger.warning("Model %s rate limited; retrying on %s", self.model, self.fallback_model)
                return self._generate(self.fallback_model, system, prompt), self.fallback_model
            raise

    def complete(self, system: str, prompt: str) -> str:
        logger.info(
            "LLM call starting: model=%s system_len=%d prompt_len=%d",
            self.model, len(system), len(prompt),
        )
        logger.debug("LLM system prompt: %s", system[:500])
        logger.debug("LLM user prompt: %s", prompt)
        t0 = time.perf_counter()
        try:
            resp, used = self._try_generate(system, prompt)
        except Exception as e:
            logger.warning("LLM call failed: %s", e)
            raise ClassificationError(f"Language model call failed: {e}") from e

        try:
            text = resp.text
        except ValueError:
            # raised when the candidate was blocked or carries no text part
            text = None
        if not text:
            try:
                text = resp.candidates[0].content.parts[0].text  # type: ignore[attr-defined]
            except (AttributeError, IndexError) as e:
                raise ClassificationError("No completion returned by the language model") from e
        dt = int((time.perf_counter() - t0) * 1000)
        logger.info("LLM call finished: model=%s duration_ms=%d response_len=%d", used, dt, len(text))
        return text
