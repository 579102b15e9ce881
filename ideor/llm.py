from abc import ABC
import asyncio
import logging
from typing import List, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from ideor.config import (
    DEFAULT_IDEA_COUNT,
    DEFAULT_MODEL,
    DOCUMENT_MAX_OUTPUT_TOKENS,
    DOCUMENT_TEMPERATURE,
    GEMINI_MAX_RETRIES,
    GEMINI_TIMEOUT_SECONDS,
    IDEA_MAX_OUTPUT_TOKENS,
    IDEA_TEMPERATURE,
    IDEA_TOP_P,
    MAX_IDEA_CHARS,
    THINKING_BUDGET_CONFIG,
    clamp_idea_count,
    get_gemini_api_key,
)
from ideor.errors import UpstreamError
from ideor.metrics import GEMINI_DURATION, GEMINI_ERRORS, GEMINI_TOKENS, MetricsRegistry, metrics, timed
from ideor.normalizer import normalize_ideas, parse_ideas_strict
from ideor.prompts.builder import build_prompt
from ideor.prompts.stages import Stage

logger = logging.getLogger(__name__)


def extract_text(response) -> str:
    """Text of the first part of the first candidate, or "" when absent."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return ""
    return getattr(parts[0], "text", None) or ""


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, UpstreamError) and exc.retryable


class GeminiClient(ABC):
    """Base class for Gemini interactions"""
    MAX_TOKENS = 8192

    def __init__(self,
                 model_name: str = DEFAULT_MODEL,
                 temperature: float = 0.7,
                 top_p: Optional[float] = None,
                 max_output_tokens: Optional[int] = None,
                 timeout: float = GEMINI_TIMEOUT_SECONDS,
                 registry: MetricsRegistry = metrics,
                 agent_name: str = ""):
        self.model_name = model_name
        self.temperature = temperature
        self.top_p = top_p
        self.max_output_tokens = max_output_tokens or self.MAX_TOKENS
        self.timeout = timeout
        self.registry = registry
        self.total_token_count = 0
        self.input_token_count = 0
        self.output_token_count = 0
        self.agent_name = agent_name
        self.client = None
        logger.info(f"Initializing {agent_name or 'Gemini client'} with model {model_name}")
        self._setup_provider()

    def _setup_provider(self):
        api_key = get_gemini_api_key()
        if not api_key:
            logger.warning("GEMINI_API_KEY not found. Generation requests will fail.")
            return
        self.client = genai.Client(api_key=api_key)

    def _get_generation_config(self,
                               temperature: Optional[float] = None,
                               json_mode: bool = False) -> types.GenerateContentConfig:
        config = {
            "temperature": temperature if temperature is not None else self.temperature,
            "max_output_tokens": self.max_output_tokens,
        }
        if self.top_p is not None:
            config["top_p"] = self.top_p
        if json_mode:
            config["response_mime_type"] = "application/json"
        if self.model_name in THINKING_BUDGET_CONFIG:
            config["thinking_config"] = types.ThinkingConfig(
                thinking_budget=THINKING_BUDGET_CONFIG[self.model_name]
            )
        return types.GenerateContentConfig(**config)

    def _track_usage(self, response) -> None:
        usage = getattr(response, "usage_metadata", None)
        if usage is None:
            return
        self.total_token_count += usage.total_token_count or 0
        self.input_token_count += usage.prompt_token_count or 0
        self.output_token_count += usage.candidates_token_count or 0
        self.registry.inc(GEMINI_TOKENS, usage.total_token_count or 0, {"agent": self.agent_name})
        logger.debug(f"Total tokens {self.agent_name}: {self.total_token_count} "
                     f"(Input: {self.input_token_count}, Output: {self.output_token_count})")

    def _fail(self, reason: str, error: UpstreamError) -> UpstreamError:
        self.registry.inc(GEMINI_ERRORS, labels={"agent": self.agent_name, "reason": reason})
        logger.warning(f"{self.agent_name} Gemini call failed ({reason}): {error.detail}")
        return error

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(GEMINI_MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True
    )
    async def generate_text(self,
                            prompt: str,
                            temperature: Optional[float] = None,
                            json_mode: bool = False) -> str:
        """Send ``prompt`` to Gemini and return the generated text, retrying transient failures."""
        if self.client is None:
            raise self._fail("config", UpstreamError("GEMINI_API_KEY não configurada", status_code=503))

        config = self._get_generation_config(temperature, json_mode)
        try:
            with timed(self.registry, GEMINI_DURATION, {"agent": self.agent_name}):
                response = await asyncio.wait_for(
                    self.client.aio.models.generate_content(
                        model=self.model_name,
                        contents=prompt,
                        config=config,
                    ),
                    timeout=self.timeout,
                )
        except asyncio.TimeoutError:
            raise self._fail("timeout", UpstreamError(
                f"Gemini não respondeu em {self.timeout:.0f}s", retryable=True, status_code=504))
        except genai_errors.APIError as e:
            code = e.code or 0
            retryable = code == 429 or code >= 500
            raise self._fail(f"http_{code}", UpstreamError(
                f"Gemini retornou {code}: {e.message}", retryable=retryable)) from e
        except httpx.TransportError as e:
            raise self._fail("transport", UpstreamError(f"Erro de transporte: {e}", retryable=True)) from e

        self._track_usage(response)
        text = extract_text(response)
        if not text:
            raise self._fail("empty", UpstreamError("Gemini não retornou conteúdo"))
        return text


class Ideator(GeminiClient):
    """Generates startup idea suggestions"""
    agent_name = "Ideator"

    def __init__(self, **kwargs):
        kwargs.setdefault("temperature", IDEA_TEMPERATURE)
        kwargs.setdefault("top_p", IDEA_TOP_P)
        kwargs.setdefault("max_output_tokens", IDEA_MAX_OUTPUT_TOKENS)
        super().__init__(agent_name=self.agent_name, **kwargs)

    async def suggest_ideas(self, seed_idea: str, segment_description: str,
                            count: int = DEFAULT_IDEA_COUNT) -> List[str]:
        """Exactly ``count`` plain ideas from a seed idea and a segment."""
        count = clamp_idea_count(count)
        prompt = build_prompt(Stage.SEED_SEGMENT, {
            "ideia_semente": seed_idea,
            "segmento": segment_description,
            "quantidade": str(count),
        })
        text = await self.generate_text(prompt, json_mode=True)
        return parse_ideas_strict(text, count, MAX_IDEA_CHARS)

    async def segment_ideas(self, segment_description: str,
                            count: int = DEFAULT_IDEA_COUNT) -> List[str]:
        """Up to ``count`` "title — subtitle" ideas for a segment; short results are accepted."""
        count = clamp_idea_count(count)
        prompt = build_prompt(Stage.SEGMENT, {
            "segmento": segment_description,
            "quantidade": str(count),
        })
        text = await self.generate_text(prompt, json_mode=True)
        return normalize_ideas(text, count, MAX_IDEA_CHARS)

    async def generate_content(self, prompt: str) -> str:
        return await self.generate_text(prompt)


class DocumentWriter(GeminiClient):
    """Writes and refines stage documents"""
    agent_name = "DocumentWriter"

    def __init__(self, **kwargs):
        kwargs.setdefault("temperature", DOCUMENT_TEMPERATURE)
        kwargs.setdefault("max_output_tokens", DOCUMENT_MAX_OUTPUT_TOKENS)
        super().__init__(agent_name=self.agent_name, **kwargs)

    async def write(self, prompt: str) -> str:
        return await self.generate_text(prompt, json_mode=True)
