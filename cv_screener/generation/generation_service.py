"""Text generation service: narrow generate(prompt) interface over an OpenAI-compatible chat API."""

import asyncio
import threading
import weakref
from abc import ABC, abstractmethod
from typing import Optional

from openai import AsyncOpenAI

from cv_screener.config import MODEL_NAME, MODEL_TEMPERATURE, OPENAI_API_KEY, OPENAI_BASE_URL
from cv_screener.exceptions import ProviderConfigError
from cv_screener.utils.logger import get_logger

logger = get_logger(__name__)


class TextGenerator(ABC):
    """Abstract generative model: one prompt in, raw text out."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Run a single-turn completion. Returns the raw response text ('' if none)."""
        ...


class OpenAIChatGenerator(TextGenerator):
    """
    Chat completions via the OpenAI SDK (OpenAI, or Groq and other compatible APIs
    through base_url). SDK-level retries are disabled; the batch processor owns retries.
    """

    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        model: str = MODEL_NAME,
        base_url: Optional[str] = OPENAI_BASE_URL,
        temperature: float = MODEL_TEMPERATURE,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url or None
        self._temperature = temperature
        # AsyncOpenAI pools connections per event loop
        self._clients: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, AsyncOpenAI]" = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.Lock()

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> AsyncOpenAI:
        loop = asyncio.get_running_loop()
        with self._lock:
            client = self._clients.get(loop)
            if client is None:
                client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url, max_retries=0)
                self._clients[loop] = client
            return client

    async def generate(self, prompt: str) -> str:
        response = await self._get_client().chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
        )
        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            return ""
        return choice.message.content


_default_generator: Optional[TextGenerator] = None
_generator_lock = threading.RLock()


def get_default_generator() -> TextGenerator:
    """
    Return the process-wide generator, constructing it on first use.
    Raises ProviderConfigError when no API key is configured.
    """
    global _default_generator
    with _generator_lock:
        if _default_generator is None:
            if not OPENAI_API_KEY:
                raise ProviderConfigError(
                    "OPENAI_API_KEY (or GROQ_API_KEY) is not set. Add it to your .env file."
                )
            _default_generator = OpenAIChatGenerator(api_key=OPENAI_API_KEY)
            logger.info("Initialized text generator model=%s", MODEL_NAME)
        return _default_generator


def reset_default_generator() -> None:
    """Drop the cached generator; the next call constructs a fresh one."""
    global _default_generator
    with _generator_lock:
        _default_generator = None
