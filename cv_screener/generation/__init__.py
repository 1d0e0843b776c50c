"""Generation layer: OpenAI-compatible chat model behind a generate(prompt) interface."""

from cv_screener.generation.generation_service import (
    OpenAIChatGenerator,
    TextGenerator,
    get_default_generator,
    reset_default_generator,
)

__all__ = ["TextGenerator", "OpenAIChatGenerator", "get_default_generator", "reset_default_generator"]
