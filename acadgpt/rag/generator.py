"""
Generator - Produces answers using an Ollama LLM.

This module handles the generation part of the pipeline:
1. Takes a system instruction and an evidence + question prompt
2. Sends both to Ollama
3. Returns the completion text

The call has no timeout and no retry. Any failure is raised as
GenerationError and ends the request.
"""

import logging

import ollama

from acadgpt.config import (
    GENERATION_TEMPERATURE,
    NOT_IN_TEXTBOOK_TEMPLATE,
    OLLAMA_BASE_URL,
    OLLAMA_MODEL,
    QUESTION_PROMPT_TEMPLATE,
    SYSTEM_PROMPT_TEMPLATE,
)
from acadgpt.errors import GenerationError

logger = logging.getLogger(__name__)


def build_system_prompt(subject: str | None, file_names: list[str]) -> str:
    subject_label = subject or "the selected subject"
    return SYSTEM_PROMPT_TEMPLATE.format(
        refusal=NOT_IN_TEXTBOOK_TEMPLATE.format(subject=subject_label),
        files=", ".join(file_names) or "none",
    )


def build_question_prompt(context: str, question: str, subject: str | None) -> str:
    return QUESTION_PROMPT_TEMPLATE.format(
        context=context,
        question=question,
        subject=subject or "the selected subject",
    )


class Generator:
    """
    Generates text completions using an Ollama model.

    Example:
        generator = Generator()
        answer = generator.complete(
            system="You are an academic assistant.",
            prompt="CONTEXT: ...\\n\\nQUESTION: What is paging?",
        )
    """

    def __init__(
        self,
        model: str | None = None,
        host: str | None = None,
        temperature: float | None = None,
        client: ollama.Client | None = None,
    ):
        """
        Initialize the generator.

        Args:
            model: Ollama model name (uses config default if not provided)
            host: Ollama server URL
            temperature: Sampling temperature
            client: Preconfigured Ollama client
        """
        self.model = model or OLLAMA_MODEL
        self.temperature = GENERATION_TEMPERATURE if temperature is None else temperature
        self.client = client or ollama.Client(host=host or OLLAMA_BASE_URL)

    def check_available(self) -> bool:
        """
        Check if Ollama is running and the model is available.

        Returns:
            True if Ollama is ready, False otherwise
        """
        try:
            response = self.client.list()
        except Exception as e:
            logger.warning("Cannot connect to Ollama: %s (is `ollama serve` running?)", e)
            return False

        # Handle different response formats (dict or object)
        if hasattr(response, "models"):
            models_list = response.models
        elif isinstance(response, dict):
            models_list = response.get("models", [])
        else:
            models_list = []

        available_models = []
        for m in models_list:
            if hasattr(m, "model"):
                name = m.model
            elif isinstance(m, dict):
                name = m.get("name") or m.get("model", "")
            else:
                continue
            if name:
                available_models.append(name.split(":")[0])

        if available_models and self.model.split(":")[0] not in available_models:
            logger.warning(
                "Model '%s' not found. Available: %s. Run: ollama pull %s",
                self.model, available_models, self.model,
            )
            return False

        return True

    def complete(self, system: str, prompt: str) -> str:
        """
        Generate a complete response (non-streaming).

        Raises:
            GenerationError: If the Ollama call fails
        """
        try:
            response = self.client.chat(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                options={"temperature": self.temperature},
            )
        except Exception as e:
            raise GenerationError(f"Ollama chat failed: {e}") from e

        return response["message"]["content"] or ""
