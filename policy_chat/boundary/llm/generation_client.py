"""
Generation client.

Streams an answer from a LangChain chat model (Gemini by default) and
reports token usage once the stream ends.

Dependencies: langchain_core, langchain_google_genai, policy_chat.configs
System role: Token streaming from the language model
"""

import logging
from contextlib import aclosing
from typing import AsyncGenerator

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from policy_chat.configs import LLMSettings
from policy_chat.core.exceptions import GenerationError
from policy_chat.models.chat import ChatMessage, GenerationChunk, GenerationRequest

logger = logging.getLogger(__name__)


def to_langchain_messages(system_prompt: str, messages: list[ChatMessage]) -> list[BaseMessage]:
    """Convert role-tagged messages into LangChain message objects."""
    converted: list[BaseMessage] = [SystemMessage(content=system_prompt)]
    for message in messages:
        if message.role == "assistant":
            converted.append(AIMessage(content=message.content))
        else:
            converted.append(HumanMessage(content=message.content))
    return converted


def chunk_text(content) -> str:
    """Flatten chunk content, which providers return as a str or a list of parts."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content else ""


class GenerationClient:
    """
    Streaming chat completion client.

    An injected model is used as configured; the default Gemini model is
    built per max_tokens value.
    """

    def __init__(
        self,
        model: BaseChatModel | None = None,
        settings: LLMSettings | None = None,
    ) -> None:
        self.settings = settings or LLMSettings()
        self._model = model
        self._default_models: dict[int, BaseChatModel] = {}

    def _model_for(self, max_tokens: int) -> BaseChatModel:
        if self._model is not None:
            return self._model
        if max_tokens not in self._default_models:
            kwargs = {}
            if self.settings.google_api_key:
                kwargs["google_api_key"] = self.settings.google_api_key
            self._default_models[max_tokens] = ChatGoogleGenerativeAI(
                model=self.settings.chat_model,
                temperature=self.settings.temperature,
                max_output_tokens=max_tokens,
                **kwargs,
            )
        return self._default_models[max_tokens]

    async def stream_chat(self, request: GenerationRequest) -> AsyncGenerator[GenerationChunk, None]:
        """
        Stream a completion.

        Yields one GenerationChunk per text fragment, then a final chunk with
        the summed input/output token counts when the provider reported usage.

        Args:
            request: System prompt, ordered messages and token cap

        Yields:
            GenerationChunk: Text fragments followed by usage

        Raises:
            GenerationError: If the provider stream fails
        """
        model = self._model_for(request.max_tokens)
        messages = to_langchain_messages(request.system_prompt, request.messages)

        input_tokens: int | None = None
        output_tokens: int | None = None
        fragments = 0

        try:
            async with aclosing(model.astream(messages)) as stream:
                async for chunk in stream:
                    usage = getattr(chunk, "usage_metadata", None)
                    if usage:
                        # Streamed usage is reported as per-chunk deltas
                        input_tokens = (input_tokens or 0) + usage.get("input_tokens", 0)
                        output_tokens = (output_tokens or 0) + usage.get("output_tokens", 0)

                    text = chunk_text(chunk.content)
                    if text:
                        fragments += 1
                        yield GenerationChunk(text=text)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:stream_chat - Stream failed after {fragments} fragments: "
                f"{type(e).__name__}: {e}"
            )
            raise GenerationError(f"Generation failed: {type(e).__name__}: {e}") from e

        logger.info(
            f"{__name__}:stream_chat - Stream done: fragments={fragments}, "
            f"input_tokens={input_tokens}, output_tokens={output_tokens}"
        )
        if input_tokens is not None or output_tokens is not None:
            yield GenerationChunk(input_tokens=input_tokens, output_tokens=output_tokens)
