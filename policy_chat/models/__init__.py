"""
Domain schemas shared across layers.
"""

from policy_chat.models.chat import (
    ChatMessage,
    GenerationChunk,
    GenerationRequest,
    SendMessageRequest,
)
from policy_chat.models.conversation import (
    ConversationDetail,
    ConversationSummary,
    CreateConversationRequest,
    MessageResponse,
    UpdateConversationRequest,
)
from policy_chat.models.policy import CoverageSnapshot, CoverageType, PolicyContextSnapshot
from policy_chat.models.streaming import StreamEvent, StreamEventType

__all__ = [
    "ChatMessage",
    "ConversationDetail",
    "ConversationSummary",
    "CoverageSnapshot",
    "CoverageType",
    "CreateConversationRequest",
    "GenerationChunk",
    "GenerationRequest",
    "MessageResponse",
    "PolicyContextSnapshot",
    "SendMessageRequest",
    "StreamEvent",
    "StreamEventType",
    "UpdateConversationRequest",
]
