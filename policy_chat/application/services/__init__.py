"""
Use-case services.
"""

from policy_chat.application.services.chat_service import ChatService
from policy_chat.application.services.conversation_service import ConversationService
from policy_chat.application.services.policy_context_service import PolicyContextService
from policy_chat.application.services.search_service import SemanticSearchService

__all__ = [
    "ChatService",
    "ConversationService",
    "PolicyContextService",
    "SemanticSearchService",
]
