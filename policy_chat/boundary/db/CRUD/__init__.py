"""
CRUD singletons for the chat store.
"""

from policy_chat.boundary.db.CRUD.conversation_crud import ConversationCRUD, conversation_crud
from policy_chat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from policy_chat.boundary.db.CRUD.policy_crud import PolicyCRUD, policy_crud

__all__ = [
    "ConversationCRUD",
    "MessageCRUD",
    "PolicyCRUD",
    "conversation_crud",
    "message_crud",
    "policy_crud",
]
