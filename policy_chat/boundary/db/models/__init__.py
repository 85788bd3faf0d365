"""
ORM models. Importing this package registers every table on Base.metadata.
"""

from policy_chat.boundary.db.models.conversation_model import ConversationModel
from policy_chat.boundary.db.models.document_model import DocumentChunkModel, DocumentModel
from policy_chat.boundary.db.models.message_model import MessageModel
from policy_chat.boundary.db.models.policy_model import CoverageModel, PolicyModel

__all__ = [
    "ConversationModel",
    "CoverageModel",
    "DocumentChunkModel",
    "DocumentModel",
    "MessageModel",
    "PolicyModel",
]
