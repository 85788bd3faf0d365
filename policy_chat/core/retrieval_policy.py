"""
Retrieval decision policy.

Decides whether a user message warrants a document search. Greetings,
acknowledgments and short follow-ups inside an ongoing conversation are
answered from conversation context alone.

Dependencies: None (pure domain logic)
System role: Gate in front of embedding and vector search
"""

SKIP_RETRIEVAL_PHRASES: tuple[str, ...] = (
    "hi", "hello", "hey", "thanks", "thank you", "ok", "okay", "got it",
    "understood", "great", "perfect", "awesome", "cool", "bye", "goodbye",
    "yes", "no", "sure", "yep", "nope", "alright", "sounds good",
)

FOLLOW_UP_PREFIXES: tuple[str, ...] = (
    "what about", "and the", "how about", "what else", "tell me more",
    "explain", "why", "how", "can you", "could you", "please",
)

SHORT_FOLLOW_UP_MAX_LENGTH = 25

_SKIP_FORMS: frozenset[str] = frozenset(
    form
    for phrase in SKIP_RETRIEVAL_PHRASES
    for form in (phrase, f"{phrase}.", f"{phrase}!")
)


def should_retrieve(message: str, prior_turn_count: int) -> bool:
    """
    Decide whether document retrieval should run for this message.

    Args:
        message: Raw user message
        prior_turn_count: Number of messages already in the conversation

    Returns:
        bool: False for greetings/acknowledgments and short follow-ups, else True
    """
    normalized = message.strip().lower()

    if normalized in _SKIP_FORMS:
        return False

    if (
        prior_turn_count > 0
        and len(normalized) < SHORT_FOLLOW_UP_MAX_LENGTH
        and normalized.startswith(FOLLOW_UP_PREFIXES)
    ):
        return False

    return True
