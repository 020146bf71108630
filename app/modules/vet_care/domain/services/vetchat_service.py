# 📄 File: app/modules/vet_care/domain/services/vetchat_service.py
# 🧭 Purpose (Layman Explanation):
# The AI vet assistant "Dr. Whisker": owners describe a problem or send a photo and get a warm,
# practical answer. The assistant remembers the recent conversation for each chat session.
#
# 🧪 Purpose (Technical Summary):
# Multi-turn chat over Gemini `generateContent`. Conversation history is kept in process
# memory per server-issued session id (owned by one user, expiring when idle, LRU-capped),
# seeded with an opening user line and the persona as the first model turn, and trimmed
# to the seed plus the most recent turns. Gemini failures become fixed
# friendly replies instead of errors.
#
# 🔗 Dependencies:
# - app.shared.infrastructure.external_apis.gemini_client (GeminiClient)
#
# 🔄 Connected Modules / Calls From:
# - vet chat router

import time
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import uuid4

from fastapi import Depends

from app.shared.config.settings import get_settings

from app.shared.core.exceptions import ExternalServiceError
from app.shared.infrastructure.external_apis.api_client import APIQuotaExceededError
from app.shared.infrastructure.external_apis.gemini_client import (
    ContentBlockedError,
    GeminiClient,
    get_gemini_client,
)
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

OPENING_LINE = "Hello, I need help with my pet."
IMAGE_ONLY_PROMPT = "Please examine this image."

PERSONA_PROMPT = """You are Dr. Whisker, a compassionate and soft-spoken veterinarian with 15+ years of experience caring for all kinds of pets.
Your communication style:
- Always begin with a warm greeting, often using the pet's name if mentioned 🐾
- Use gentle, reassuring language that calms worried pet parents ❤️
- Include relevant emojis throughout your responses to convey warmth and care
- Balance professional medical knowledge with approachable explanations
- Share practical, actionable advice pet owners can implement at home when appropriate
- Ask thoughtful follow-up questions when more information would help (about symptoms, duration, pet's behavior)
- For serious concerns, gently recommend an in-person vet visit without causing panic 🏥
- Sometimes share brief, relatable anecdotes about similar cases you've seen to reassure owners
- Express empathy for both the pet's discomfort and the owner's concerns
- End messages with a positive, supportive note and a cute animal emoji that matches their pet type
Important notes:
- If presented with an emergency situation, emphasize the importance of immediate professional care
- If shown an image, analyze it carefully for visual symptoms or concerns
- Use pet-specific emojis when possible (🐶 🐱 🐰 🐦 🦎 etc.)
- Keep responses concise (2-4 paragraphs) but thorough enough to be helpful
- Use simple language but don't talk down to pet owners"""

EMPTY_MESSAGE_REPLY = "Sorry, I need either text or an image to respond. 🐾"
EMPTY_REPLY = (
    "Oh no! 😿 I'm having a little trouble responding right now. Could you please try again? "
    "Your furry friend's health is important to me! 🐾"
)
QUOTA_REPLY = (
    "Oh dear! 😥 It seems I'm quite popular right now and have reached my usage limit. "
    "Please try again later. Your pet's health matters! 🏥"
)
SAFETY_REPLY = (
    "Hmm, I couldn't process that request due to safety filters. 🛡️ Could you try rephrasing your "
    "question or providing a different image? Let's keep our chat safe and helpful! ❤️"
)
FAILURE_REPLY = (
    "Woofs! 🐶 I'm having a little technical hiccup right now. Could you please try again in a moment? "
    "I'm eager to help you and your precious pet! 💕"
)

MAX_HISTORY = 20
SEED_TURNS = 2
RECENT_TURNS = 18


def seed_history() -> List[Dict[str, Any]]:
    return [
        {"role": "user", "parts": [{"text": OPENING_LINE}]},
        {"role": "model", "parts": [{"text": PERSONA_PROMPT}]},
    ]


class ChatSession:
    def __init__(self, user_id: str, touched_at: float):
        self.user_id = user_id
        self.touched_at = touched_at
        self.history = seed_history()


class ChatSessionStore:
    """
    In-memory conversation history keyed by server-issued session ids.

    Sessions belong to the user that opened them, expire after `ttl_seconds` idle
    and the least recently used ones are dropped beyond `max_sessions`.
    """

    def __init__(
        self,
        ttl_seconds: int = 60 * 60 * 24,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self._clock = clock
        self._sessions: "OrderedDict[str, ChatSession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def _purge_expired(self) -> None:
        now = self._clock()
        for session_id, session in list(self._sessions.items()):
            if now - session.touched_at > self.ttl_seconds:
                self._sessions.pop(session_id, None)
            else:
                break

    def resolve(self, user_id: str, session_id: Optional[str]) -> str:
        """
        The caller's live session for `session_id`, or a freshly issued one.

        Ids the store never issued, expired ids and other users' ids all get a new session.
        """
        self._purge_expired()
        session = self._sessions.get(session_id) if session_id else None
        if session is not None and session.user_id == user_id:
            session.touched_at = self._clock()
            self._sessions.move_to_end(session_id)
            return session_id

        new_id = str(uuid4())
        logger.debug(f"Creating chat history for session {new_id}")
        self._sessions[new_id] = ChatSession(user_id, self._clock())
        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)
        return new_id

    def append_exchange(self, session_id: str, user_parts: List[Dict[str, Any]], reply: str) -> None:
        """Record one exchange; long histories keep the seed and the latest turns."""
        session = self._sessions.get(session_id)
        if session is None:
            logger.info(f"Chat session {session_id} expired before the reply was stored")
            return

        history = session.history
        history.append({"role": "user", "parts": user_parts})
        history.append({"role": "model", "parts": [{"text": reply}]})
        if len(history) > MAX_HISTORY:
            session.history = history[:SEED_TURNS] + history[-RECENT_TURNS:]

    def history(self, session_id: str) -> List[Dict[str, Any]]:
        session = self._sessions.get(session_id)
        return list(session.history) if session else []

    def clear(self) -> None:
        self._sessions.clear()


_settings = get_settings()
chat_sessions = ChatSessionStore(
    ttl_seconds=_settings.VETCHAT_SESSION_TTL,
    max_sessions=_settings.VETCHAT_MAX_SESSIONS,
)


def get_chat_sessions() -> ChatSessionStore:
    return chat_sessions


def build_user_parts(text: Optional[str], image: Optional[Dict[str, str]]) -> List[Dict[str, Any]]:
    """Gemini parts for one user turn; an image alone gets a short prompt."""
    parts: List[Dict[str, Any]] = []
    if text and text.strip():
        parts.append({"text": text})
    if image:
        if not parts:
            parts.append({"text": IMAGE_ONLY_PROMPT})
        parts.append({"inlineData": {"data": image["base64"], "mimeType": image["mimeType"]}})
    return parts


class VetChatService:
    """Domain service for the AI vet assistant."""

    def __init__(
        self,
        gemini: GeminiClient = Depends(get_gemini_client),
        sessions: ChatSessionStore = Depends(get_chat_sessions),
    ):
        self.gemini = gemini
        self.sessions = sessions

    async def reply(
        self,
        user_id: str,
        session_id: Optional[str],
        text: Optional[str],
        image: Optional[Dict[str, str]],
    ) -> Tuple[str, str]:
        """
        Answer one owner message within a chat session.

        Returns the session id actually used (new when `session_id` is unknown, expired
        or someone else's) and the reply. Never raises for Gemini failures; the owner
        gets a friendly fixed reply and the history is left unchanged.
        """
        session_id = self.sessions.resolve(user_id, session_id)
        user_parts = build_user_parts(text, image)
        if not user_parts:
            return session_id, EMPTY_MESSAGE_REPLY

        contents = self.sessions.history(session_id) + [{"role": "user", "parts": user_parts}]

        try:
            reply = await self.gemini.generate(contents)
        except APIQuotaExceededError:
            logger.warning(f"Gemini quota exceeded for session {session_id}")
            return session_id, QUOTA_REPLY
        except ContentBlockedError as e:
            logger.warning(f"Gemini blocked content for session {session_id}: {e.message}")
            return session_id, SAFETY_REPLY
        except ExternalServiceError as e:
            logger.error(f"Gemini request failed for session {session_id}: {e.message}")
            if "quota" in e.message.lower():
                return session_id, QUOTA_REPLY
            return session_id, FAILURE_REPLY

        if not reply:
            logger.error(f"Gemini returned an empty reply for session {session_id}")
            return session_id, EMPTY_REPLY

        self.sessions.append_exchange(session_id, user_parts, reply)
        return session_id, reply
