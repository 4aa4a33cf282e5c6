# aim_ai/engines/gemini_engine.py

import logging
from typing import Iterable, Optional

import requests

from aim_ai.config import AppConfig
from aim_ai.models import ChatMessage, GroundingLink, TutorReply

logger = logging.getLogger(__name__)

APOLOGY_TEXT = "Sorry, I encountered an error connecting to the AI tutor service."
EMPTY_REPLY_TEXT = "I'm having trouble thinking right now. Try again?"
OFFLINE_REPLY_TEXT = (
    "I'm running in offline demo mode, so I can't answer questions yet. "
    "Set GEMINI_API_KEY to enable the AI tutor."
)

SYSTEM_INSTRUCTION = """You are Aim AI, a friendly and encouraging AI tutor for a digital learning platform.
The student is currently viewing the following content: "{context}".

Guidelines:
- Keep answers concise and relevant to the current learning module.
- Use Markdown for code snippets or formatting.
- Be encouraging and supportive.
- If the user asks for a quiz, generate a short multiple-choice question based on the context.
- You have access to **Google Maps** and **Google Search**.
- If the user asks about locations, geography, or real-world places, use the googleMaps tool.
- If the user asks for recent news, facts not in the course, or broader internet knowledge, use the googleSearch tool.
"""


def extract_grounding_links(candidate: dict) -> list[GroundingLink]:
    """
    Turn `groundingMetadata.groundingChunks` into links, keeping provider order.
    A chunk with a maps URI is a map link even if it also carries a web URI.
    """
    chunks = (candidate.get("groundingMetadata") or {}).get("groundingChunks") or []
    links: list[GroundingLink] = []
    for chunk in chunks:
        maps = chunk.get("maps") or {}
        web = chunk.get("web") or {}
        if maps.get("uri"):
            links.append(GroundingLink(
                title=maps.get("title") or "View on Google Maps",
                uri=maps["uri"],
                source="map",
            ))
        elif web.get("uri"):
            links.append(GroundingLink(
                title=web.get("title") or "Web Source",
                uri=web["uri"],
                source="web",
            ))
    return links


class GeminiEngine:
    """
    Gemini tutor client over the REST generateContent endpoint.

    ask(history, context_label, message):
        * sends the prior conversation + a system instruction naming the
          module the student is looking at
        * enables the googleSearch and googleMaps tools
        * returns the reply text and any grounding links

    Never raises: any failure becomes the fixed apology reply.
    """

    temperature = 0.7

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout: float = 60,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("GEMINI_API_KEY missing")
        self.model = model
        self.timeout = timeout
        self.http = session or requests.Session()
        # v1beta endpoint for AI Studio keys
        self.endpoint = (
            f"https://generativelanguage.googleapis.com/v1beta/models/"
            f"{model}:generateContent?key={api_key}"
        )

    # ----------------- public API -----------------

    def ask(self, history: Iterable[ChatMessage], context_label: str, message: str) -> TutorReply:
        body = self._build_body(history, context_label, message)
        try:
            r = self.http.post(self.endpoint, json=body, timeout=self.timeout)
            if r.status_code != 200:
                logger.error("Gemini error %s: %s", r.status_code, r.text[:180])
                return TutorReply(text=APOLOGY_TEXT)
            return self._parse_response(r.json())
        except requests.Timeout:
            logger.error("Gemini request timed out after %ss", self.timeout)
            return TutorReply(text=APOLOGY_TEXT)
        except Exception:
            logger.exception("Gemini API Error")
            return TutorReply(text=APOLOGY_TEXT)

    # ----------------- internal helpers -----------------

    def _build_body(self, history: Iterable[ChatMessage], context_label: str, message: str) -> dict:
        contents = [
            {
                "role": "model" if m.role == "model" else "user",
                "parts": [{"text": m.text}],
            }
            for m in history
        ]
        contents.append({"role": "user", "parts": [{"text": message}]})

        return {
            "systemInstruction": {
                "parts": [{"text": SYSTEM_INSTRUCTION.format(context=context_label)}],
            },
            "contents": contents,
            "tools": [{"googleSearch": {}}, {"googleMaps": {}}],
            "generationConfig": {"temperature": self.temperature},
        }

    def _parse_response(self, data: dict) -> TutorReply:
        candidates = data.get("candidates") or []
        if not candidates:
            return TutorReply(text=EMPTY_REPLY_TEXT)

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))

        return TutorReply(
            text=text or EMPTY_REPLY_TEXT,
            grounding_links=extract_grounding_links(candidate),
        )


class OfflineTutorEngine:
    """Stand-in used when no Gemini key is configured."""

    def ask(self, history: Iterable[ChatMessage], context_label: str, message: str) -> TutorReply:
        return TutorReply(text=OFFLINE_REPLY_TEXT)


def build_tutor_engine(config: AppConfig):
    if not config.ai_configured:
        return OfflineTutorEngine()
    return GeminiEngine(
        api_key=config.gemini_api_key,
        model=config.gemini_model,
        timeout=config.gemini_timeout,
    )
