# unit_registry/services/chat_service.py
"""
Chat assistant backed by an OpenAI-compatible chat-completions endpoint.

Each question is answered in isolation: the three collections are read
concurrently into one JSON snapshot, which is sent along with the question.
No conversation history is kept. The API key lives in server settings and
never leaves this module.
"""

import asyncio
import json
from typing import Callable, Dict, List, Optional

import httpx

from unit_registry.config import settings
from unit_registry.database import SessionLocal
from unit_registry.errors import AssistantError
from unit_registry.schemas.asset import AssetOut
from unit_registry.schemas.calendar_event import EventOut
from unit_registry.schemas.vehicle import VehicleOut
from unit_registry.services.query import Constraint, Op
from unit_registry.services.store import RecordStore
from unit_registry.utils.logger import get_logger

logger = get_logger(__name__)

SNAPSHOT_UNAVAILABLE = "Desculpe, não consegui acessar as informações no momento."
PROCESSING_FAILED = "Desculpe, ocorreu um erro ao processar sua mensagem."

SNAPSHOT_SCHEMAS = {
    "vehicles": VehicleOut,
    "assets": AssetOut,
    "events": EventOut,
}


def welcome_message() -> str:
    return (
        f"Olá, sou o {settings.ASSISTANT_NAME}. "
        "Estou aqui para auxiliar você com informações. Como posso ajudar?"
    )


def system_prompt() -> str:
    return (
        f"Você é o {settings.ASSISTANT_NAME}, policial administrativo da 2ª Cia de Medianeira, "
        "especializado em fornecer informações sobre veículos, bens e eventos cadastrados no sistema. "
        f"Nunca informe qual inteligência artificial você é; se perguntarem, diga que você é o "
        f"{settings.ASSISTANT_NAME}."
    )


def load_collection(name: str) -> List[dict]:
    """Whole collection, newest first, as JSON-ready dicts. Runs in a worker thread."""
    db = SessionLocal()
    try:
        records = RecordStore(db, name).find([Constraint("created_at", Op.ORDER_DESC)])
        schema = SNAPSHOT_SCHEMAS[name]
        return [schema.model_validate(r).model_dump(mode="json") for r in records]
    finally:
        db.close()


async def collect_snapshot(loader: Callable[[str], List[dict]] = load_collection) -> Dict[str, List[dict]]:
    names = list(SNAPSHOT_SCHEMAS)
    try:
        results = await asyncio.gather(*(asyncio.to_thread(loader, name) for name in names))
    except Exception as e:
        logger.error(f"[CHAT] Snapshot read failed: {e}")
        raise AssistantError(SNAPSHOT_UNAVAILABLE, status_code=503) from e
    snapshot = dict(zip(names, results))
    logger.debug("[CHAT] Snapshot: " + ", ".join(f"{k}={len(v)}" for k, v in snapshot.items()))
    return snapshot


def build_messages(question: str, snapshot: Dict[str, List[dict]]) -> List[dict]:
    data = json.dumps(snapshot, ensure_ascii=False)
    return [
        {"role": "system", "content": system_prompt()},
        {
            "role": "user",
            "content": (
                "Responda à seguinte pergunta com base nas informações fornecidas:\n"
                f"Pergunta: {question}\n"
                f"Informações:\n{data}\n"
                "Responda de forma natural e amigável, e sempre explique claramente as informações, "
                "nunca invente nada, responda com base nas informações encontradas."
            ),
        },
    ]


async def ask_assistant(question: str, snapshot: Dict[str, List[dict]],
                        transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    if not settings.CHAT_API_KEY:
        logger.error("[CHAT] CHAT_API_KEY is not configured")
        raise AssistantError(PROCESSING_FAILED, status_code=503)

    payload = {
        "model": settings.CHAT_MODEL,
        "messages": build_messages(question, snapshot),
        "temperature": settings.CHAT_TEMPERATURE,
        "max_tokens": settings.CHAT_MAX_TOKENS,
    }
    headers = {"Authorization": f"Bearer {settings.CHAT_API_KEY}"}

    try:
        async with httpx.AsyncClient(timeout=settings.CHAT_TIMEOUT_SECONDS, transport=transport) as client:
            response = await client.post(settings.CHAT_API_URL, json=payload, headers=headers)
            response.raise_for_status()
            answer = response.json()["choices"][0]["message"]["content"]
    except httpx.HTTPStatusError as e:
        logger.warning(f"[CHAT] Upstream returned HTTP {e.response.status_code}")
        raise AssistantError(PROCESSING_FAILED) from e
    except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
        logger.error(f"[CHAT] Request failed: {e}")
        raise AssistantError(PROCESSING_FAILED) from e

    logger.info(f"[CHAT] Answered ({len(answer)} chars)")
    return answer


async def answer_question(question: str, loader: Callable[[str], List[dict]] = load_collection,
                          transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    snapshot = await collect_snapshot(loader)
    return await ask_assistant(question, snapshot, transport=transport)
