"""correlation_id por requisição, guardado em ContextVar.

O valor vem do header `x-correlation-id` do cliente (front-end do painel
ou proxy). Valores vazios, longos demais ou com caracteres fora de
`[A-Za-z0-9._-]` são trocados por um UUID novo, porque o id é ecoado na
resposta e gravado em todo log.
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

MAX_CORRELATION_ID_LENGTH = 128

_ALLOWED_CORRELATION_ID = re.compile(r"[A-Za-z0-9._-]+")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    return uuid.uuid4().hex


def accept_correlation_id(candidate: str | None) -> str | None:
    """Retorna o id recebido normalizado, ou None se não for aproveitável."""
    if candidate is None:
        return None
    value = candidate.strip()
    if not value or len(value) > MAX_CORRELATION_ID_LENGTH:
        return None
    if _ALLOWED_CORRELATION_ID.fullmatch(value) is None:
        return None
    return value


def get_correlation_id() -> str:
    return _correlation_id.get()


def set_correlation_id(candidate: str | None = None) -> Token[str]:
    """Fixa o correlation_id do contexto atual (gera um se `candidate` for inválido).

    Returns:
        Token para `reset_correlation_id()` no fim da requisição.
    """
    return _correlation_id.set(accept_correlation_id(candidate) or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)
