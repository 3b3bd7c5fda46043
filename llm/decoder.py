"""Decoder - Segunda validacao da resposta do provedor.

O provedor nao garante JSON bem formado mesmo com schema declarado, entao
todo texto e re-interpretado aqui e convertido em uma variante tipada:

    Ok(value)          -> estrutura valida (instancia do schema)
    ParseError         -> texto vazio ou JSON invalido
    SchemaViolation    -> JSON valido com formato inesperado
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ValidationError

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


@dataclass(frozen=True)
class Ok:
    value: Any


@dataclass(frozen=True)
class ParseError:
    message: str
    raw: str | None = None


@dataclass(frozen=True)
class SchemaViolation:
    message: str
    errors: list[dict[str, Any]] = field(default_factory=list)
    raw: str | None = None


DecodeResult = Union[Ok, ParseError, SchemaViolation]


def extract_json(text: str) -> Any:
    """Extrai JSON de texto puro, bloco markdown ou texto com prosa ao redor.

    Raises:
        json.JSONDecodeError: se nenhum JSON valido for encontrado
    """
    stripped = text.strip()

    match = _FENCED_JSON.search(stripped)
    if match:
        stripped = match.group(1).strip()

    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        pass

    # Fallback: primeiro objeto/array ate o ultimo fechamento
    for opener, closer in (("{", "}"), ("[", "]")):
        start = stripped.find(opener)
        end = stripped.rfind(closer)
        if start != -1 and end > start:
            try:
                return json.loads(stripped[start : end + 1])
            except json.JSONDecodeError:
                continue

    return json.loads(stripped)


def decode(
    text: str | None,
    schema: type[BaseModel] | None = None,
    context: dict[str, Any] | None = None,
) -> DecodeResult:
    """Interpreta o texto da resposta na estrutura declarada.

    Args:
        text: Texto retornado pelo provedor
        schema: Modelo Pydantic esperado (None = texto livre)
        context: Contexto de validacao repassado ao Pydantic

    Returns:
        Ok | ParseError | SchemaViolation
    """
    if schema is None:
        return Ok(text or "")

    if not text or not text.strip():
        return ParseError("Resposta vazia", raw=text)

    try:
        data = extract_json(text)
    except json.JSONDecodeError as e:
        return ParseError(f"JSON invalido: {e.msg}", raw=text)

    if not isinstance(data, dict):
        return SchemaViolation(
            f"Esperado objeto JSON, recebido {type(data).__name__}",
            raw=text,
        )

    try:
        value = schema.model_validate(data, context=context)
    except ValidationError as e:
        return SchemaViolation(
            f"{e.error_count()} erro(s) de validacao em {schema.__name__}",
            errors=e.errors(include_url=False, include_context=False),
            raw=text,
        )

    return Ok(value)
