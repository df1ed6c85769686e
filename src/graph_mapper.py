"""
Mapper de respuestas JSON de la Graph API a los tipos de graph_types.
"""

import json
from datetime import datetime, timezone
from typing import Any, List

from dateutil import parser as date_parser

from graph_errors import MalformedResponseError
from graph_request import Shape, ShapeKind
from graph_types import (
    BOOL, DATE, FIELD_MAPS, FLOAT, INT, MANY, ONE, RECORDS, EntityKind,
)


def map_response(body: str | bytes, shape: Shape) -> Any:
    """
    Convierte el cuerpo de la respuesta según la forma declarada por la operación.
    Si algo no se puede mapear falla completo; nunca devuelve objetos parciales.
    """
    if shape.kind is ShapeKind.NONE:
        return None
    if shape.kind is ShapeKind.IMAGE:
        raise ValueError("Las respuestas de imagen no pasan por el mapper JSON")

    js = parse_json(body)
    if shape.kind is ShapeKind.SINGLE:
        return to_record(js, shape.entity)
    return to_records(js, shape.entity)


def parse_json(body: str | bytes) -> Any:
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        preview = body[:120] if isinstance(body, (str, bytes)) else body
        raise MalformedResponseError(f"Respuesta no es JSON válido: {preview!r}") from e


def to_record(js: Any, kind: EntityKind) -> Any:
    # Graph devuelve `false` cuando el objeto no existe o no es visible
    if not isinstance(js, dict):
        raise MalformedResponseError(f"{kind.value}: se esperaba un objeto JSON, llegó {type(js).__name__}")

    values = {}
    for field in FIELD_MAPS[kind]:
        if field.key not in js or js[field.key] is None:
            if field.required:
                raise MalformedResponseError(f"{kind.value}: falta el campo obligatorio '{field.key}'")
            continue
        values[field.attr] = _convert(js[field.key], field, kind)
    return RECORDS[kind](**values)


def to_records(js: Any, kind: EntityKind) -> List[Any]:
    """Lista JSON o sobre {"data": [...]}. Conserva el orden original."""
    items = unwrap_list(js, kind)
    return [to_record(item, kind) for item in items]


def unwrap_list(js: Any, kind: EntityKind) -> list:
    if isinstance(js, list):
        return js
    if isinstance(js, dict) and isinstance(js.get("data"), list):
        return js["data"]
    raise MalformedResponseError(f"{kind.value}: se esperaba una lista o un sobre {{'data': [...]}}")


def parse_date(value: Any) -> datetime:
    """
    Fechas de Graph en formato largo (2011-05-16T17:23:49+0000)
    o timestamp unix si se pidió date_format=U.
    """
    if isinstance(value, bool):
        raise MalformedResponseError(f"Fecha inválida: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if not isinstance(value, str):
        raise MalformedResponseError(f"Fecha inválida: {value!r}")
    try:
        return date_parser.isoparse(value)
    except (ValueError, OverflowError) as e:
        raise MalformedResponseError(f"Fecha inválida: {value!r}") from e


def _convert(value: Any, field, parent: EntityKind) -> Any:
    conv = field.conv
    if conv == ONE:
        return to_record(value, field.kind)
    if conv == MANY:
        return to_records(value, field.kind)
    if conv == DATE:
        return parse_date(value)
    try:
        if conv == INT:
            return int(value)
        if conv == FLOAT:
            return float(value)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"{parent.value}.{field.key}: valor inválido {value!r}") from e
    if conv == BOOL:
        if isinstance(value, str):
            return value.lower() in ("1", "true")
        return bool(value)
    return value
