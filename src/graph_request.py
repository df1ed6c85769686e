"""
Descriptores de endpoint y armado de requests hacia la Graph API.

Un Endpoint describe una operación (template de path, verbo, parámetros y
forma de la respuesta). build_request() toma el descriptor más los argumentos
de la llamada y produce un GraphRequest inmutable; aquí no hay I/O de red.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from string import Formatter
from typing import Any, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlencode, urlsplit

from graph_errors import MissingCredentialError, MissingParameterError
from graph_types import EntityKind

ACCESS_TOKEN_PARAM = "access_token"
METHODS = ("GET", "POST", "DELETE")


class Source(str, Enum):
    PATH = "path"
    QUERY = "query"
    FORM = "form"
    MULTIPART = "multipart"


class ShapeKind(Enum):
    SINGLE = "single"
    MANY = "many"
    IMAGE = "image"
    NONE = "none"


@dataclass(frozen=True)
class Shape:
    kind: ShapeKind
    entity: Optional[EntityKind] = None


def single(kind: EntityKind) -> Shape:
    return Shape(ShapeKind.SINGLE, kind)


def many(kind: EntityKind) -> Shape:
    return Shape(ShapeKind.MANY, kind)


IMAGE = Shape(ShapeKind.IMAGE)
NONE = Shape(ShapeKind.NONE)


@dataclass(frozen=True)
class Param:
    name: str
    source: Source = Source.QUERY
    required: bool = True
    default: Optional[str] = None
    wire: Optional[str] = None     # nombre en la API si difiere del argumento
    binary: bool = False           # parte binaria de un multipart

    @property
    def wire_name(self) -> str:
        return self.wire or self.name


@dataclass(frozen=True)
class Endpoint:
    name: str
    path: str
    method: str = "GET"
    params: Tuple[Param, ...] = ()
    shape: Shape = NONE
    auth: bool = False
    token_in: Source = Source.QUERY
    fixed: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        if self.method not in METHODS:
            raise ValueError(f"{self.name}: método HTTP no soportado {self.method}")
        if self.token_in not in (Source.QUERY, Source.FORM):
            raise ValueError(f"{self.name}: el access_token va en query o en form")

        names = [p.name for p in self.params]
        if len(names) != len(set(names)):
            raise ValueError(f"{self.name}: parámetros duplicados")

        placeholders = {f for _, f, _, _ in Formatter().parse(self.path) if f is not None}
        path_params = {p.name for p in self.params if p.source is Source.PATH}
        if placeholders != path_params:
            raise ValueError(
                f"{self.name}: placeholders {sorted(placeholders)} "
                f"no calzan con parámetros de path {sorted(path_params)}"
            )

    @property
    def argument_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.params)

    @property
    def required_arguments(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.params if p.required)


@dataclass(frozen=True)
class CallContext:
    access_token: Optional[str] = None
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GraphRequest:
    method: str
    path: str
    query: Tuple[Tuple[str, str], ...] = ()
    form: Optional[Tuple[Tuple[str, str], ...]] = None
    files: Optional[Tuple[Tuple[str, Tuple[str, bytes]], ...]] = None
    # esquema y host de una URL absoluta (paging.next); el path ya viene completo
    origin: Optional[str] = None

    @property
    def content_type(self) -> Optional[str]:
        if self.files:
            return "multipart/form-data"
        if self.form is not None:
            return "application/x-www-form-urlencoded"
        return None

    def query_string(self) -> str:
        return urlencode(self.query)

    def endpoint_url(self, base: str) -> str:
        """URL sin query. Si el request trae origin, base se ignora."""
        return f"{(self.origin or base).rstrip('/')}/{self.path.lstrip('/')}"

    def url(self, base: str) -> str:
        url = self.endpoint_url(base)
        qs = self.query_string()
        return f"{url}?{qs}" if qs else url


def build_request(endpoint: Endpoint, context: CallContext) -> GraphRequest:
    args = dict(context.arguments)
    unknown = set(args) - set(endpoint.argument_names)
    if unknown:
        raise TypeError(f"{endpoint.name}() no acepta los argumentos {sorted(unknown)}")

    token = context.access_token
    if endpoint.auth and not token:
        raise MissingCredentialError(endpoint.name)

    path_values, query, form, files = {}, [], [], []
    if endpoint.auth and endpoint.token_in is Source.QUERY:
        query.append((ACCESS_TOKEN_PARAM, token))
    if endpoint.auth and endpoint.token_in is Source.FORM:
        form.append((ACCESS_TOKEN_PARAM, token))

    for p in endpoint.params:
        value = _resolve(endpoint, p, args.get(p.name))
        if value is None:
            continue
        if p.source is Source.PATH:
            path_values[p.name] = quote(str(value), safe="")
        elif p.source is Source.QUERY:
            query.append((p.wire_name, str(value)))
        elif p.binary:
            files.append((p.wire_name, _read_binary(endpoint, p, value)))
        else:
            form.append((p.wire_name, str(value)))

    query.extend(endpoint.fixed)

    has_body = any(p.source in (Source.FORM, Source.MULTIPART) for p in endpoint.params) \
        or endpoint.token_in is Source.FORM
    return GraphRequest(
        method=endpoint.method,
        path=endpoint.path.format(**path_values),
        query=tuple(query),
        form=tuple(form) if has_body else None,
        files=tuple(files) or None,
    )


# Helpers
def _resolve(endpoint: Endpoint, p: Param, value: Any) -> Any:
    """Valor entregado, o el default si es opcional. Nunca valida semántica."""
    if p.source is Source.PATH and value == "":
        value = None
    if value is None:
        value = p.default
    if value is None and p.required:
        raise MissingParameterError(endpoint.name, p.name)
    return value


def _read_binary(endpoint: Endpoint, p: Param, value: Any) -> Tuple[str, bytes]:
    if isinstance(value, (bytes, bytearray)):
        return (p.wire_name, bytes(value))
    if isinstance(value, Path):
        return (value.name, value.read_bytes())
    if hasattr(value, "read"):
        name = os.path.basename(getattr(value, "name", "") or p.wire_name)
        return (name, value.read())
    raise TypeError(f"{endpoint.name}: '{p.name}' debe ser bytes, Path o archivo binario")


def request_from_url(url: str) -> GraphRequest:
    """GET a partir de una URL absoluta (paging.next ya trae token y parámetros)."""
    parts = urlsplit(url)
    return GraphRequest(
        method="GET",
        path=parts.path.lstrip("/"),
        query=tuple(parse_qsl(parts.query, keep_blank_values=True)),
        origin=f"{parts.scheme}://{parts.netloc}",
    )
