# fb_api.py
"""
Conector Facebook: expone cada operación del catálogo como un método.

    fb = FacebookConnector(FacebookConfig.from_env(), token_supplier=lambda: token)
    fb.get_user("123")
    fb.search_posts("concierto", limit="10")
    fb.call("publish_message", "me", msg="hola")

Todas las operaciones pasan por el mismo camino: catálogo -> build_request
-> transporte -> mapper (o re-codificación JPEG para las *_picture).
"""

import logging
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

import requests

from graph_api import GraphTransport
from graph_catalog import CATALOG, get_endpoint
from graph_config import FacebookConfig
from graph_images import to_jpeg
from graph_mapper import map_response, parse_json, to_record, unwrap_list
from graph_request import (
    CallContext, Endpoint, GraphRequest, ShapeKind, build_request, request_from_url,
)

logger = logging.getLogger(__name__)

TokenSupplier = Callable[[], Optional[str]]


class FacebookConnector:
    def __init__(self, config: FacebookConfig | None = None,
                 session: requests.Session | None = None,
                 token_supplier: TokenSupplier | None = None):
        self.config = config or FacebookConfig()
        self.token_supplier = token_supplier
        self.transport = GraphTransport(self.config.graph_url, self.config.timeout, session=session)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.transport.close()

    def __getattr__(self, name: str):
        if name.startswith("_") or name not in CATALOG:
            raise AttributeError(f"{type(self).__name__!r} no tiene la operación {name!r}")

        def operation(*args, access_token: Optional[str] = None, **kwargs):
            return self.call(name, *args, access_token=access_token, **kwargs)

        operation.__name__ = name
        return operation

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(CATALOG))

    @staticmethod
    def operations() -> Tuple[str, ...]:
        return tuple(CATALOG)

    # Requests
    def prepare(self, name: str, *args, access_token: Optional[str] = None, **kwargs) -> GraphRequest:
        """Arma el request de una operación sin ejecutarlo."""
        endpoint = get_endpoint(name)
        arguments = _bind(endpoint, args, kwargs)
        token = self._pick_token(access_token) if endpoint.auth else None
        return build_request(endpoint, CallContext(token, arguments))

    def call(self, name: str, *args, access_token: Optional[str] = None, **kwargs) -> Any:
        """
        Ejecuta una operación del catálogo. Los argumentos posicionales siguen
        el orden declarado en el Endpoint (sin contar el access_token).
        """
        endpoint = get_endpoint(name)
        request = self.prepare(name, *args, access_token=access_token, **kwargs)
        logger.debug("→ %s", name)
        raw = self.transport.execute(request)

        if endpoint.shape.kind is ShapeKind.IMAGE:
            return to_jpeg(raw.content)
        return map_response(raw.content, endpoint.shape)

    def paginate(self, name: str, *args, access_token: Optional[str] = None, **kwargs) -> Iterator[Any]:
        """
        Itera sobre todas las páginas de una operación de lista (sigue paging.next).
        Las URLs 'next' ya incluyen el token y los parámetros.
        """
        endpoint = get_endpoint(name)
        if endpoint.shape.kind is not ShapeKind.MANY:
            raise ValueError(f"{name} no devuelve una lista; no se puede paginar")

        kind = endpoint.shape.entity
        request = self.prepare(name, *args, access_token=access_token, **kwargs)
        while True:
            js = parse_json(self.transport.execute(request).content)
            page = [to_record(item, kind) for item in unwrap_list(js, kind)]
            yield from page
            next_url = (js.get("paging") or {}).get("next") if isinstance(js, dict) else None
            if not next_url:
                break
            logger.debug("→ %s (siguiente página)", name)
            request = request_from_url(next_url)

    #  Helpers
    def _pick_token(self, explicit: Optional[str] = None) -> Optional[str]:
        """
        Regla para obtener token:
        - si llega explícito, úsalo
        - si no, pídeselo al proveedor OAuth del host
        Si no hay ninguno, build_request falla con MissingCredentialError.
        """
        if explicit:
            return explicit
        return self.token_supplier() if self.token_supplier else None


def _bind(endpoint: Endpoint, args: tuple, kwargs: Dict[str, Any]) -> Dict[str, Any]:
    names = endpoint.argument_names
    if len(args) > len(names):
        raise TypeError(
            f"{endpoint.name}() recibe a lo más {len(names)} argumentos posicionales "
            f"({len(args)} entregados)"
        )
    bound = dict(zip(names, args))
    repeated = set(bound) & set(kwargs)
    if repeated:
        raise TypeError(f"{endpoint.name}() recibió valores repetidos para {sorted(repeated)}")
    bound.update(kwargs)
    return bound
