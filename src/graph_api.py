"""
Cliente HTTP para la API Graph de Meta (Facebook).
Ejecuta un GraphRequest contra el origen configurado y categoriza las fallas.
Sin reintentos: cada llamada es exactamente un round trip.
"""

import logging
from dataclasses import dataclass

import requests

from graph_config import DEFAULT_TIMEOUT, GRAPH_URL
from graph_errors import ConnectionRefused, Non2xxStatus, TransportError, TransportTimeout
from graph_request import GraphRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    content: bytes
    content_type: str = ""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class GraphTransport:
    """
    Dueño de la sesión de requests durante la vida del conector.
    requests no garantiza que una Session sea segura entre hilos: usa un conector por hilo.
    """

    def __init__(self, base_url: str = GRAPH_URL, timeout: float = DEFAULT_TIMEOUT,
                 session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._owns_session = session is None

    def execute(self, request: GraphRequest) -> RawResponse:
        url = request.endpoint_url(self.base_url)
        # el query lleva el token: solo se loguea el path
        logger.debug("%s %s", request.method, request.path)
        try:
            r = self.session.request(
                request.method,
                url,
                params=list(request.query) or None,
                data=list(request.form) if request.form else None,
                files=list(request.files) if request.files else None,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise TransportTimeout(f"Timeout ({self.timeout}s) en {request.method} {request.path}") from e
        except requests.ConnectionError as e:
            raise ConnectionRefused(f"Sin conexión con {self.base_url}: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"{request.method} {request.path} falló: {e}") from e

        if not 200 <= r.status_code < 300:
            logger.warning("FB %s en %s %s", r.status_code, request.method, request.path)
            raise Non2xxStatus(r.status_code, r.text)

        return RawResponse(r.status_code, r.content, r.headers.get("Content-Type", ""))

    def close(self):
        if self._owns_session:
            self.session.close()
