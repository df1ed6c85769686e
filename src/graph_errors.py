"""
Errores tipados del conector Graph.
Todos heredan de GraphError para que el llamador pueda capturarlos juntos.
"""

import json
from typing import Optional


class GraphError(RuntimeError): ...


class ConfigError(GraphError): ...


class UnknownOperationError(GraphError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"Operación desconocida: {name}")
        self.name = name


class MissingParameterError(GraphError):
    """Falta un parámetro requerido (path, query, form o multipart)."""

    def __init__(self, operation: str, parameter: str):
        super().__init__(f"{operation}: falta el parámetro requerido '{parameter}'")
        self.operation = operation
        self.parameter = parameter


class MissingCredentialError(GraphError):
    def __init__(self, operation: str):
        super().__init__(f"{operation}: requiere access_token y no se entregó ninguno")
        self.operation = operation


class TransportError(GraphError):
    """Falla de red o respuesta no-2xx de la Graph API."""


class TransportTimeout(TransportError): ...


class ConnectionRefused(TransportError): ...


class Non2xxStatus(TransportError):
    """
    Respuesta con status fuera de 2xx. Conserva el cuerpo completo y,
    si viene el sobre {"error": {...}} de Graph, lo expone ya parseado.
    """

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        self.error = _error_envelope(body)
        detail = (self.error or {}).get("message") or body[:400]
        super().__init__(f"FB {status_code}: {detail}")

    @property
    def error_message(self) -> Optional[str]:
        return (self.error or {}).get("message")

    @property
    def error_type(self) -> Optional[str]:
        return (self.error or {}).get("type")

    @property
    def error_code(self) -> Optional[int]:
        return (self.error or {}).get("code")


TransportError.Timeout = TransportTimeout
TransportError.ConnectionRefused = ConnectionRefused
TransportError.Non2xxStatus = Non2xxStatus


class MalformedResponseError(GraphError): ...


class ImageEncodingError(GraphError): ...


def _error_envelope(body: str) -> Optional[dict]:
    try:
        js = json.loads(body)
    except (TypeError, ValueError):
        return None
    err = js.get("error") if isinstance(js, dict) else None
    return err if isinstance(err, dict) else None
