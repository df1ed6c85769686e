"""
Configuración del conector: credenciales de la app registrada en Facebook,
permisos solicitados y origen de la Graph API.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from graph_errors import ConfigError

GRAPH_URL = "https://graph.facebook.com"
DEFAULT_SCOPE = "email,read_stream,publish_stream"
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class FacebookConfig:
    app_id: Optional[str] = None
    app_secret: Optional[str] = None
    scope: str = DEFAULT_SCOPE
    graph_url: str = GRAPH_URL
    timeout: float = DEFAULT_TIMEOUT

    @property
    def scopes(self) -> Tuple[str, ...]:
        """Permisos como tupla (el scope viene separado por comas)."""
        return tuple(s.strip() for s in self.scope.split(",") if s.strip())

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "FacebookConfig":
        """
        Lee la configuración desde variables de entorno (y .env si existe):
        FB_APP_ID, FB_APP_SECRET, FB_SCOPE, GRAPH_URL, FB_TIMEOUT
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), encoding="utf-8")

        raw_timeout = os.getenv("FB_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise ConfigError(f"FB_TIMEOUT inválido: {raw_timeout!r}") from None

        return cls(
            app_id=os.getenv("FB_APP_ID"),
            app_secret=os.getenv("FB_APP_SECRET"),
            scope=os.getenv("FB_SCOPE") or DEFAULT_SCOPE,
            graph_url=(os.getenv("GRAPH_URL") or GRAPH_URL).rstrip("/"),
            timeout=timeout,
        )
