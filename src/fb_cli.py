"""
Línea de comandos para probar operaciones del conector:

    fb-graph get_user user=4
    fb-graph search_posts q=concierto limit=10
    fb-graph get_user_picture user=4 type=large --output foto.jpg
    fb-graph publish_photo album_id=1 caption=hola photo=foto.jpg

Lee FB_APP_ID/FB_APP_SECRET/GRAPH_URL del .env y el token de ACCESS_TOKEN_FB
(o ACCESS_TOKEN como fallback).
"""

import argparse
import dataclasses
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from fb_api import FacebookConnector
from graph_catalog import get_endpoint
from graph_config import FacebookConfig
from graph_errors import GraphError, Non2xxStatus


def _env_token():
    return os.getenv("ACCESS_TOKEN_FB") or os.getenv("ACCESS_TOKEN")


def _parse_pairs(pairs):
    out = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise SystemExit(f"Argumento inválido '{pair}': se espera clave=valor")
        out[key] = value
    return out


def _binary_paths(operation, params):
    """Los parámetros binarios (ej. photo de publish_photo) llegan como ruta de archivo."""
    binary = {p.name for p in get_endpoint(operation).params if p.binary}
    return {k: Path(v) if k in binary else v for k, v in params.items()}


def to_jsonable(value):
    """Registros -> dicts, fechas -> ISO 8601; el resto tal cual."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name.rstrip("_"): to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def build_parser():
    p = argparse.ArgumentParser(prog="fb-graph", description="Operaciones de la Graph API de Facebook")
    p.add_argument("operation", nargs="?", help="nombre de la operación (ver --list)")
    p.add_argument("params", nargs="*", help="parámetros clave=valor")
    p.add_argument("--list", action="store_true", help="lista las operaciones disponibles")
    p.add_argument("--output", "-o", help="archivo donde guardar el JPEG de las operaciones *_picture")
    p.add_argument("--all-pages", action="store_true", help="sigue paging.next en operaciones de lista")
    p.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"))
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.list or not args.operation:
        for name in FacebookConnector.operations():
            print(name)
        return 0

    config = FacebookConfig.from_env()
    params = _parse_pairs(args.params)

    with FacebookConnector(config, token_supplier=_env_token) as fb:
        try:
            params = _binary_paths(args.operation, params)
            if args.all_pages:
                result = list(fb.paginate(args.operation, **params))
            else:
                result = fb.call(args.operation, **params)
        except Non2xxStatus as e:
            print(f"❌ {e}", file=sys.stderr)
            if e.error:
                print(json.dumps(e.error, indent=2, ensure_ascii=False), file=sys.stderr)
            return 1
        except (GraphError, TypeError, ValueError, OSError) as e:
            print(f"❌ {type(e).__name__}: {e}", file=sys.stderr)
            return 1

    if isinstance(result, bytes):
        if not args.output:
            print("❌ La operación devuelve una imagen: usa --output archivo.jpg", file=sys.stderr)
            return 1
        Path(args.output).write_bytes(result)
        print(f"✔ {len(result)} bytes guardados en {args.output}")
        return 0

    if result is not None:
        print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))
    print("✔ Listo", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
