# notes_api/common/logging.py
import logging, sys, time, uuid
from pythonjsonlogger.json import JsonFormatter
from flask import g, has_request_context, request

_FIELDS = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "%(request_id)s %(method)s %(path)s %(status)s %(latency_ms)s "
    "%(action)s %(view_args)s"
)


class RequestContextFilter(logging.Filter):
    """Ajoute request_id / method / path / view_args à chaque record émis pendant une requête.

    Les erreurs de stockage héritent ainsi du contexte (ex: note_id de l'URL).
    """

    def filter(self, record):
        if has_request_context():
            record.__dict__.setdefault("request_id", getattr(g, "request_id", "-"))
            record.__dict__.setdefault("method", request.method)
            record.__dict__.setdefault("path", request.path)
            record.__dict__.setdefault("view_args", request.view_args or {})
        return True


def setup_json_logging(app):
    # Root logger en INFO (DEBUG en dev via app.debug)
    level = logging.DEBUG if app.debug else logging.INFO
    root = logging.getLogger()
    root.handlers = []  # nettoie
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(_FIELDS))
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)


def register_request_logging(app):
    @app.before_request
    def _assign_request_id_and_start_timer():
        # request id: X-Request-Id entrant ou généré
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        g._start_time = time.perf_counter()

    @app.after_request
    def _log_request(resp):
        start = getattr(g, "_start_time", None)
        latency = int((time.perf_counter() - start) * 1000) if start is not None else -1

        # expose le request id au client
        resp.headers.setdefault("X-Request-Id", getattr(g, "request_id", "-"))

        logging.getLogger("notes_api.request").info(
            "http_request",
            extra={"status": resp.status_code, "latency_ms": latency},
        )
        return resp
