"""JSON backend consumed by the stats widget.

Routes
------
``GET /backend/stats?project=<optional>``
    Aggregate issue stats, or ``{error, message}`` with a non-2xx status.
``GET /backend/debug?test=<value>``
    Connectivity check echoing ``test`` back with a timestamp.

Usage:
  youtrack-stats-backend            (console script)
  python -m youtrack_app.backend
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import datetime

import pytz
import requests
from flask import Flask, jsonify, request

from youtrack_app.core.errors import ProjectNotFoundError, YouTrackError
from youtrack_app.core.service import StatsService, get_service

logger = logging.getLogger(__name__)

STATS_ERROR_MESSAGE = "Failed to fetch YouTrack statistics"


def create_app(service_factory: Callable[[], StatsService] | None = None) -> Flask:
    """Build the Flask app.

    ``service_factory`` is called once per stats request so configuration is
    read fresh and no state is shared across requests; defaults to
    ``get_service`` (environment-configured).
    """
    factory = service_factory or get_service
    app = Flask(__name__)

    @app.get("/backend/debug")
    def debug():
        return jsonify(
            {
                "status": "ok",
                "timestamp": datetime.now(pytz.UTC).isoformat(),
                "test": request.args.get("test") or None,
            }
        )

    @app.get("/backend/stats")
    def stats():
        project = request.args.get("project") or None
        try:
            result = factory().compute_stats(project)
        except ProjectNotFoundError as exc:
            logger.warning("Stats request for unknown project %r", exc.requested)
            return jsonify({"error": STATS_ERROR_MESSAGE, "message": str(exc)}), 404
        except (YouTrackError, requests.RequestException) as exc:
            logger.exception("Failed to compute YouTrack stats")
            return jsonify({"error": STATS_ERROR_MESSAGE, "message": str(exc)}), 500
        return jsonify(result.to_dict())

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    host = os.environ.get("YOUTRACK_BACKEND_HOST", "127.0.0.1")
    port = int(os.environ.get("YOUTRACK_BACKEND_PORT", "8080"))
    create_app().run(host=host, port=port)


if __name__ == "__main__":
    main()
