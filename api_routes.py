"""API routes for the Tech News API."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import jsonify, make_response, render_template, request

from crawler.schemas.models import ErrorResponse
from technews import SETTINGS, get_latest
from technews.errors import FetchError
from technews.timeutil import utc_now_iso

logger = logging.getLogger("technews")

LATEST_ENDPOINT = "/api/theverge/latest"
DEFAULT_DISCOVER_API = f"{LATEST_ENDPOINT}?limit=20"
SUCCESS_CACHE_CONTROL = "public, s-maxage=60, stale-while-revalidate=30"


def register_routes(app):
    """Register all API routes with the Flask app.

    Args:
        app: Flask app instance.
    """

    @app.route("/api")
    def api_index():
        """Self-description for API consumers (GPT actions, scripts)."""
        return jsonify(
            {
                "name": "Tech News API",
                "description": f"Latest {SETTINGS.source_label} articles as JSON, for GPT Actions and trend analysis.",
                "endpoints": {
                    "theVergeLatest": LATEST_ENDPOINT,
                    "discover": "/api/discover",
                },
                "params": {
                    "limit": "at most 50, default 20",
                    "since": "ISO date-time (e.g. 2025-01-01T00:00:00.000Z) or YYYY-MM-DD (UTC+8 midnight)",
                },
                "examples": [
                    f"{LATEST_ENDPOINT}?limit=10",
                    f"{LATEST_ENDPOINT}?limit=15&since=2025-01-01T00:00:00.000Z",
                ],
            }
        )

    @app.route(LATEST_ENDPOINT)
    def api_latest():
        """Normalized feed listing."""
        args = request.args
        try:
            result = get_latest(limit=args.get("limit"), since=args.get("since"), url=args.get("url"))
        except FetchError as exc:
            payload = exc.to_response()
            return jsonify(payload.model_dump()), payload.status
        except Exception as exc:
            logger.exception("Unexpected error while building feed listing")
            payload = ErrorResponse(
                error=f"Failed to fetch or parse {SETTINGS.source_label} RSS",
                detail=type(exc).__name__,
                fetched_at=utc_now_iso(),
            )
            return jsonify(payload.model_dump()), payload.status

        response = make_response(jsonify(result.model_dump()), 200)
        response.headers["Cache-Control"] = SUCCESS_CACHE_CONTROL
        return response

    @app.route("/api/discover")
    def discover():
        """Swipeable reading surface backed by the listing endpoint."""
        api = request.args.get("api") or DEFAULT_DISCOVER_API
        response = make_response(
            render_template("discover.html", api=api, source_label=SETTINGS.source_label)
        )
        response.headers["Content-Type"] = "text/html; charset=utf-8"
        response.headers["Cache-Control"] = "no-store"
        return response

    @app.route("/healthz")
    def healthz():
        """Liveness payload."""
        return jsonify(
            {
                "status": "ok",
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "feed": {
                    "default_url": SETTINGS.feed_url,
                    "allowed_sources": len(SETTINGS.allowed_urls),
                    "source_label": SETTINGS.source_label,
                },
            }
        )
