"""Health and version API endpoints."""

from flask import Blueprint, jsonify

from chartable import __version__

bp = Blueprint("api_health", __name__)


@bp.route("/api/v1/health")
def health():
    """Health check endpoint."""
    from chartable.web.app import get_services

    loader = get_services().get("loader")
    return jsonify(
        {
            "status": "ok",
            "data_loaded": bool(loader is not None and loader.is_loaded),
        }
    )


@bp.route("/api/v1/version")
def version():
    """Version info endpoint."""
    return jsonify(
        {
            "version": __version__,
            "api_version": "v1",
            "name": "chartable",
        }
    )
