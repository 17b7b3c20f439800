"""Flask application factory for the chartable query service."""

import logging
from typing import Any, Optional

from flask import Flask, jsonify

from chartable.config.models import AppConfig
from chartable.errors import DataUnavailableError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Service registry (accessed by blueprints via get_services())
# ---------------------------------------------------------------------------
_services: dict[str, Any] = {}


def get_services() -> dict[str, Any]:
    """Get the global service registry. Called by blueprints."""
    return _services


def create_app(
    config: Optional[AppConfig] = None,
    character_service: Optional[Any] = None,
    warm: bool = False,
) -> Flask:
    """Create the chartable Flask application.

    Args:
        config: Application config. Defaults to ``AppConfig()``.
        character_service: Optional prebuilt CharacterService (tests).
        warm: If True, load the record store before serving.
    """
    config = config or AppConfig()

    app = Flask(__name__)
    app.config["CHARTABLE"] = config
    app.json.sort_keys = False

    # --- Initialize services ---
    from chartable.web.services.character_service import CharacterService

    if character_service is None:
        character_service = CharacterService.from_config(config)

    global _services
    _services = {
        "character_service": character_service,
        "loader": character_service.loader,
        "config": config,
    }

    if warm:
        character_service.warm()

    # --- Register API blueprints ---
    from chartable.web.api.v1.characters import bp as api_characters_bp
    from chartable.web.api.v1.health import bp as health_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(api_characters_bp)

    # --- Error handlers ---
    @app.errorhandler(DataUnavailableError)
    def data_unavailable(error):
        logger.error(f"Data unavailable: {error}")
        return jsonify({"error": "Character data is unavailable"}), 500

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"error": "Internal server error"}), 500

    logger.info("chartable web app created")
    return app
