"""Characters REST API endpoints."""

import logging

from flask import Blueprint, jsonify, request

from chartable.errors import DataUnavailableError
from chartable.web.models.pagination import CharacterQueryParams

logger = logging.getLogger(__name__)

bp = Blueprint("api_characters", __name__, url_prefix="/api/characters")


def _get_character_service():
    from chartable.web.app import get_services

    return get_services()["character_service"]


@bp.route("", methods=["GET"])
@bp.route("/", methods=["GET"])
def list_characters():
    """List characters with filters, sorting and pagination."""
    params = CharacterQueryParams.from_args(request.args)
    svc = _get_character_service()

    try:
        page = svc.list_characters(
            criteria=params.criteria,
            page=params.page_number,
            page_size=params.page_size(svc.default_page_size, svc.max_page_size),
            sort=params.sort,
        )
    except DataUnavailableError:
        raise
    except Exception:
        logger.exception("Unexpected error listing characters")
        return jsonify({"error": "Failed to fetch characters"}), 500
    return jsonify(page.to_dict())


@bp.route("/filter-options", methods=["GET"])
def filter_options():
    """Distinct filter values across the whole catalog."""
    svc = _get_character_service()
    try:
        options = svc.get_filter_options()
    except DataUnavailableError:
        raise
    except Exception:
        logger.exception("Unexpected error computing filter options")
        return jsonify({"error": "Failed to fetch filter options"}), 500
    return jsonify(options.to_dict())


@bp.route("/<character_id>", methods=["GET"])
def get_character(character_id):
    """Get a single character."""
    svc = _get_character_service()
    try:
        character = svc.get_character(character_id)
    except DataUnavailableError:
        raise
    except Exception:
        logger.exception(f"Unexpected error fetching character {character_id}")
        return jsonify({"error": "Failed to fetch character"}), 500
    if character is None:
        return jsonify({"error": "Character not found"}), 404
    return jsonify(character.model_dump())
