"""
API routes for the roomrules service.
"""
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, ValidationError

from ..logger import get_logger
from ..schemas.requests import (
    BudgetTierRequest,
    ExpandRequest,
    ItemConstraintsRequest,
    RoomClassifyRequest,
    SearchRequest,
    SizingRequest,
    SuggestionsRequest,
)
from ..services.rooms import parse_room_name
from ..services.synonyms import expand_keywords, expand_query, expand_user_text, get_synonyms

logger = get_logger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')

M = TypeVar('M', bound=BaseModel)


def get_services():
    """Services container registered by create_app()."""
    return current_app.extensions['roomrules']


def _error(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({'status': 'error', 'message': message}), status


def _parse_body(model: Type[M]) -> Tuple[Optional[M], Optional[Tuple[Any, int]]]:
    """Validate the JSON body against a schema; returns (payload, error_response)."""
    data = request.get_json(silent=True)
    if data is None:
        return None, _error('JSON body is required', 400)
    try:
        return model.model_validate(data), None
    except ValidationError as e:
        details = '; '.join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        return None, _error(f'Invalid request: {details}', 400)


@api_bp.route('/rooms/classify', methods=['POST'])
def classify_room() -> Tuple[Dict[str, Any], int]:
    """
    Classify a free-text room label.

    Expected JSON:
    {
        "room_name": "Master Bedroom"
    }

    Returns:
    {
        "status": "success",
        "room": {"type": "bedroom", "subtype": "master"}
    }
    """
    payload, error = _parse_body(RoomClassifyRequest)
    if error:
        return error

    room = parse_room_name(payload.room_name)
    return jsonify({'status': 'success', 'room': room.to_dict()}), 200


@api_bp.route('/synonyms/<path:term>', methods=['GET'])
def synonyms(term: str) -> Tuple[Dict[str, Any], int]:
    """List a term and its synonyms."""
    return jsonify({'status': 'success', 'term': term, 'synonyms': get_synonyms(term)}), 200


@api_bp.route('/expand', methods=['POST'])
def expand() -> Tuple[Dict[str, Any], int]:
    """
    Expand free text and/or keywords with synonyms.

    Expected JSON:
    {
        "text": "need a tv-table and a sofa",
        "keywords": ["wood"]
    }
    """
    payload, error = _parse_body(ExpandRequest)
    if error:
        return error

    if not payload.text and not payload.keywords:
        return _error('Either text or keywords is required', 400)

    return jsonify({
        'status': 'success',
        'expanded_text': expand_user_text(payload.text),
        'query': expand_query(payload.text).to_dict(),
        'keywords': expand_keywords(payload.keywords),
    }), 200


@api_bp.route('/constraints', methods=['POST'])
def item_constraints() -> Tuple[Dict[str, Any], int]:
    """
    Derive item constraints for a room.

    Expected JSON:
    {
        "property_type": "apartment",
        "bhk": 2,
        "room_name": "master bedroom",
        "item_type": "wardrobe"
    }

    Returns "constraints": null when no rule applies.
    """
    payload, error = _parse_body(ItemConstraintsRequest)
    if error:
        return error

    try:
        constraints = get_services().property_rules.derive_item_constraints(
            property_type=payload.property_type,
            bhk=payload.bhk,
            room_name=payload.room_name,
            item_type=payload.item_type,
            item_subtype=payload.item_subtype,
        )
        return jsonify({
            'status': 'success',
            'constraints': constraints.to_dict() if constraints else None,
        }), 200

    except Exception as e:
        logger.error(f"Error in constraints endpoint: {e}", exc_info=True)
        return _error(str(e), 500)


@api_bp.route('/budget-tier', methods=['POST'])
def budget_tier() -> Tuple[Dict[str, Any], int]:
    """
    Classify a total budget.

    Expected JSON:
    {
        "property_type": "apartment",
        "bhk": 3,
        "total_budget": 1500000
    }
    """
    payload, error = _parse_body(BudgetTierRequest)
    if error:
        return error

    try:
        tier = get_services().property_rules.determine_budget_tier(
            property_type=payload.property_type,
            bhk=payload.bhk,
            total_budget=payload.total_budget,
        )
        return jsonify({'status': 'success', 'tier': tier}), 200

    except Exception as e:
        logger.error(f"Error in budget-tier endpoint: {e}", exc_info=True)
        return _error(str(e), 500)


@api_bp.route('/sizing', methods=['POST'])
def sizing() -> Tuple[Dict[str, Any], int]:
    """
    Sizing and budget ranges for a property configuration.

    Expected JSON:
    {
        "property_type": "apartment",
        "bhk": 2,
        "sqft": 900
    }
    """
    payload, error = _parse_body(SizingRequest)
    if error:
        return error

    try:
        services = get_services()
        hint = services.sizing_rules.derive_rule_for(
            property_type=payload.property_type,
            bhk=payload.bhk,
            sqft=payload.sqft,
        )
        size_pricing = services.property_rules.get_size_pricing_for(
            property_type=payload.property_type,
            bhk=payload.bhk,
        )
        return jsonify({
            'status': 'success',
            'rule': hint.to_dict() if hint else None,
            'size_pricing': size_pricing.to_dict() if size_pricing else None,
        }), 200

    except Exception as e:
        logger.error(f"Error in sizing endpoint: {e}", exc_info=True)
        return _error(str(e), 500)


@api_bp.route('/suggestions', methods=['POST'])
def suggestions() -> Tuple[Dict[str, Any], int]:
    """
    Ranked category suggestions for a room.

    Expected JSON:
    {
        "room": "living",
        "style_bias": ["scandinavian", "oak"]
    }
    """
    payload, error = _parse_body(SuggestionsRequest)
    if error:
        return error

    try:
        ranked = get_services().catalog.get_room_scoped_suggestions(
            payload.room, style_bias=payload.style_bias
        )
        return jsonify({'status': 'success', 'room': payload.room, 'suggestions': ranked}), 200

    except Exception as e:
        logger.error(f"Error in suggestions endpoint: {e}", exc_info=True)
        return _error(str(e), 500)


@api_bp.route('/categories', methods=['GET'])
def categories() -> Tuple[Dict[str, Any], int]:
    """Distinct catalog categories and subcategories."""
    try:
        catalog = get_services().catalog
        return jsonify({
            'status': 'success',
            'categories': catalog.get_distinct_categories(),
            'subcategories': catalog.get_distinct_subcategories(),
        }), 200

    except Exception as e:
        logger.error(f"Error in categories endpoint: {e}", exc_info=True)
        return _error(str(e), 500)


@api_bp.route('/search', methods=['POST'])
def search_items() -> Tuple[Dict[str, Any], int]:
    """
    Exact-match catalog search with synonym expansion.

    Expected JSON:
    {
        "tokens": ["sofa", "fabric"],
        "max_price": 40000,
        "package": "premium",
        "limit": 10
    }
    """
    payload, error = _parse_body(SearchRequest)
    if error:
        return error

    try:
        items = get_services().catalog.search_items(
            payload.tokens,
            max_price=payload.max_price,
            package=payload.package,
            limit=payload.limit,
        )
        logger.info(f"Search {payload.tokens} returned {len(items)} items")
        return jsonify({
            'status': 'success',
            'items': [item.to_dict() for item in items],
            'count': len(items),
        }), 200

    except Exception as e:
        logger.error(f"Error in search endpoint: {e}", exc_info=True)
        return _error(str(e), 500)
