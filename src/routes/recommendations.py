"""Routes exposing a user's training recommendations."""
from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from src.routes.dependencies import get_recommendation_service
from src.routes.utils import error_response
from src.services.recommendations import RecommendationNotFoundError
from src.validation import RecommendationQueryError, normalize_recommendation_query

recommendations_bp = Blueprint("recommendations", __name__)

logger = logging.getLogger(__name__)


@recommendations_bp.get("/users/<user_id>/recommendations")
def list_recommendations(user_id: str):
    try:
        query = normalize_recommendation_query(request.args)
    except RecommendationQueryError as exc:
        logger.warning("Rejected recommendation query for user %s: %s", user_id, exc.errors)
        return error_response(400, exc.message, exc.errors)

    service = get_recommendation_service()
    recommendations = service.list_recommendations(user_id, query)
    return jsonify({"user_id": user_id, "recommendations": recommendations})


@recommendations_bp.get("/users/<user_id>/recommendations/unread-count")
def unread_count(user_id: str):
    service = get_recommendation_service()
    return jsonify({"count": service.unread_count(user_id)})


@recommendations_bp.post("/users/<user_id>/recommendations/generate")
def generate_recommendations(user_id: str):
    service = get_recommendation_service()
    recommendations = service.generate_recommendations(user_id)
    return jsonify({"recommendations": recommendations}), 201


@recommendations_bp.route(
    "/users/<user_id>/recommendations/<int:recommendation_id>/read", methods=["PUT", "PATCH"]
)
def mark_as_read(user_id: str, recommendation_id: int):
    service = get_recommendation_service()
    try:
        recommendation = service.mark_as_read(user_id, recommendation_id)
    except RecommendationNotFoundError:
        return error_response(404, "Recommendation not found.")
    return jsonify({"recommendation": recommendation})


@recommendations_bp.delete("/users/<user_id>/recommendations/<int:recommendation_id>")
def delete_recommendation(user_id: str, recommendation_id: int):
    service = get_recommendation_service()
    try:
        service.delete_recommendation(user_id, recommendation_id)
    except RecommendationNotFoundError:
        return error_response(404, "Recommendation not found.")
    return ("", 204)
