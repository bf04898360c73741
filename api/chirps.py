from __future__ import annotations

import uuid

from flask import Blueprint, current_app, g, jsonify, request

from api.utils.payload import load_body
from models.schemas.chirp import ChirpCreateSchema, ChirpListQuerySchema, ChirpOutSchema
from services.profanity import filter_text
from utils.decorators import jwt_required

bp = Blueprint("chirps", __name__)

chirp_create_schema = ChirpCreateSchema()
chirp_list_query_schema = ChirpListQuerySchema()
chirp_out_schema = ChirpOutSchema()
chirps_out_schema = ChirpOutSchema(many=True)


def _chirps():
    return current_app.extensions["chirps"]


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp as the authenticated user
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      201:
        description: Created
      400:
        description: Chirp is too long or body malformed
      401:
        description: Unauthorized
    """
    data = load_body(chirp_create_schema)
    chirp = _chirps().create(filter_text(data["body"]), g.current_user_id)
    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps, oldest first
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: string
        required: false
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
        required: false
    responses:
      200: { description: OK }
      400: { description: Invalid query parameters }
    """
    params = chirp_list_query_schema.load(request.args)
    rows = _chirps().list(author_id=params["author_id"], descending=params["sort"] == "desc")
    return jsonify(chirps_out_schema.dump(rows)), 200


@bp.get("/chirps/<uuid:chirp_id>")
def get_chirp(chirp_id: uuid.UUID):
    """
    Get a single chirp
    ---
    tags:
      - Chirps
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return jsonify(chirp_out_schema.dump(_chirps().get(chirp_id))), 200


@bp.delete("/chirps/<uuid:chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: uuid.UUID):
    """
    Delete one of your own chirps
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      401: { description: Unauthorized }
      403: { description: Not the author }
      404: { description: Not found }
    """
    _chirps().delete(chirp_id, g.current_user_id)
    return ("", 204)
