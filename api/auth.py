"""
Authentication blueprint:
- POST /login    -> access token (JWT, 1h) + refresh token (opaque, 60 days)
- POST /refresh  -> new access token for `Authorization: Bearer <refresh token>`
- POST /revoke   -> tombstone the refresh token in `Authorization: Bearer <refresh token>`

The flows themselves live in services.sessions.SessionService; this module
only decodes requests and shapes responses.
"""
from __future__ import annotations

from flask import Blueprint, jsonify, request

from api.utils.payload import load_body
from models.schemas.user import UserLoginSchema, UserOutSchema
from utils.decorators import get_sessions

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()


@bp.post("/login")
def login():
    """
    Login: return access token and refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns user plus token and refresh_token)
      400:
        description: Malformed body
      401:
        description: Incorrect email or password
    """
    data = load_body(user_login_schema)
    result = get_sessions().login(data["email"], data["password"])

    body = user_out_schema.dump(result.user)
    body["token"] = result.access_token
    body["refresh_token"] = result.refresh_token
    return jsonify(body), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new access token (the refresh token is not rotated)
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns token)
      401:
        description: Missing, unknown, expired or revoked refresh token
    """
    token = get_sessions().refresh(request.headers.get("Authorization"))
    return jsonify({"token": token}), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked (also when it was already revoked)
      401:
        description: Missing or malformed Authorization header
      500:
        description: Token was never issued
    """
    get_sessions().revoke(request.headers.get("Authorization"))
    return ("", 204)
