from __future__ import annotations

from flask import Blueprint, g, jsonify

from api.utils.payload import load_body
from models import storage
from models.schemas.user import UserCreateSchema, UserOutSchema
from models.user import User
from utils.decorators import jwt_required
from utils.exceptions import Conflict, ResourceNotFound
from utils.security import hash_password

bp = Blueprint("users", __name__)

user_create_schema = UserCreateSchema()
user_out_schema = UserOutSchema()


def _email_taken(email: str, exclude_id: str | None = None) -> bool:
    query = storage.get_session().query(User).filter(User.email == email)
    if exclude_id:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


@bp.post("/users")
def create_user():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Email already registered
    """
    data = load_body(user_create_schema)
    if _email_taken(data["email"]):
        raise Conflict("Email already registered")

    user = User(email=data["email"], hashed_password=hash_password(data["password"]))
    user.save()
    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Change the caller's email and password.
    ---
    tags:
      - Users
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
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      409:
        description: Email already registered
    """
    data = load_body(user_create_schema)
    user = storage.get(User, g.current_user_id)
    if user is None:
        # token outlived its user (e.g. after /admin/reset)
        raise ResourceNotFound("User not found")
    if _email_taken(data["email"], exclude_id=user.id):
        raise Conflict("Email already registered")

    user.email = data["email"]
    user.hashed_password = hash_password(data["password"])
    user.save()
    return jsonify(user_out_schema.dump(user)), 200
