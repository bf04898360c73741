from __future__ import annotations

import logging

from flask import Blueprint

from api.utils.payload import load_body
from models import storage
from models.schemas.webhook import USER_UPGRADED, WebhookEventSchema, WebhookUpgradeDataSchema
from models.user import User
from utils.decorators import api_key_required
from utils.exceptions import InputMalformed, ResourceNotFound

logger = logging.getLogger(__name__)

bp = Blueprint("webhooks", __name__)

webhook_event_schema = WebhookEventSchema()
upgrade_data_schema = WebhookUpgradeDataSchema()


@bp.post("/polka/webhooks")
@api_key_required()
def polka_webhook():
    """
    Payment provider callback. Only user.upgraded changes state.
    ---
    tags:
      - Webhooks
    security:
      - ApiKey: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            event: { type: string, example: user.upgraded }
            data:
              type: object
              properties:
                user_id: { type: string }
    responses:
      204: { description: Handled or ignored }
      401: { description: Missing or wrong API key }
      404: { description: Unknown user }
    """
    data = load_body(webhook_event_schema)
    if data["event"] != USER_UPGRADED:
        return ("", 204)

    if not isinstance(data["data"], dict):
        raise InputMalformed("data must be an object with a user_id")
    event_data = upgrade_data_schema.load(data["data"])
    user = storage.get(User, event_data["user_id"])
    if user is None:
        raise ResourceNotFound("User not found")

    user.is_chirpy_red = True
    user.save()
    logger.info("user %s upgraded to Chirpy Red", user.id)
    return ("", 204)
