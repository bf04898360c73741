from __future__ import annotations

import logging

from flask import Blueprint, current_app

from models import storage
from models.user import User
from utils.exceptions import Forbidden

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_TEMPLATE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


@bp.get("/metrics")
def metrics():
    """
    File server hit count
    ---
    tags:
      - Admin
    produces:
      - text/html
    responses:
      200: { description: OK }
    """
    hits = current_app.extensions["hits"].value
    return METRICS_TEMPLATE.format(hits=hits), 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
def reset():
    """
    Delete every user (with their chirps and refresh tokens) and zero the hit counter. dev only.
    ---
    tags:
      - Admin
    responses:
      200: { description: Reset }
      403: { description: Not allowed outside PLATFORM=dev }
    """
    if not current_app.extensions["auth_settings"].is_dev:
        raise Forbidden("Reset is only allowed in dev environment")

    storage.delete_all(User)
    current_app.extensions["hits"].reset()
    logger.warning("database and hit counter reset")
    return "Hits reset to 0 and database reset to initial state.", 200, {"Content-Type": "text/plain; charset=utf-8"}
