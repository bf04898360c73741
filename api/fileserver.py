from flask import Blueprint, current_app, send_from_directory

bp = Blueprint("fileserver", __name__)


@bp.get("/", defaults={"filename": "index.html"})
@bp.get("/<path:filename>")
def serve(filename: str):
    """Static files under FILESERVER_ROOT; every hit is counted for /admin/metrics."""
    current_app.extensions["hits"].increment()
    return send_from_directory(current_app.config["FILESERVER_ROOT"], filename)
