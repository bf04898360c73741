from flask import request

from utils.exceptions import InputMalformed


def load_body(schema):
    """Decode the JSON body and validate it against `schema`.

    A missing or non-object body is malformed input (400); field errors raise
    marshmallow's ValidationError, which the error handlers also map to 400.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InputMalformed("Request body must be a JSON object")
    return schema.load(payload)
