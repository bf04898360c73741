from marshmallow import EXCLUDE, Schema, fields, validate

MAX_CHIRP_LENGTH = 140


class ChirpCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    body = fields.String(
        required=True,
        validate=validate.Length(max=MAX_CHIRP_LENGTH, error="Chirp is too long"),
    )


class ChirpListQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    author_id = fields.UUID(load_default=None)
    sort = fields.String(load_default="asc", validate=validate.OneOf(["asc", "desc"]))


class ChirpOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    body = fields.String()
    user_id = fields.String()
