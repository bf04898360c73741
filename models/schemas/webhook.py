from marshmallow import EXCLUDE, Schema, fields

USER_UPGRADED = "user.upgraded"


class WebhookUpgradeDataSchema(Schema):
    """`data` of a user.upgraded event."""

    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(required=True)


class WebhookEventSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    # shape depends on the event; unknown events never look at it
    data = fields.Raw(load_default=None, allow_none=True)
