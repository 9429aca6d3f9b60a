from marshmallow import Schema, fields

class TagOut(Schema):
    id = fields.UUID(required=True)
    name = fields.String(required=True)
