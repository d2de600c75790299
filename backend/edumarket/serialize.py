# edumarket/serialize.py
from bson import ObjectId

HIDDEN_FIELDS = ("password",)


def _convert(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: _convert(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_convert(v) for v in value]
    return value


def serialize_doc(doc):
    """Make a Mongo document JSON friendly and strip secrets."""
    if not doc:
        return None
    return {k: _convert(v) for k, v in doc.items() if k not in HIDDEN_FIELDS}


def serialize_list(docs):
    return [serialize_doc(doc) for doc in docs]
