from flask import jsonify


def ok(data=None, message="success", status=200):
    payload = {"status": "success", "message": message}
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def success(status=200, **fields):
    """Success envelope with domain keys at top level, e.g. ``vendor=...``."""
    payload = {"status": "success"}
    payload.update(fields)
    return jsonify(payload), status


def error(message, status=400, code=None, details=None):
    payload = {
        "status": "error",
        "message": message,
        "code": code or status,
    }
    if details is not None:
        payload["details"] = details
    return jsonify(payload), status


def validation_error_response(errors):
    details = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ())),
            "message": err.get("msg"),
        }
        for err in errors
    ]
    return error("Validation error", status=400, details=details)
