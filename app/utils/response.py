from flask import jsonify


def success(message, data=None, status=200):
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def created(message, data=None):
    return success(message, data, status=201)
