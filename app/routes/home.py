from flask import Blueprint, jsonify

home_bp = Blueprint('home', __name__)

@home_bp.route('/health')
def health():
    return jsonify({"status": "OK", "message": "TSPark API is running"})
