import re
from flask import current_app, jsonify, request
from sqlalchemy.exc import IntegrityError
from meditime.extensions import db
from meditime.models.user import User
from flask_jwt_extended import create_access_token

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 8
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _error(status, code, message):
    return jsonify({"success": False, "message": message,
                    "error": {"code": code, "message": message}}), status


def register():
    data = request.get_json() or {}
    name     = (data.get("name") or "").strip()
    email    = (data.get("email") or "").lower().strip()
    password = data.get("password") or ""

    if len(name) < MIN_NAME_LENGTH:
        return _error(400, "VALIDATION_ERROR", "Name must be at least 2 characters")
    if not EMAIL_RE.match(email):
        return _error(400, "VALIDATION_ERROR", "Invalid email address")
    if len(password) < MIN_PASSWORD_LENGTH:
        return _error(400, "VALIDATION_ERROR", "Password must be at least 8 characters")

    if User.query.filter_by(email=email).first():
        return _error(409, "EMAIL_EXISTS", "Email already exists")

    user = User(name=name, email=email)
    user.set_password(password)
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return _error(409, "EMAIL_EXISTS", "Email already exists")

    current_app.logger.info(f"Registered user id={user.id}")
    return jsonify({"success": True, "message": "User registered", "data": user.to_dict()}), 201


def login():
    data = request.get_json() or {}
    email = (data.get("email") or "").lower().strip()
    password = data.get("password")

    if not email or not password:
        return jsonify({"message": "Email and password required", "success": False}), 400

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        return jsonify({"message": "Invalid credentials", "success": False}), 401

    access_token = create_access_token(identity=str(user.id))

    return jsonify({
        "message": "Login successful",
        "success": True,
        "user": user.to_dict(),
        "access_token": access_token
    }), 200
