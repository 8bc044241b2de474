# fitcoach/services/identity.py

from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError
from sqlalchemy.exc import IntegrityError

from .. import db
from ..errors import Conflict, InvalidCredentials, Unauthenticated
from ..guard import Caller, caller_from_claims
from ..models.user import User
from ..validation import clean_login, clean_registration


def register(data) -> User:
    fields = clean_registration(data)

    if User.query.filter_by(email=fields["email"]).first():
        raise Conflict("Email already in use")

    user = User(email=fields["email"], role=fields["role"])
    user.set_password(fields["password"])

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Email already in use")

    current_app.logger.info(f"[auth/register] user_id={user.id} role={user.role}")
    return user


def issue_token(user: User) -> str:
    # lifetime comes from JWT_ACCESS_TOKEN_EXPIRES
    return create_access_token(identity=str(user.id), additional_claims={"role": user.role})


def authenticate(data):
    """Returns ``(token, user)`` for a matching email/password pair."""
    fields = clean_login(data)

    user = User.query.filter_by(email=fields["email"]).first()
    if not user:
        current_app.logger.info(f"[auth/login] user NOT found for '{fields['email']}'")
        raise InvalidCredentials()

    if not user.check_password(fields["password"]):
        current_app.logger.info(f"[auth/login] bad password for user_id={user.id}")
        raise InvalidCredentials()

    return issue_token(user), user


def verify_token(token) -> Caller:
    """
    Decode a raw bearer token into a Caller.

    Routes do not call this: they authenticate through ``roles_required`` or
    ``jwt_required``, whose claims then go through ``caller_from_claims``.
    Both paths end in that same check, so a token is accepted by one exactly
    when it is accepted by the other.
    """
    if not token:
        raise Unauthenticated("No token provided")
    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException):
        raise Unauthenticated()
    return caller_from_claims(claims.get("sub"), claims)
