import jwt
from fastapi import Request

from eduplatform.config import get_settings
from eduplatform.model.enums import UserRole
from eduplatform.schemas.user import CurrentUser
from eduplatform.utils.exceptions import UnauthorizedException


class AuthService:
    @staticmethod
    def get_current_user(request: Request) -> CurrentUser:
        decoded = AuthService._get_decoded_jwt(request)

        user_id = decoded.get("userId") or decoded.get("sub")
        if not user_id:
            raise UnauthorizedException("Invalid token")

        return CurrentUser(
            id=str(user_id),
            role=AuthService._resolve_role(decoded),
            email=decoded.get("email"),
            name=decoded.get("fullName") or decoded.get("name"),
        )

    @staticmethod
    def _resolve_role(decoded: dict) -> UserRole:
        # Either a single "role" claim or a "roles" list; the most privileged wins
        claimed = decoded.get("roles") or []
        if decoded.get("role"):
            claimed = [decoded["role"], *claimed]

        roles = set()
        for value in claimed:
            try:
                roles.add(UserRole(str(value).lower()))
            except ValueError:
                continue

        for role in (UserRole.ADMIN, UserRole.TEACHER, UserRole.STUDENT):
            if role in roles:
                return role
        return UserRole.STUDENT

    @staticmethod
    def _get_decoded_jwt(request: Request) -> dict:
        settings = get_settings()

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            raise UnauthorizedException("Authorization header missing")
        if not auth_header.startswith("Bearer "):
            raise UnauthorizedException("Invalid Authorization header format")
        token = auth_header.split(" ", 1)[1]

        try:
            if settings.jwt_verify_signature:
                decoded = jwt.decode(
                    token,
                    settings.jwt_secret,
                    algorithms=[settings.jwt_algorithm],
                )
            else:
                decoded = jwt.decode(token, options={"verify_signature": False})
        except jwt.ExpiredSignatureError:
            raise UnauthorizedException("Token expired")
        except jwt.InvalidTokenError:
            raise UnauthorizedException("Invalid token")
        return decoded
