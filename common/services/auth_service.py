from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from ..errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..models.user import ROLE_USER, CurrentUser, User
from ..utils.validators import require_text
from .logging import log_event

MIN_PASSWORD_LENGTH = 6
TOKEN_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


class AuthService:
    """Registration, login sessions, bearer tokens and profile updates.

    A token is only accepted while the login session it names (``sid``) is
    still open in the session store, so logging out invalidates it.
    """

    def __init__(self, user_repo, sessions, *, secret: str, token_ttl: timedelta):
        self._users = user_repo
        self._sessions = sessions
        self._secret = secret
        self._ttl = token_ttl

    def register(self, *, username: str, email: str, password: str) -> User:
        username = require_text(username)
        email = require_text(email)
        password = password if isinstance(password, str) else ""
        if not username or not email or not password:
            raise ValidationError("使用者名稱、email 與密碼皆為必填。")
        self._check_password(password)

        def _unique(existing: List[User]) -> None:
            self._ensure_unique(existing, username, email)

        user = self._users.add_user(
            User(id=0, username=username, email=email, password=hash_password(password), role=ROLE_USER),
            check=_unique,
        )
        log_event("info", "user.registered", user_id=user.id)
        return user

    def login(self, *, email: str, password: str) -> Tuple[str, User]:
        email = require_text(email)
        if not email or not isinstance(password, str) or not password:
            raise ValidationError("email 與密碼為必填。")
        user = self._users.find_by_email(email)
        if user is None or not check_password_hash(user.password, password):
            raise AuthenticationError("email 或密碼錯誤。")
        sid = self._sessions.open_session(user.id)
        return self.issue_token(user, sid), user

    def logout(self, current: CurrentUser) -> None:
        self._sessions.close_session(current.sid)

    def update_profile(
        self,
        current: CurrentUser,
        *,
        username: str,
        email: str,
        password: Optional[str] = None,
    ) -> Tuple[str, User]:
        username = require_text(username)
        email = require_text(email)
        if not username or not email:
            raise ValidationError("使用者名稱與 email 為必填。")
        new_hash = None
        if password is not None and not isinstance(password, str):
            raise ValidationError("密碼格式錯誤。")
        if password:
            self._check_password(password)
            new_hash = hash_password(password)

        def _apply(user: User, others: List[User]) -> User:
            self._ensure_unique(others, username, email)
            user.username = username
            user.email = email
            if new_hash:
                user.password = new_hash
            return user

        updated = self._users.update_user(current.id, _apply)
        if updated is None:
            raise NotFoundError("找不到使用者。")
        return self.issue_token(updated, current.sid), updated

    def issue_token(self, user: User, sid: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": user.id,
            "username": user.username,
            "role": user.role,
            "sid": sid,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def authenticate(self, token: Optional[str]) -> CurrentUser:
        if not token:
            raise AuthenticationError("需要登入憑證。")
        try:
            claims = jwt.decode(token, self._secret, algorithms=[TOKEN_ALGORITHM])
        except jwt.PyJWTError:
            raise AuthenticationError("登入憑證無效或已過期。") from None
        user_id = claims.get("id")
        sid = claims.get("sid")
        if not isinstance(user_id, int) or not sid:
            raise AuthenticationError("登入憑證無效或已過期。")
        if not self._sessions.is_active(sid, user_id):
            raise AuthenticationError("登入狀態已失效，請重新登入。")
        return CurrentUser(
            id=user_id,
            username=str(claims.get("username", "")),
            role=str(claims.get("role", ROLE_USER)),
            sid=sid,
        )

    @staticmethod
    def _check_password(password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"密碼長度至少需要 {MIN_PASSWORD_LENGTH} 個字元。")

    @staticmethod
    def _ensure_unique(users: List[User], username: str, email: str) -> None:
        lowered = email.lower()
        for other in users:
            if other.username == username or other.email.lower() == lowered:
                raise ConflictError("Email 或使用者名稱已被使用。")
