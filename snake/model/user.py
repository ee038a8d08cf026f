"""User records: base profile, follow relations and statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Mapping

from snake import auth


class ValidationError(ValueError):
    """A field value is out of its allowed range."""


_USER_JSON_FIELDS = ("id", "username", "password", "phone", "email", "avatar", "sex")


@dataclass
class UserBaseModel:
    """A registered user."""

    TABLE_NAME: ClassVar[str] = "user_base"

    id: int = 0
    username: str = ""
    password: str = ""
    phone: int = 0
    email: str = ""
    avatar: str = ""
    sex: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def validate(self) -> None:
        """Check the username is 1-32 and the password 5-128 characters long."""
        if not 1 <= len(self.username) <= 32:
            raise ValidationError("username must be between 1 and 32 characters")
        if not 5 <= len(self.password) <= 128:
            raise ValidationError("password must be between 5 and 128 characters")

    def compare(self, pwd: str) -> None:
        """Raise PasswordMismatchError unless ``pwd`` matches the stored hash."""
        auth.compare(self.password, pwd)

    def encrypt(self) -> None:
        """Replace the plain password with its bcrypt hash."""
        self.password = auth.encrypt(self.password)

    def to_dict(self) -> dict[str, Any]:
        """The JSON form; timestamps are left out."""
        return {name: getattr(self, name) for name in _USER_JSON_FIELDS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserBaseModel":
        """Build a user from its JSON form, ignoring unknown keys."""
        return cls(**{name: data[name] for name in _USER_JSON_FIELDS if name in data})


@dataclass
class UserFollow:
    """Follow counts and relation flags as shown to clients."""

    follow_num: int = 0
    fans_num: int = 0
    is_follow: int = 0
    is_fans: int = 0


@dataclass
class UserInfo:
    """The user data exposed to clients."""

    id: int = 0
    username: str = ""
    avatar: str = ""
    sex: int = 0
    user_follow: UserFollow | None = None

    def to_dict(self) -> dict[str, Any]:
        follow = self.user_follow
        return {
            "id": self.id,
            "username": self.username,
            "avatar": self.avatar,
            "sex": self.sex,
            "user_follow": None if follow is None else {
                "follow_num": follow.follow_num,
                "fans_num": follow.fans_num,
                "is_follow": follow.is_follow,
                "is_fans": follow.is_fans,
            },
        }


@dataclass
class Token:
    """A signed login token."""

    token: str = ""


@dataclass
class UserFansModel:
    """A row of the fans table."""

    TABLE_NAME: ClassVar[str] = "user_fans"

    id: int = 0
    follower_uid: int = 0
    status: int = 0
    user_id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class UserFollowModel:
    """A row of the follow table."""

    TABLE_NAME: ClassVar[str] = "user_follow"

    id: int = 0
    followed_uid: int = 0
    status: int = 0
    user_id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class UserStatModel:
    """A row of the user statistics table."""

    TABLE_NAME: ClassVar[str] = "user_stat"

    id: int = 0
    user_id: int = 0
    follow_count: int = 0
    follower_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)