"""Assembling the user data shown to clients."""

from __future__ import annotations

from dataclasses import dataclass

from snake.model.user import UserBaseModel, UserFollow, UserInfo, UserStatModel


@dataclass
class TransferUserInput:
    """Everything needed to build a UserInfo."""

    cur_user: UserBaseModel | None = None
    user: UserBaseModel | None = None
    user_stat: UserStatModel | None = None
    is_follow: int = 0
    is_fans: int = 0


def _transfer_user_follow(input: TransferUserInput) -> UserFollow:
    stat = input.user_stat
    return UserFollow(
        follow_num=stat.follow_count if stat is not None else 0,
        fans_num=stat.follower_count if stat is not None else 0,
        is_follow=input.is_follow,
        is_fans=input.is_fans,
    )


def transfer_user(input: TransferUserInput) -> UserInfo:
    """Build the client-facing UserInfo; an empty one when there is no user."""
    if input.user is None:
        return UserInfo()
    user = input.user
    return UserInfo(
        id=user.id,
        username=user.username,
        avatar=user.avatar,
        sex=user.sex,
        user_follow=_transfer_user_follow(input),
    )