from snake.model.user import UserBaseModel, UserInfo, UserStatModel
from snake.service.trans import TransferUserInput, transfer_user


def test_no_user_gives_empty_info():
    assert transfer_user(TransferUserInput()) == UserInfo()


def test_fields_copied_with_stats():
    user = UserBaseModel(id=3, username="alice", avatar="a.png", sex=1)
    stat = UserStatModel(user_id=3, follow_count=4, follower_count=9)
    info = transfer_user(TransferUserInput(user=user, user_stat=stat, is_follow=1, is_fans=0))
    assert (info.id, info.username, info.avatar, info.sex) == (3, "alice", "a.png", 1)
    assert info.user_follow.follow_num == stat.follow_count
    assert info.user_follow.fans_num == stat.follower_count
    assert info.user_follow.is_follow == 1
    assert info.user_follow.is_fans == 0


def test_missing_stats_count_as_zero():
    user = UserBaseModel(id=8, username="bob")
    info = transfer_user(TransferUserInput(user=user, is_fans=1))
    assert info.user_follow.follow_num == 0
    assert info.user_follow.fans_num == 0
    assert info.user_follow.is_fans == 1