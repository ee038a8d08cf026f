import pytest

from snake.container.group import Group


class Counter:
    def __init__(self) -> None:
        self.value = 0

    def incr(self) -> None:
        self.value += 1


def test_group_get():
    count = 0

    def new():
        nonlocal count
        count += 1
        return count

    g = Group(new)
    assert g.get("/v1/users/1") == 1
    assert g.get("/v1/users/1/avatar") == 2
    assert g.get("/v1/users/1") == 1
    assert count == 2


def test_group_reset():
    g = Group(lambda: 1)
    g.get("/v1/users/1")
    called = False

    def new():
        nonlocal called
        called = True
        return 1

    g.reset(new)
    assert len(g) == 0
    g.get("/v1/users/1")
    assert called is True


def test_group_clear():
    g = Group(lambda: 1)
    g.get("/v1/users/1")
    assert len(g) == 1
    g.clear()
    assert len(g) == 0


def test_example_get_creates_only_once(capsys):
    def new():
        print("Only Once")
        return Counter()

    group = Group(new)
    group.get("pass").incr()
    group.get("pass").incr()
    assert capsys.readouterr().out == "Only Once\n"
    assert group.get("pass").value == 2


def test_example_reset_uses_new_factory(capsys):
    group = Group(Counter)

    def new_v2():
        print("New V2")
        return Counter()

    group.reset(new_v2)
    group.get("pass").incr()
    assert capsys.readouterr().out == "New V2\n"


def test_none_factory_rejected():
    with pytest.raises(ValueError):
        Group(None)
    g = Group(lambda: 1)
    with pytest.raises(ValueError):
        g.reset(None)