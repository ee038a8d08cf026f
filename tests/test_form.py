from snake.app.form import ValidError, ValidErrors


def test_valid_error_reads_as_message():
    err = ValidError("email", "email is required")
    assert str(err) == "email is required"
    assert err.key == "email"


def test_valid_errors_messages_in_order():
    errs = ValidErrors([ValidError("a", "first"), ValidError("b", "second")])
    assert errs.errors() == ["first", "second"]
    assert str(errs) == "first,second"


def test_empty_valid_errors():
    errs = ValidErrors()
    assert errs.errors() == []
    assert str(errs) == ""


def test_valid_errors_join_matches_messages():
    items = [ValidError(f"k{i}", f"m{i}") for i in range(5)]
    errs = ValidErrors(items)
    assert str(errs).split(",") == [e.message for e in items]
    assert len(errs) == 5