from composite_stream import exceptions


def test_exit_codes():
    all_excs = [
        getattr(exceptions, ex)
        for ex in dir(exceptions)
        if ex.startswith("CompositeStream") and ex.endswith("Error")
    ]
    user_excs = [
        exc
        for exc in all_excs
        if exc is not exceptions.CompositeStreamUserError
        and issubclass(exc, exceptions.CompositeStreamUserError)
    ]
    assert user_excs

    exit_codes = [exc.exit_code for exc in user_excs]
    assert len(set(exit_codes)) == len(exit_codes)
    assert all(0 < code < 128 for code in exit_codes)


def test_misuse_is_value_error():
    assert issubclass(exceptions.CompositeStreamMisuseError, ValueError)
