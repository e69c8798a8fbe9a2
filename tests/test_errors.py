import pytest

from app.errors import (
    BUSINESS_CODES,
    SYSTEM_CODES,
    AppError,
    ErrorCode,
    OpaqueFailure,
    StructuredFailure,
    as_app_error,
    chain_contains,
    classify,
    is_error_code,
    iter_chain,
    new,
    status_for_code,
    wrap,
    wrapf,
)


@pytest.mark.parametrize(
    ("code", "expected_status"),
    [
        (ErrorCode.VALIDATION, 400),
        (ErrorCode.NOT_FOUND, 404),
        (ErrorCode.ALREADY_EXISTS, 409),
        (ErrorCode.UNAUTHORIZED, 401),
        (ErrorCode.FORBIDDEN, 403),
        (ErrorCode.DATABASE, 500),
        (ErrorCode.EXTERNAL, 500),
        (ErrorCode.INTERNAL, 500),
        (ErrorCode.TIMEOUT, 500),
    ],
)
def test_status_code_is_derived_from_code(code, expected_status):
    assert new(code, "message").status_code == expected_status


@pytest.mark.parametrize("code", ["TEAPOT", "RATE_LIMITED", ""])
def test_unregistered_codes_map_to_500(code):
    assert new(code, "message").status_code == 500
    assert status_for_code(code) == 500


def test_string_codes_are_normalized_to_enum():
    err = new("NOT_FOUND", "User not found")
    assert err.code is ErrorCode.NOT_FOUND
    assert err.status_code == 404


def test_status_code_cannot_be_set_independently():
    err = new(ErrorCode.NOT_FOUND, "User not found")
    with pytest.raises(AttributeError):
        err.status_code = 200  # type: ignore[misc]


def test_code_classes_partition_all_codes():
    assert BUSINESS_CODES | SYSTEM_CODES == set(ErrorCode)
    assert not BUSINESS_CODES & SYSTEM_CODES
    assert new(ErrorCode.DATABASE, "x").is_system_error
    assert not new(ErrorCode.FORBIDDEN, "x").is_system_error


def test_new_has_no_cause():
    err = new(ErrorCode.VALIDATION, "Invalid input")
    assert err.unwrap() is None
    assert err.details is None
    assert str(err) == "VALIDATION_ERROR: Invalid input"


def test_wrap_preserves_cause_identity():
    original = ConnectionError("connection refused on 10.0.0.5:5432")

    err = wrap(original, ErrorCode.DATABASE, "x")

    assert err.unwrap() is original
    assert err.__cause__ is original
    assert err.status_code == 500
    assert err.details is None
    assert str(err) == "DATABASE_ERROR: x (caused by: connection refused on 10.0.0.5:5432)"


def test_wrapf_formats_message():
    err = wrapf(TimeoutError(), ErrorCode.TIMEOUT, "Call to %s timed out after %ds", "billing", 5)
    assert err.message == "Call to billing timed out after 5s"
    assert err.status_code == 500


def test_wrapf_without_args_keeps_message_verbatim():
    err = wrapf(ValueError(), ErrorCode.INTERNAL, "100% broken")
    assert err.message == "100% broken"


def test_is_error_code_matches_wrapped_code():
    err = wrap(RuntimeError("db down"), ErrorCode.DATABASE, "x")

    assert is_error_code(err, ErrorCode.DATABASE) is True
    for other in set(ErrorCode) - {ErrorCode.DATABASE}:
        assert is_error_code(err, other) is False


def test_is_error_code_walks_the_chain():
    inner = new(ErrorCode.NOT_FOUND, "User not found")
    outer = wrap(inner, ErrorCode.INTERNAL, "Lookup failed")
    plain = RuntimeError("handler crashed")
    plain.__cause__ = outer

    assert is_error_code(plain, ErrorCode.NOT_FOUND)
    assert is_error_code(plain, ErrorCode.INTERNAL)
    assert not is_error_code(plain, ErrorCode.FORBIDDEN)
    assert as_app_error(plain) is outer


def test_is_error_code_does_not_match_message_text():
    err = RuntimeError("NOT_FOUND")
    assert is_error_code(err, ErrorCode.NOT_FOUND) is False
    assert is_error_code(None, ErrorCode.NOT_FOUND) is False


def test_iter_chain_is_linear_and_ordered():
    root = OSError("disk")
    middle = wrap(root, ErrorCode.DATABASE, "write failed")
    top = wrap(middle, ErrorCode.INTERNAL, "request failed")

    assert list(iter_chain(top)) == [top, middle, root]


def test_iter_chain_stops_on_cycles():
    first = new(ErrorCode.INTERNAL, "a")
    second = wrap(first, ErrorCode.INTERNAL, "b")
    first.__cause__ = second

    assert list(iter_chain(second)) == [second, first]


def test_raise_from_keeps_the_same_cause():
    original = KeyError("user_id")
    with pytest.raises(AppError) as exc:
        raise wrap(original, ErrorCode.NOT_FOUND, "User not found") from original
    assert exc.value.unwrap() is original


def test_classify_is_a_tagged_variant():
    app_error = new(ErrorCode.FORBIDDEN, "Not enough permissions")
    opaque = ValueError("secret internals")

    assert classify(app_error) == StructuredFailure(app_error)
    assert classify(opaque) == OpaqueFailure(opaque)


def test_classify_finds_app_error_inside_chain():
    app_error = new(ErrorCode.UNAUTHORIZED, "Token expired")
    outer = RuntimeError("middleware failure")
    outer.__cause__ = app_error

    failure = classify(outer)

    assert isinstance(failure, StructuredFailure)
    assert failure.error is app_error


def test_chain_contains_checks_identity():
    root = OSError("disk")
    err = wrap(wrap(root, ErrorCode.DATABASE, "write failed"), ErrorCode.INTERNAL, "request failed")

    assert chain_contains(err, root)
    assert chain_contains(err, err)
    assert not chain_contains(err, OSError("disk"))
