"""Tests for per-call config and transport option merging."""

import pytest
from pydantic import ValidationError

from hookhttp.http.cancellation import CancellationToken
from hookhttp.http.models import (
    DEFAULT_CONFIG,
    ClientConfig,
    HttpMethod,
    RequestOptions,
    is_success_status,
)


class TestClientConfig:
    def test_default_config_enables_events(self) -> None:
        assert DEFAULT_CONFIG.with_events is True
        assert DEFAULT_CONFIG.params is None
        assert DEFAULT_CONFIG.body is None
        assert DEFAULT_CONFIG.cancellation_token is None

    def test_merge_none_returns_same_instance(self) -> None:
        assert DEFAULT_CONFIG.merged(None) is DEFAULT_CONFIG

    def test_merge_empty_mapping_changes_nothing(self) -> None:
        merged = DEFAULT_CONFIG.merged({})

        assert merged == DEFAULT_CONFIG
        assert not merged.defines("body")

    def test_caller_overrides_win(self) -> None:
        base = ClientConfig(params={"a": 1}, with_events=True)

        merged = base.merged(ClientConfig(with_events=False))

        assert merged.with_events is False
        assert merged.params == {"a": 1}

    def test_explicit_none_is_an_override(self) -> None:
        base = ClientConfig(body="payload")

        merged = base.merged({"body": None})

        assert merged.body is None
        assert merged.defines("body")

    def test_params_keep_insertion_order(self) -> None:
        config = ClientConfig(params={"z": 1, "a": 2, "m": 3})

        assert list(config.params) == ["z", "a", "m"]

    def test_is_frozen(self) -> None:
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.with_events = False  # type: ignore[misc]

    def test_token_type_is_checked(self) -> None:
        token = CancellationToken(lambda controller: None)

        assert ClientConfig(cancellation_token=token).cancellation_token is token
        with pytest.raises(ValidationError):
            ClientConfig(cancellation_token="soon")  # type: ignore[arg-type]


class TestRequestOptions:
    def test_defaults(self) -> None:
        options = RequestOptions()

        assert options.mode == "cors"
        assert options.redirect == "follow"
        assert options.headers == {}
        assert options.timeout is None

    def test_merge_replaces_whole_fields(self) -> None:
        defaults = RequestOptions(
            method=HttpMethod.GET, body="a", headers={"X-A": "1"}
        )

        merged = defaults.merged({"headers": {"X-B": "2"}})

        # Nested values are replaced, not deep-merged
        assert merged.headers == {"X-B": "2"}
        assert merged.method == HttpMethod.GET
        assert merged.body == "a"

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            RequestOptions.model_validate({"credentials": "include"})

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            RequestOptions(timeout=0)


@pytest.mark.parametrize(
    "status,expected",
    [(199, False), (200, True), (204, True), (302, True), (399, True), (400, False), (500, False)],
)
def test_is_success_status(status: int, expected: bool) -> None:
    assert is_success_status(status) is expected
