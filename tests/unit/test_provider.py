# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest
from http_v4_signers._provider import (
    MAX_PROVIDER_LENGTH,
    ProviderContext,
    normalize_provider,
)
from http_v4_signers.exceptions import InvalidProviderError, ProviderTooLongError


@pytest.mark.parametrize(
    "provider,expected",
    [
        (
            "osc",
            ProviderContext(
                upper_short="OSC",
                lower_short="osc",
                upper_full="OSC",
                lower_full="osc",
                title_full="Osc",
            ),
        ),
        (
            "X",
            ProviderContext(
                upper_short="X",
                lower_short="x",
                upper_full="X",
                lower_full="x",
                title_full="X",
            ),
        ),
        (
            "os:OUT",
            ProviderContext(
                upper_short="OS",
                lower_short="os",
                upper_full="OUT",
                lower_full="out",
                title_full="Out",
            ),
        ),
    ],
)
def test_normalize_provider(provider: str, expected: ProviderContext) -> None:
    assert normalize_provider(provider) == expected


def test_derived_names() -> None:
    context = normalize_provider("os:OUT")
    assert context.algorithm == "OUT4-HMAC-SHA256"
    assert context.request_type == "os4_request"
    assert context.secret_prefix == "OS4"
    assert context.date_field_name == "X-Out-Date"
    assert context.canonical_date_field_name == "x-out-date"


def test_max_length_boundary() -> None:
    normalize_provider("a" * MAX_PROVIDER_LENGTH)
    with pytest.raises(ProviderTooLongError):
        normalize_provider("a" * (MAX_PROVIDER_LENGTH + 1))


@pytest.mark.parametrize("provider", ["abcd:x", "x:abcd", "abcd"])
def test_provider_too_long(provider: str) -> None:
    with pytest.raises(ProviderTooLongError):
        normalize_provider(provider)


@pytest.mark.parametrize("provider", ["", ":osc", "osc:"])
def test_empty_provider_part(provider: str) -> None:
    with pytest.raises(InvalidProviderError):
        normalize_provider(provider)


def test_custom_max_length() -> None:
    context = normalize_provider("outscale", max_length=8)
    assert context.title_full == "Outscale"


@pytest.mark.parametrize("provider", ["ßßß", "x:ßß", "ééé"])
def test_case_variants_are_bounded(provider: str) -> None:
    with pytest.raises(ProviderTooLongError):
        normalize_provider(provider)


def test_empty_part_reported_before_length() -> None:
    with pytest.raises(InvalidProviderError):
        normalize_provider("abcd:")
