"""Unit tests for CEP validation."""

from __future__ import annotations

import pytest

from modules.shipping.validators import is_valid_cep

pytestmark = pytest.mark.unit


class TestIsValidCep:
    @pytest.mark.parametrize("cep", ["12345678", "01310100", "00000000"])
    def test_eight_digits_accepted(self, cep):
        assert is_valid_cep(cep) is True

    @pytest.mark.parametrize(
        "cep",
        [
            None,
            "",
            "        ",
            "1234567",
            "123456789",
            "1234567a",
            "1234-567",
            " 1234567",
            "1234567 ",
            "+1234567",
            "١٢٣٤٥٦٧٨",  # Arabic-Indic digits
        ],
    )
    def test_everything_else_rejected(self, cep):
        assert is_valid_cep(cep) is False
