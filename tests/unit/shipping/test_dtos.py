"""Unit tests for the freight API wire DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.shipping.dtos import (
    FreightQuoteRequestDTO,
    ShippingItemDTO,
    ShippingResponseWrapper,
    ShippingServiceResponse,
)

pytestmark = pytest.mark.unit


class TestShippingItemDTO:
    def test_to_wire_omits_unset_optional_keys(self):
        item = ShippingItemDTO(height=2, length=33, width=47, weight=1)

        assert item.to_wire() == {
            "Height": 2.0,
            "Length": 33.0,
            "Quantity": 1,
            "Weight": 1.0,
            "Width": 47.0,
        }

    def test_to_wire_includes_sku_and_category_when_set(self):
        item = ShippingItemDTO(
            height=1, length=2, width=3, weight=0.5, quantity=2, sku="SKU-1", category="Books"
        )

        wire = item.to_wire()
        assert wire["SKU"] == "SKU-1"
        assert wire["Category"] == "Books"
        assert wire["Quantity"] == 2

    def test_non_positive_dimensions_rejected(self):
        with pytest.raises(ValidationError):
            ShippingItemDTO(height=0, length=1, width=1, weight=1)


class TestFreightQuoteRequestDTO:
    def test_negative_invoice_value_rejected(self):
        with pytest.raises(ValidationError):
            FreightQuoteRequestDTO(
                origin="01310100", destination="20040002", invoice_value=Decimal("-1")
            )

    def test_cep_format_is_not_checked_here(self):
        dto = FreightQuoteRequestDTO(origin="123", destination="abc")
        assert dto.origin == "123"


class TestShippingServiceResponse:
    def test_string_price_and_delivery_time_are_parsed(self):
        service = ShippingServiceResponse.model_validate(
            {"ShippingPrice": "100.50", "DeliveryTime": "5", "Carrier": "Correios"}
        )

        assert service.shipping_price == Decimal("100.50")
        assert service.delivery_time == 5
        assert service.carrier == "Correios"

    @pytest.mark.parametrize("price", ["abc", "", None, "NaN", "Infinity"])
    def test_unusable_price_rejected(self, price):
        with pytest.raises(ValidationError):
            ShippingServiceResponse.model_validate(
                {"ShippingPrice": price, "DeliveryTime": "5"}
            )

    @pytest.mark.parametrize("delivery_time", ["five", "", None, "2.5"])
    def test_unusable_delivery_time_rejected(self, delivery_time):
        with pytest.raises(ValidationError):
            ShippingServiceResponse.model_validate(
                {"ShippingPrice": "10.00", "DeliveryTime": delivery_time}
            )


class TestShippingResponseWrapper:
    def test_upstream_misspelled_key_accepted(self):
        wrapper = ShippingResponseWrapper.model_validate(
            {"ShippingSevicesArray": [{"ShippingPrice": "1", "DeliveryTime": "1"}]}
        )
        assert len(wrapper.services) == 1

    def test_corrected_key_accepted(self):
        wrapper = ShippingResponseWrapper.model_validate(
            {"ShippingServicesArray": [{"ShippingPrice": "1", "DeliveryTime": "1"}]}
        )
        assert len(wrapper.services) == 1

    def test_missing_key_yields_none(self):
        assert ShippingResponseWrapper.model_validate({}).services is None

    def test_entries_without_price_are_kept_raw(self):
        wrapper = ShippingResponseWrapper.model_validate(
            {"ShippingSevicesArray": [{"Error": True, "Msg": "Servico indisponivel"}]}
        )
        assert wrapper.services == [{"Error": True, "Msg": "Servico indisponivel"}]
