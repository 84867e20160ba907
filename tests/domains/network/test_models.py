"""Tests for network models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from virtui.domains.network.models import (
    DnatRule,
    DnatRuleCreate,
    ElasticIPCreate,
    LoadBalancerCreate,
    NatRule,
    NatRuleKind,
    SnatRule,
)


class TestNatRuleUnion:
    """Test the SNAT/DNAT discriminated union."""

    def test_type_selects_variant(self) -> None:
        """The type tag decides which view a payload parses into."""
        adapter = TypeAdapter(list[NatRule])

        rules = adapter.validate_python(
            [
                {"name": "s", "type": "SNAT", "internalCidr": "10.0.0.0/24"},
                {"name": "d", "type": "DNAT", "externalPort": "80"},
            ]
        )

        assert isinstance(rules[0], SnatRule)
        assert isinstance(rules[1], DnatRule)
        assert rules[1].protocol == "tcp"

    def test_unknown_type_rejected(self) -> None:
        """Only SNAT and DNAT exist."""
        with pytest.raises(ValidationError):
            TypeAdapter(NatRule).validate_python({"name": "x", "type": "FIP"})

    def test_views_serialize_type(self) -> None:
        """Serialized views carry their type tag."""
        assert SnatRule(name="s").to_response()["type"] == "SNAT"
        assert DnatRule(name="d").to_response()["type"] == "DNAT"

    def test_kind_values(self) -> None:
        """Kinds parse from their wire values."""
        assert NatRuleKind("SNAT") is NatRuleKind.SNAT
        with pytest.raises(ValueError):
            NatRuleKind("snat-ish")


class TestRequests:
    """Test request validation."""

    def test_eip_requires_nat_gateway(self) -> None:
        """An EIP always belongs to a NAT gateway."""
        with pytest.raises(ValidationError):
            ElasticIPCreate.model_validate({"name": "eip1"})

    def test_dnat_requires_ports(self) -> None:
        """DNAT rules need both ports."""
        with pytest.raises(ValidationError):
            DnatRuleCreate.model_validate(
                {"name": "d", "eip": "e", "internalIp": "10.0.0.5", "natGw": "gw"}
            )

    def test_load_balancer_port_range(self) -> None:
        """Ports must be valid TCP/UDP port numbers."""
        with pytest.raises(ValidationError):
            LoadBalancerCreate.model_validate({"name": "lb", "ports": [{"port": 0}]})

    def test_load_balancer_target_port_alias(self) -> None:
        """targetPort is read from its camelCase name."""
        request = LoadBalancerCreate.model_validate(
            {"name": "lb", "ports": [{"port": 80, "targetPort": "http"}]}
        )
        assert request.ports[0].target_port == "http"
