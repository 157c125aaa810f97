"""Tests for the tool registry."""

from unittest.mock import patch

import pytest

from errors import ConfigurationError, InvalidInput, ToolUpstreamFailure
from tools import TOOLS, get_tool, invoke_tool, list_tools


EXPECTED_TOOLS = [
    "normalizeRoadmapInput",
    "calculateDIYCost",
    "calculateRevenueProjections",
    "calculatePricing",
    "validateConsistency",
    "validateResponse",
    "runDirectCalculation",
]


class TestRegistry:
    """Lookup and description of tools."""

    def test_all_tools_registered(self):
        assert list(TOOLS) == EXPECTED_TOOLS

    def test_list_tools_has_schemas(self):
        described = list_tools()
        assert [t["name"] for t in described] == EXPECTED_TOOLS
        cost = next(t for t in described if t["name"] == "calculateDIYCost")
        assert "backend_hours" in cost["parameters"]["properties"]
        assert "backend_hours" in cost["parameters"]["required"]

    def test_output_schema(self):
        schema = get_tool("calculatePricing").output_schema()
        assert "core_price" in schema["properties"]

    def test_unknown_tool(self):
        with pytest.raises(InvalidInput) as exc:
            invoke_tool("calculateEverything", {})
        assert exc.value.field == "name"


class TestInvokeTool:
    """Dict in, dict out, typed errors."""

    def test_normalize(self):
        result = invoke_tool("normalizeRoadmapInput", {"roadmap_text": "authentication and dashboard"})
        assert result["backend_complexity"] == "medium"
        assert result["estimated_backend_hours"] == 160

    def test_cost(self):
        result = invoke_tool("calculateDIYCost", {"backend_hours": 160, "complexity": "medium"})
        assert result["total_diy_cost"] == 50940

    def test_revenue(self):
        result = invoke_tool("calculateRevenueProjections", {"business_model": "b2b"})
        assert result["monthly_revenue_potential"] == 6300

    def test_pricing(self):
        result = invoke_tool("calculatePricing", {"diy_cost": 252000, "complexity": "medium"})
        assert result["core_price"] == 93000
        assert result["savings_percentage"] == 63

    def test_consistency(self):
        result = invoke_tool(
            "validateConsistency", {"complexity": "medium", "diy_cost": 100000, "price": 50000}
        )
        assert result["is_consistent"] is False
        assert result["consistency_score"] == 85

    def test_response(self):
        result = invoke_tool("validateResponse", {"proposed_response": "You must act now"})
        assert result["is_valid"] is False

    def test_direct_calculation(self):
        result = invoke_tool("runDirectCalculation", {
            "roadmap_text": "authentication and dashboard",
            "options": {"expedited_delivery": True},
        })
        assert result["pricing"]["total_price"] == 23000
        assert result["consistency"]["is_consistent"] is True

    def test_missing_field(self):
        with pytest.raises(InvalidInput) as exc:
            invoke_tool("calculatePricing", {"complexity": "medium"})
        assert exc.value.field == "diy_cost"

    def test_bad_enum(self):
        with pytest.raises(InvalidInput) as exc:
            invoke_tool("calculateRevenueProjections", {"business_model": "lemonade"})
        assert exc.value.field == "business_model"

    def test_stage_invalid_input_passes_through(self):
        with pytest.raises(InvalidInput) as exc:
            invoke_tool("calculatePricing", {"diy_cost": 0, "complexity": "medium"})
        assert exc.value.field == "diy_cost"

    def test_unknown_override_key(self):
        with pytest.raises(InvalidInput) as exc:
            invoke_tool("calculateDIYCost", {
                "backend_hours": 160,
                "complexity": "medium",
                "hourly_rates": {"htmlMarkup": 500},
            })
        assert exc.value.field == "hourly_rates.htmlMarkup"

    def test_infinite_override_is_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc:
            invoke_tool("calculateRevenueProjections", {
                "business_model": "saas",
                "market_parameters": {"saas_arpu": float("inf")},
            })
        assert exc.value.field == "market_parameters.saas_arpu"

    def test_configuration_error_passes_through(self):
        with pytest.raises(ConfigurationError):
            invoke_tool("calculateDIYCost", {
                "backend_hours": 160,
                "complexity": "medium",
                "stage_percentages": {"backend": 0},
            })

    def test_unexpected_failure_wrapped(self):
        with patch("tools.registry.RoadmapNormalizer.normalize", side_effect=RuntimeError("boom")):
            with pytest.raises(ToolUpstreamFailure) as exc:
                invoke_tool("normalizeRoadmapInput", {"roadmap_text": "anything"})
        assert exc.value.tool == "normalizeRoadmapInput"
        assert exc.value.message == "boom"
        assert exc.value.details["error_type"] == "RuntimeError"
