"""Registry of the calculation stages exposed as callable tools.

Each tool takes a JSON-style dict, validates it against the stage's input
contract, runs the stage and returns the output contract as a dict.
"""

from typing import Any, Callable, Dict, List, Optional, Type

import structlog
from pydantic import BaseModel, ValidationError

from contracts import (
    ConsistencyInput,
    ConsistencyReport,
    CostBreakdown,
    CostInput,
    DirectCalculationInput,
    NormalizedProfile,
    PriceQuote,
    PricingInput,
    ProposalCalculation,
    ResponseCheck,
    ResponseCheckInput,
    RevenueInput,
    RevenueProjection,
    RoadmapInput,
)
from errors import InvalidInput, QuoterError, ToolUpstreamFailure, invalid_input_from_validation
from estimators import estimate_diy_cost, project_revenue, calculate_price
from normalizer import RoadmapNormalizer
from orchestrator import ProposalPipeline
from validators import validate_consistency, ResponseValidator

logger = structlog.get_logger()


class ToolSpec(BaseModel):
    """A named stage with its input and output contracts."""
    name: str
    description: str
    input_model: Type[BaseModel]
    output_model: Type[BaseModel]
    handler: Callable[[Any], BaseModel]

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema()

    def output_schema(self) -> Dict[str, Any]:
        return self.output_model.model_json_schema()

    def describe(self) -> Dict[str, Any]:
        """Name, description and input schema in function-calling shape."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.input_schema(),
        }


def _run_direct(calc_input: DirectCalculationInput) -> ProposalCalculation:
    roadmap = RoadmapInput(
        roadmap_text=calc_input.roadmap_text,
        project_type=calc_input.project_type,
        industry=calc_input.industry,
    )
    return ProposalPipeline().run(roadmap, calc_input.options)


TOOLS: Dict[str, ToolSpec] = {
    tool.name: tool
    for tool in [
        ToolSpec(
            name="normalizeRoadmapInput",
            description="Extract features, complexity, business model and compliance needs from roadmap text.",
            input_model=RoadmapInput,
            output_model=NormalizedProfile,
            handler=lambda i: RoadmapNormalizer().normalize(i),
        ),
        ToolSpec(
            name="calculateDIYCost",
            description="Estimate the full cost of building the project with an in-house team.",
            input_model=CostInput,
            output_model=CostBreakdown,
            handler=estimate_diy_cost,
        ),
        ToolSpec(
            name="calculateRevenueProjections",
            description="Project monthly revenue potential and the cost of delaying launch.",
            input_model=RevenueInput,
            output_model=RevenueProjection,
            handler=project_revenue,
        ),
        ToolSpec(
            name="calculatePricing",
            description="Price the partner quote from the DIY cost, with modular add-ons.",
            input_model=PricingInput,
            output_model=PriceQuote,
            handler=calculate_price,
        ),
        ToolSpec(
            name="validateConsistency",
            description="Check a quoted price against the expected multiplier for its tier.",
            input_model=ConsistencyInput,
            output_model=ConsistencyReport,
            handler=validate_consistency,
        ),
        ToolSpec(
            name="validateResponse",
            description="Screen a drafted sales reply for monetary guarantees and pressure tactics.",
            input_model=ResponseCheckInput,
            output_model=ResponseCheck,
            handler=lambda i: ResponseValidator().validate(i),
        ),
        ToolSpec(
            name="runDirectCalculation",
            description="Run the whole calculation for one roadmap in a single call.",
            input_model=DirectCalculationInput,
            output_model=ProposalCalculation,
            handler=_run_direct,
        ),
    ]
}


def get_tool(name: str) -> ToolSpec:
    """Look up a tool by name.

    Raises:
        InvalidInput: If no tool has that name
    """
    if name not in TOOLS:
        raise InvalidInput(
            f"Unknown tool: {name}. Available: {list(TOOLS.keys())}",
            field="name",
        )
    return TOOLS[name]


def list_tools() -> List[Dict[str, Any]]:
    """Describe every registered tool."""
    return [tool.describe() for tool in TOOLS.values()]


def invoke_tool(name: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Validate a payload, run the named stage and return its output as a dict.

    Raises:
        InvalidInput: Unknown tool or payload failing the input contract
        ConfigurationError: If an override leaves a stage table unusable
        ToolUpstreamFailure: Any other failure inside the stage
    """
    tool = get_tool(name)

    try:
        tool_input = tool.input_model.model_validate(payload or {})
    except ValidationError as e:
        raise invalid_input_from_validation(e, context=name) from e

    try:
        result = tool.handler(tool_input)
    except QuoterError:
        raise
    except Exception as e:
        logger.error("tool_failed", tool=name, error=str(e))
        raise ToolUpstreamFailure.from_exception(name, e) from e

    logger.debug("tool_invoked", tool=name)
    return result.model_dump(mode="json")
