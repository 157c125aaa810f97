"""Proposal pipeline - runs the calculation stages for one roadmap.

The pipeline:
1. Normalizes the roadmap into a profile
2. Estimates the DIY cost from the profile
3. Projects the revenue opportunity for the business model
4. Prices the vendor quote from the DIY cost
5. Checks the quote's consistency (advisory only)

Each stage consumes the previous stage's output plus its own immutable
config; nothing is shared between runs.
"""

from typing import Optional, Dict, Any, Union
from pathlib import Path
from datetime import datetime
import json

import structlog
from pydantic import ValidationError

from contracts import (
    PipelineConfig,
    PricingInput,
    PricingOptions,
    ProposalCalculation,
    RevenueInput,
    RoadmapInput,
)
from errors import QuoterError, invalid_input_from_validation
from estimators import CostEstimator, PriceCalculator, RevenueProjector, cost_input_from_profile
from normalizer import RoadmapNormalizer
from validators import ConsistencyChecker
from config import settings

logger = structlog.get_logger()


def new_run_id(now: Optional[datetime] = None) -> str:
    """Timestamped run id, unique to the microsecond."""
    return f"run_{(now or datetime.now()).strftime('%Y%m%d_%H%M%S_%f')}"


class ProposalPipeline:
    """Linear Normalizer -> Cost -> Revenue -> Pricing -> Consistency pipeline."""

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        output_dir: Optional[str] = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Stage tables; defaults to PipelineConfig.from_settings()
            output_dir: Directory for saved calculations

        Raises:
            ConfigurationError: If any stage table is unusable
        """
        self.config = config or PipelineConfig.from_settings()
        self.output_dir = Path(output_dir or settings.output_dir)

        self.normalizer = RoadmapNormalizer(self.config.normalizer)
        self.cost_estimator = CostEstimator(self.config.cost)
        self.revenue_projector = RevenueProjector(self.config.revenue)
        self.price_calculator = PriceCalculator(self.config.pricing)
        self.consistency_checker = ConsistencyChecker(self.config.consistency)

    def run(
        self,
        roadmap: Union[RoadmapInput, str],
        options: Optional[PricingOptions] = None,
    ) -> ProposalCalculation:
        """Run every stage for one roadmap.

        Args:
            roadmap: RoadmapInput or bare roadmap text
            options: Add-on flags, currency and per-run overrides

        Returns:
            ProposalCalculation with every stage output

        Raises:
            InvalidInput: If a stage rejects its input
            ConfigurationError: If an override makes a stage table unusable
        """
        if isinstance(roadmap, str):
            try:
                roadmap = RoadmapInput(roadmap_text=roadmap)
            except ValidationError as e:
                raise invalid_input_from_validation(e, context="RoadmapInput") from e
        options = options or PricingOptions()
        currency = options.currency or self.config.currency
        geography = options.geography_focus or self.config.geography

        log = logger.bind(text_length=len(roadmap.roadmap_text))
        log.info("pipeline_started")

        profile = self.normalizer.normalize(roadmap)
        log = log.bind(complexity=profile.backend_complexity.value)

        cost = self.cost_estimator.estimate(cost_input_from_profile(
            profile,
            currency=currency,
            stage_percentages=options.stage_percentages,
            hourly_rates=options.hourly_rates,
        ))

        revenue = self.revenue_projector.project(RevenueInput(
            business_model=profile.business_model,
            product_description=roadmap.roadmap_text,
            target_market=profile.market_category,
            geography_focus=geography,
            currency=currency,
            market_parameters=options.market_parameters,
        ))

        pricing = self.price_calculator.quote(PricingInput(
            diy_cost=cost.total_diy_cost,
            complexity=profile.backend_complexity,
            compliance_requirements=profile.compliance_requirements,
            expedited_delivery=options.expedited_delivery,
            extended_support=options.extended_support,
            currency=currency,
        ))

        consistency = self.consistency_checker.check_quote(pricing)

        log.info(
            "pipeline_completed",
            diy_cost=cost.total_diy_cost,
            total_price=pricing.total_price,
            savings_percentage=pricing.savings_percentage,
            is_consistent=consistency.is_consistent,
        )

        return ProposalCalculation(
            roadmap=roadmap,
            profile=profile,
            cost=cost,
            revenue=revenue,
            pricing=pricing,
            consistency=consistency,
        )

    def run_safe(
        self,
        roadmap: Union[RoadmapInput, str],
        options: Optional[PricingOptions] = None,
        save: bool = False,
    ) -> Dict[str, Any]:
        """Run the pipeline and return a result dictionary instead of raising.

        Args:
            roadmap: RoadmapInput or bare roadmap text
            options: Add-on flags, currency and per-run overrides
            save: Write calculation.json and summary.md to the output directory

        Returns:
            Dictionary with run metadata and either the calculation or the error
        """
        started = datetime.now()
        run_id = new_run_id(started)

        try:
            calculation = self.run(roadmap, options)
        except QuoterError as e:
            logger.error("pipeline_failed", run_id=run_id, code=e.code, error=e.message)
            return self._handle_error(run_id, started, e)

        completed = datetime.now()
        result = {
            "run_id": run_id,
            "status": "completed",
            "started_at": started.isoformat(),
            "completed_at": completed.isoformat(),
            "duration_seconds": round((completed - started).total_seconds(), 2),
            "calculation": calculation.model_dump(mode="json"),
        }
        if save:
            result["output_path"] = str(self.save_calculation(calculation, run_id))
        return result

    def save_calculation(self, calculation: ProposalCalculation, run_id: str) -> Path:
        """Save a calculation as JSON plus a Markdown summary.

        Returns:
            Directory the files were written to
        """
        output_path = self.output_dir / run_id
        output_path.mkdir(parents=True, exist_ok=True)

        (output_path / "calculation.json").write_text(
            calculation.model_dump_json(indent=2), encoding="utf-8"
        )
        (output_path / "summary.md").write_text(calculation.to_markdown(), encoding="utf-8")

        logger.info("calculation_saved", run_id=run_id, path=str(output_path))
        return output_path

    def _handle_error(self, run_id: str, started: datetime, error: QuoterError) -> Dict[str, Any]:
        """Build the error result dictionary."""
        completed = datetime.now()
        return {
            "run_id": run_id,
            "status": "error",
            "error": error.message,
            "error_type": type(error).__name__,
            "error_details": error.to_dict(),
            "started_at": started.isoformat(),
            "completed_at": completed.isoformat(),
            "duration_seconds": round((completed - started).total_seconds(), 2),
        }


def run_pipeline(
    roadmap_text: str,
    project_type: Optional[str] = None,
    industry: Optional[str] = None,
    options: Optional[PricingOptions] = None,
    config: Optional[PipelineConfig] = None,
) -> ProposalCalculation:
    """Convenience function to run the full calculation.

    Args:
        roadmap_text: Roadmap or PRD text to analyze
        project_type: Optional project type hint
        industry: Optional industry hint
        options: Add-on flags, currency and per-run overrides
        config: Stage tables; defaults to PipelineConfig.from_settings()

    Returns:
        ProposalCalculation with every stage output

    Raises:
        InvalidInput: If the text is blank or project_type is unknown
    """
    try:
        roadmap = RoadmapInput(
            roadmap_text=roadmap_text,
            project_type=project_type,
            industry=industry,
        )
    except ValidationError as e:
        raise invalid_input_from_validation(e, context="RoadmapInput") from e
    return ProposalPipeline(config=config).run(roadmap, options)


def calculation_to_json(calculation: ProposalCalculation) -> str:
    """Serialize a calculation with sorted keys, stable across runs."""
    return json.dumps(calculation.model_dump(mode="json"), indent=2, sort_keys=True)
