"""Orchestrator module for running the calculation pipeline."""

from .pipeline import ProposalPipeline, run_pipeline, calculation_to_json, new_run_id

__all__ = [
    "ProposalPipeline",
    "run_pipeline",
    "calculation_to_json",
    "new_run_id",
]
