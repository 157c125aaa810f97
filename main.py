#!/usr/bin/env python3
"""Roadmap Quoter CLI - build-vs-partner cost comparison for a roadmap.

Usage:
    # Roadmap from a file
    python main.py --input ./roadmap.md

    # Literal roadmap text with add-ons
    python main.py --input "Enterprise platform with SSO and audit logs" --expedited --extended-support

    # Machine-readable output
    python main.py --input ./roadmap.md --json
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from contracts import PricingOptions, ProjectType, ProposalCalculation, RoadmapInput
from errors import QuoterError
from log_config import configure_logging
from orchestrator import ProposalPipeline, calculation_to_json, new_run_id
from tools import list_tools as available_tools
from config import settings


console = Console()


def read_roadmap(input_path: str) -> str:
    """Read roadmap text from a file, or treat the argument as the text itself."""
    path = Path(input_path)

    if path.is_file():
        return path.read_text(encoding="utf-8", errors="replace")

    return input_path


def render_calculation(calculation: ProposalCalculation) -> None:
    """Print the calculation as rich tables."""
    cur = calculation.pricing.currency
    profile = calculation.profile

    console.print(f"  [green]Complexity:[/green] {profile.backend_complexity.value}")
    console.print(f"  [green]Business model:[/green] {profile.business_model.value}")
    console.print(f"  [green]Market:[/green] {profile.market_category}")
    if profile.normalized_features:
        console.print(f"  [green]Features:[/green] {', '.join(profile.normalized_features)}")
    if profile.compliance_requirements:
        console.print(f"  [green]Compliance:[/green] {', '.join(profile.compliance_requirements)}")

    stages = Table(title="DIY Cost Breakdown")
    stages.add_column("Stage")
    stages.add_column("%", justify="right")
    stages.add_column("Hours", justify="right")
    stages.add_column("Rate", justify="right")
    stages.add_column("Cost", justify="right")
    for s in calculation.cost.stage_breakdown:
        stages.add_row(s.stage, f"{s.percentage:g}", str(s.hours), f"{cur}{s.hourly_rate:g}", f"{cur}{s.cost:,.0f}")
    stages.add_row(
        "[bold]Hidden costs[/bold]", "", "", "", f"{cur}{calculation.cost.hidden_costs.total:,.0f}"
    )
    stages.add_row(
        "[bold]Total DIY[/bold]", "", str(calculation.cost.total_project_hours), "",
        f"[bold]{cur}{calculation.cost.total_diy_cost:,.0f}[/bold]",
    )
    console.print(stages)
    console.print(f"  [dim]Timeline:[/dim] {calculation.cost.timeline}")

    pricing = Table(title="Partner Pricing")
    pricing.add_column("Option")
    pricing.add_column("Price", justify="right")
    pricing.add_column("Included", justify="center")
    pricing.add_row("Core implementation", f"{cur}{calculation.pricing.core_price:,.0f}", "✓")
    for opt in calculation.pricing.modular_options:
        pricing.add_row(opt.name, f"{cur}{opt.price:,.0f}", "✓" if opt.included else "")
    pricing.add_row("[bold]Total[/bold]", f"[bold]{cur}{calculation.pricing.total_price:,.0f}[/bold]", "")
    console.print(pricing)

    console.print(
        f"\n[bold]Savings:[/bold] {cur}{calculation.pricing.total_savings:,.0f} "
        f"({calculation.pricing.savings_percentage}%)"
    )

    r = calculation.revenue
    console.print("\n[bold]Revenue Opportunity:[/bold]")
    console.print(f"  Monthly potential:    {cur}{r.monthly_revenue_potential:,}")
    console.print(f"  3-month delay cost:   {cur}{r.delay_costs.three_month:,}")
    console.print(f"  First-mover value:    {cur}{r.first_mover_advantage:,}")

    for warning in calculation.consistency.warnings:
        console.print(f"\n[yellow]Review:[/yellow] {warning}")


@click.command()
@click.option(
    "--input", "-i", "input_path",
    required=False,
    help="Path to roadmap file or literal roadmap text"
)
@click.option(
    "--project-type", "-t",
    type=click.Choice([t.value for t in ProjectType]),
    default=None,
    help="Project type hint"
)
@click.option(
    "--industry",
    default=None,
    help="Industry hint (e.g., fintech, healthcare)"
)
@click.option(
    "--expedited",
    is_flag=True,
    help="Include expedited delivery in the total"
)
@click.option(
    "--extended-support",
    is_flag=True,
    help="Include extended support in the total"
)
@click.option(
    "--currency",
    default=None,
    help=f"Currency symbol (default: {settings.default_currency})"
)
@click.option(
    "--output", "-o", "output_dir",
    default=None,
    help="Save calculation.json and summary.md under this directory"
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print the calculation as JSON"
)
@click.option(
    "--list-tools",
    is_flag=True,
    help="List the available calculation tools and exit"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Verbose output"
)
def main(
    input_path: Optional[str],
    project_type: Optional[str],
    industry: Optional[str],
    expedited: bool,
    extended_support: bool,
    currency: Optional[str],
    output_dir: Optional[str],
    as_json: bool,
    list_tools: bool,
    verbose: bool,
):
    """Roadmap Quoter: compare building in-house with partnering.

    Reads a roadmap, estimates the DIY cost, projects the revenue at stake
    and prices a partner quote against it.
    """
    configure_logging(level="DEBUG" if verbose else ("WARNING" if as_json else None))

    if list_tools:
        _print_tools()
        return

    if not input_path:
        console.print("[red]Error: --input is required[/red]")
        sys.exit(1)

    roadmap_text = read_roadmap(input_path)
    if not roadmap_text.strip():
        console.print("[red]Error: Roadmap text is empty[/red]")
        sys.exit(1)

    options = PricingOptions(
        expedited_delivery=expedited,
        extended_support=extended_support,
        currency=currency,
    )

    try:
        pipeline = ProposalPipeline(output_dir=output_dir)
        calculation = pipeline.run(
            RoadmapInput(roadmap_text=roadmap_text, project_type=project_type, industry=industry),
            options,
        )
    except QuoterError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        sys.exit(1)

    output_path = None
    if output_dir:
        run_id = new_run_id()
        output_path = pipeline.save_calculation(calculation, run_id)

    if as_json:
        click.echo(calculation_to_json(calculation))
        return

    console.print(Panel.fit(
        "[bold blue]Roadmap Quoter[/bold blue]\n"
        "[dim]Build vs. Partner Cost Comparison[/dim]",
        border_style="blue"
    ))
    render_calculation(calculation)

    if output_path:
        console.print(f"\n[bold]Output saved to:[/bold] {output_path}")


def _print_tools() -> None:
    console.print("[bold]Available tools:[/bold]\n")
    for tool in available_tools():
        console.print(f"  {tool['name']:30} {tool['description']}")


if __name__ == "__main__":
    main()
