"""
Heat Pump Check CLI.

Command-line shell over the efficiency engine: run a check from a request
JSON file, price a set of interventions, list the intervention catalog.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .engine import ScenarioContext, SimulationResult, compute_scenario, run
from .export.result_json import ResultJSONExporter, result_to_dict, scenario_to_dict, to_plain
from .funding import FundingMatcher, FundingProgram
from .roi import InterventionCatalog
from .utils.logging_config import ensure_logging
from .utils.validation import ValidationError, load_request, load_scenario_request, normalize_request

app = typer.Typer(
    name="hpcheck",
    help="Heat Pump Check - Efficiency estimate and improvement plan for residential heat pumps",
    add_completion=False,
)
console = Console()

PRIORITY_STYLE = {"high": "bold red", "medium": "yellow", "low": "dim"}


def _parse_today(value: Optional[str]) -> date:
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"'{value}' is not an ISO date (YYYY-MM-DD)")


def _fail(error: ValidationError) -> None:
    console.print(f"[red]Error:[/red] {error}")
    for suggestion in error.suggestions:
        console.print(f"  [dim]{suggestion}[/dim]")
    raise typer.Exit(code=1)


def _load_profile(request_file: Path):
    try:
        return normalize_request(load_request(request_file))
    except ValidationError as e:
        _fail(e)


def _funding_table(title: str, programs: list[FundingProgram]) -> Table:
    table = Table(title=title)
    table.add_column("Program", style="cyan")
    table.add_column("Measure")
    table.add_column("Rate", justify="right")
    table.add_column("Cap", justify="right")
    for program in programs:
        rate = f"{program.subsidy_rate_percent:g} %" if program.subsidy_rate_percent else "loan"
        cap = f"{program.cap_amount:,.0f} €" if program.cap_amount else "-"
        bonus = " (+5 % iSFP)" if program.has_bonus else ""
        table.add_row(program.program, program.measure + bonus, rate, cap)
    return table


def _print_result(result: SimulationResult) -> None:
    if result.score is None:
        score_text = "n/a (no metered consumption)"
    else:
        score_text = f"{result.score:g} / 100"

    console.print(Panel.fit(
        f"[bold blue]Heat Pump Check[/bold blue]\n"
        f"{result.climate_region} - comparability score: [bold]{score_text}[/bold]",
        border_style="blue"
    ))

    table = Table(title="Simulation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    flow_note = " (estimated)" if result.flow_temp_estimated else ""
    table.add_row("Flow temperature", f"{result.flow_temp_c:g} °C{flow_note}")
    table.add_row("JAZ heating", f"{result.heating_factor:.2f}")
    table.add_row("JAZ hot water", f"{result.hot_water_factor:.2f}")
    table.add_row("Specific heat demand", f"{result.specific_demand} kWh/m²·a")
    table.add_row("Heating demand", f"{result.heating_demand_kwh:,} kWh/a")
    table.add_row("Hot water demand", f"{result.hot_water_demand_kwh:,} kWh/a")
    table.add_row("Simulated electricity", f"{result.simulated_kwh:,} kWh/a")
    if result.has_metered_consumption:
        partial = f" (annualized from {result.measurement_days} days)" if result.is_partial_period else ""
        table.add_row("Actual electricity", f"{result.actual_kwh:,.0f} kWh/a{partial}")
        table.add_row("Deviation", f"{result.deviation_percent:+d} %")
        table.add_row("Excess cost", f"{result.cost.excess_cost_eur:,} €/a")
    if result.measured_factor is not None:
        season = "" if result.measured_factor_full_season else " (partial season)"
        table.add_row("Measured JAZ", f"{result.measured_factor:.2f}{season}")
    if result.auxiliary_heater is not None:
        aux = result.auxiliary_heater
        table.add_row("Backup heater share", f"{aux.share_percent:.1f} % ({aux.rating.value})")
    if result.pv is not None:
        table.add_row(
            "PV self-consumption",
            f"{result.pv.self_consumption_kwh:,} kWh ({result.pv.self_consumption_share_percent} %)",
        )
    console.print(table)

    console.print("\n[bold]Recommendations[/bold]")
    for i, rec in enumerate(result.recommendations, 1):
        style = PRIORITY_STYLE[rec.priority.value]
        console.print(f"  {i}. [{style}]{rec.priority.value.upper()}[/{style}] {rec.title}")
        console.print(f"     [dim]{rec.impact}[/dim]")
        for step in rec.prerequisites:
            console.print(f"       - {step}")

    if result.funding:
        console.print()
        console.print(_funding_table("Funding Programs", result.funding))


@app.callback()
def main_callback(
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level"),
):
    ensure_logging(log_level)


@app.command()
def check(
    request_file: Path = typer.Argument(..., help="Request JSON file"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference date (YYYY-MM-DD)"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write JSON to this file"),
):
    """
    Run the efficiency check for a request file.
    """
    reference = _parse_today(today)
    profile = _load_profile(request_file)
    result = run(profile, reference)

    if output is not None:
        ResultJSONExporter().export(result, output)

    if as_json:
        typer.echo(ResultJSONExporter().dumps(result_to_dict(result)))
    else:
        _print_result(result)


@app.command()
def scenario(
    request_file: Path = typer.Argument(..., help="Request JSON file"),
    select: Optional[str] = typer.Option(None, "--select", "-s", help="Comma-separated intervention IDs"),
    scenario_file: Optional[Path] = typer.Option(
        None, "--scenario", help="JSON with 'selection' and per-user cost 'overrides'"
    ),
    today: Optional[str] = typer.Option(None, "--today", help="Reference date (YYYY-MM-DD)"),
    as_json: bool = typer.Option(False, "--json", help="Print the scenario as JSON"),
):
    """
    Price a set of interventions: cost, savings, efficiency gain, payback, funding.
    """
    reference = _parse_today(today)
    profile = _load_profile(request_file)

    catalog = InterventionCatalog()
    selection = [s.strip() for s in (select or "").split(",") if s.strip()]
    if scenario_file is not None:
        try:
            extra = load_scenario_request(scenario_file)
            catalog = catalog.with_overrides(extra.overrides)
        except ValidationError as e:
            _fail(e)
        selection.extend(s for s in extra.selection if s not in selection)

    if not selection:
        console.print("[yellow]No interventions selected.[/yellow] Use --select or --scenario.")
        raise typer.Exit(code=1)

    result = run(profile, reference)
    for intervention_id in selection:
        for reason in catalog.blocked_by(intervention_id, selection):
            console.print(f"[yellow]Note:[/yellow] {intervention_id}: {reason}")

    outcome = compute_scenario(selection, ScenarioContext.from_result(profile, result, catalog))
    funding = FundingMatcher().match_all(result.recommendations, profile.postal_code, selection)

    if as_json:
        data = scenario_to_dict(outcome)
        data["funding"] = to_plain(funding)
        typer.echo(ResultJSONExporter().dumps(data))
        return

    table = Table(title="Selected Interventions")
    table.add_column("Intervention", style="cyan")
    table.add_column("Cost", justify="right")
    table.add_column("kWh/a", justify="right")
    table.add_column("€/a", justify="right")
    for line in outcome.breakdown:
        table.add_row(
            line.label,
            f"{line.cost_min:,.0f}-{line.cost_max:,.0f} € ({line.unit})",
            f"{line.kwh_savings:,}",
            f"{line.eur_savings:,}",
        )
    console.print(table)

    payback = f"{outcome.payback_years} years" if outcome.payback_years else "immediate"
    console.print(Panel.fit(
        f"Total cost: {outcome.cost_min:,.0f}-{outcome.cost_max:,.0f} € (mid {outcome.cost_mid:,} €)\n"
        f"Savings: {outcome.total_kwh_savings:,} kWh / {outcome.total_eur_savings:,} € per year\n"
        f"Efficiency gain: {outcome.efficiency_gain_percent:.1f} % "
        f"(JAZ {result.heating_factor:.2f} -> {outcome.projected_factor:.2f})\n"
        f"Payback: {payback}",
        title="Scenario",
        border_style="green",
    ))

    if funding.federal:
        console.print(_funding_table("Federal Funding", funding.federal))
    if funding.regional:
        console.print(_funding_table("Regional Funding", funding.regional))


@app.command()
def interventions(
    show_all: bool = typer.Option(False, "--all", help="Include entries without cost or savings"),
):
    """List the intervention catalog."""
    catalog = InterventionCatalog()
    items = catalog.all() if show_all else catalog.simulatable()

    table = Table(title="Intervention Catalog")
    table.add_column("ID", style="cyan")
    table.add_column("Intervention")
    table.add_column("Cost", justify="right")
    table.add_column("Gain", justify="right")
    table.add_column("kWh/a (120 m²)", justify="right")
    for item in items:
        table.add_row(
            item.id,
            item.label,
            f"{item.cost_min:,.0f}-{item.cost_max:,.0f} €",
            f"{item.efficiency_gain_percent:g} %",
            f"{item.baseline_kwh_savings:,.0f}",
        )
    console.print(table)


@app.command()
def version():
    """Show version information."""
    from . import __version__
    console.print(f"Heat Pump Check v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
