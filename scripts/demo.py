#!/usr/bin/env python3
"""
Demo - Run the governance scenarios and show the explainable action records.

Usage: python scripts/demo.py

Needs the demo extra (rich): pip install -e ".[demo]"
"""

import logging
from datetime import datetime, timedelta, timezone

from rich.console import Console
from rich.table import Table

from action_governance import (
    ActionCatalog,
    ActionGovernor,
    Actor,
    CausalStep,
    ExplanationBuilder,
    GovernancePolicy,
)
from action_governance.validation import CitationCheck, ValidationTracker

console = Console()


class DemoSources:
    """Source registry that knows one analytics export."""

    def source_exists(self, source_name: str) -> bool:
        return source_name == "analytics"

    def reference_exists(self, source_name: str, reference: str) -> bool:
        return reference.startswith("row_")


# Derivatives already generated for the published asset.
DERIVATIVES = {"pr_pitch_excerpt", "aeo_snippet"}

SCENARIOS = [
    (
        "Low confidence on an autopilot action",
        "aeo_bundle", 0.4, "autopilot",
        "[VERIFIED: analytics:row_42] Organic traffic doubled.",
        False,
    ),
    (
        "Blocked by an unknown source",
        "aeo_bundle", 0.4, "autopilot",
        "[VERIFIED: rumor_mill:row_1] Competitor is folding.",
        False,
    ),
    (
        "Warning, unacknowledged",
        "pr_hook", 0.9, "copilot",
        "[CORROBORATED: analytics] Engagement is up.",
        False,
    ),
    (
        "Warning, acknowledged",
        "pr_hook", 0.9, "copilot",
        "[CORROBORATED: analytics] Engagement is up.",
        True,
    ),
]


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    catalog = ActionCatalog()
    policy = GovernancePolicy.from_env()
    governor = ActionGovernor()
    builder = ExplanationBuilder()
    check = CitationCheck(DemoSources())
    tracker = ValidationTracker()

    console.print("\n[bold blue]Action governance demo[/bold blue]\n")

    table = Table(title="Decisions")
    table.add_column("Scenario")
    table.add_column("Requested")
    table.add_column("Effective")
    table.add_column("Admitted")
    table.add_column("Reason")

    records = []
    for number, (title, kind, confidence, requested, content, ack) in enumerate(SCENARIOS):
        subject_id = f"asset-{number}"
        tracker.register(subject_id)
        revision = tracker.start(subject_id)
        tracker.complete(subject_id, check.run(content), revision=revision)
        if ack:
            tracker.acknowledge_warning(subject_id)

        action = catalog.descriptor(
            kind, action_id=f"{kind}-{number}", confidence=confidence,
            derivatives=DERIVATIVES,
        )
        ctx = tracker.context_for(subject_id, requested, policy, kind=kind)
        decision = governor.decide(action, ctx)

        now = datetime.now(timezone.utc)
        prior = [
            CausalStep("Content Published", now - timedelta(hours=24), Actor.USER),
            CausalStep("Validation Completed", now - timedelta(minutes=5), Actor.SYSTEM),
        ]
        records.append((title, builder.build(action, decision, prior)))

        table.add_row(
            title,
            decision.requested_mode.value,
            decision.effective_mode.value,
            "[green]yes[/green]" if decision.admitted else "[red]no[/red]",
            decision.reason.value,
        )

    console.print(table)

    for title, record in records:
        console.print(f"\n[bold]{title}[/bold] [dim](-> {record.target})[/dim]")
        console.print(f"  {record.user_summary}")
        console.print(
            f"  [dim]risk {record.technical_detail.risk_level}: "
            f"{record.technical_detail.risk_rationale}[/dim]"
        )
        for step in record.causal_chain:
            console.print(
                f"    {step.timestamp:%H:%M:%S}  {step.actor.value:<6}  {step.step}"
            )


if __name__ == "__main__":
    main()
