from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import List, Optional

from .agent import Agent, AgentKind
from .config import ScenarioConfig, reference_scenario
from .ecosystem import Ecosystem
from .errors import EcosystemError, NoConvergence
from .factory import AgentFactory, default_medium
from .rng import DeterministicRng
from .types.metrics import DisasterReport
from .vector import Vec2

log = logging.getLogger(__name__)

_PASS_HEADER = ["pass", "stepped", "unsafe_after", "pass_ms"]


def scatter_agents(factory: AgentFactory, rng: DeterministicRng, hazard: Vec2, count: int, spread: float) -> List[Agent]:
    kinds = list(AgentKind)
    agents: List[Agent] = []
    for _ in range(count):
        kind = rng.next_choice(kinds)
        offset = rng.next_offset(spread)
        agents.append(factory.create(kind, default_medium(kind), hazard + offset))
    return agents


def _write_pass_log(path: Path, report: DisasterReport, deterministic_log: bool) -> None:
    with Path(path).open("w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(_PASS_HEADER)
        for entry in report.metrics:
            pass_ms = 0.0 if deterministic_log else entry.pass_duration_ms
            writer.writerow([entry.pass_index, entry.stepped, entry.unsafe_after, f"{pass_ms:.3f}"])


def run_headless(
    config: Optional[ScenarioConfig] = None,
    seed: Optional[int] = None,
    random_agents: int = 0,
    spread: float = 8.0,
    log_path: Optional[Path] = None,
    summary_path: Optional[Path] = None,
    deterministic_log: bool = False,
) -> DisasterReport:
    scenario = config or reference_scenario()
    if seed is not None:
        scenario.seed = seed
    hazard = Vec2(*scenario.hazard)

    factory = AgentFactory()
    agents = factory.create_many(scenario.agents)
    if random_agents > 0:
        rng = DeterministicRng(scenario.seed)
        agents.extend(scatter_agents(factory, rng, hazard, random_agents, spread))

    ecosystem = Ecosystem(agents, scenario.ecosystem)
    failure: NoConvergence | None = None
    try:
        report = ecosystem.on_disaster(hazard)
    except NoConvergence as exc:
        failure = exc
        report = ecosystem.last_report

    if log_path:
        _write_pass_log(log_path, report, deterministic_log)

    if summary_path:
        summary = {
            "seed": scenario.seed,
            "hazard": [hazard.x, hazard.y],
            "converged": report.converged,
            "passes": report.passes,
            "total_steps": report.total_steps,
            "failure": None if failure is None else {"reason": failure.reason, "unsafe_ids": list(failure.unsafe_ids)},
            "agents": [entry.to_dict() for entry in ecosystem.snapshot(hazard)],
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))

    if failure is not None:
        raise failure
    return report


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Headless disaster-response simulation")
    parser.add_argument("--config", type=Path, default=None, help="YAML scenario (defaults to the reference trio)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--random-agents", type=int, default=0, help="Extra agents scattered around the hazard")
    parser.add_argument("--spread", type=float, default=8.0, help="Max scatter radius for random agents")
    parser.add_argument("--workers", type=_positive_int, default=None, help="Thread pool size for each pass")
    parser.add_argument("--max-passes", type=_positive_int, default=None)
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-pass metrics")
    parser.add_argument("--summary", type=Path, default=None, help="JSON file to write final positions")
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (pass_ms is forced to 0.000 so identical runs match).",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        scenario = ScenarioConfig.from_yaml(args.config) if args.config else reference_scenario()
        if args.workers is not None:
            scenario.ecosystem.workers = args.workers
        if args.max_passes is not None:
            scenario.ecosystem.max_passes = args.max_passes
        report = run_headless(
            scenario,
            seed=args.seed,
            random_agents=args.random_agents,
            spread=args.spread,
            log_path=args.log,
            summary_path=args.summary,
            deterministic_log=args.deterministic_log,
        )
    except EcosystemError as exc:
        parser.exit(1, f"error: {exc}\n")
    log.info("converged in %d pass(es), %d step(s) total", report.passes, report.total_steps)


if __name__ == "__main__":
    main()
