#!/usr/bin/env python3
"""
Deadlock Graph Analyzer
Command-line entry point for analysing resource-allocation graphs.

Reads a graph snapshot (JSON file or built-in sample), reports whether the
system is deadlocked, which processes and resources are involved, and an
explanatory circular wait.
"""

import argparse
import json
import sys
from typing import Any, List, Optional, Sequence

from algorithms.parser import parse_graph
from algorithms.safety import analyze_safety
from algorithms.detection import detect_deadlock, report_from_model
from analysis.events import DeadlockReport
from utils.graph_loader import load_graph, get_graph_description, GraphLoadError
from utils.logger import AnalyzerLogger
from utils.samples import SAMPLES


EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_DEADLOCK = 2


def run_analysis(
    nodes: Sequence[Any],
    edges: Sequence[Any],
    logger: AnalyzerLogger
) -> DeadlockReport:
    """
    Analyse one graph and log the outcome.

    In verbose mode the parsed matrices and the reduction trace are
    logged as debug lines before the report.

    Args:
        nodes: Graph nodes
        edges: Graph edges
        logger: Logger instance

    Returns:
        DeadlockReport for the graph
    """
    logger.log(f"\n{'='*60}")
    logger.log("DEADLOCK ANALYSIS")
    logger.log(f"{'='*60}\n")

    model = parse_graph(nodes, edges)
    safety = analyze_safety(model)

    if logger.verbose:
        logger.log_model(model)
        _verify_resource_conservation(model, logger)
        logger.log(f"Reduction passes: {safety.passes}", "debug")
        logger.log(f"Reduction order: {safety.safe_sequence}", "debug")
        logger.log(f"Work after reduction: {[int(w) for w in safety.available]}", "debug")

    report = report_from_model(model, safety)
    logger.log_report(report)

    logger.log(f"\n{'='*60}")
    logger.log("ANALYSIS COMPLETE")
    logger.log(f"{'='*60}\n")

    return report


def _verify_resource_conservation(model, logger: AnalyzerLogger) -> None:
    """Log per-resource accounting and flag over-allocated resources."""
    for j, resource in enumerate(model.resources):
        total = model.total_vector[j]
        allocated = model.allocated_vector[j]
        available = model.available_vector[j]

        if available < 0:
            logger.log(
                f"{resource.id} is over-allocated: {allocated} units held, "
                f"{total} declared (available={available})",
                "warning"
            )
        else:
            logger.log(f"  {resource.id} accounting: {allocated} + {available} = {total} [OK]", "debug")


def _load_input(args, logger: AnalyzerLogger):
    """Resolve --graph / --sample into (nodes, edges)."""
    if args.sample:
        logger.log(f"Sample: {args.sample}", "debug")
        return SAMPLES[args.sample]()

    description = get_graph_description(args.graph)
    logger.log(f"Graph: {args.graph}", "debug")
    if description:
        logger.log(f"Description: {description}", "debug")
    return load_graph(args.graph)


def build_parser() -> argparse.ArgumentParser:
    """Command-line options."""
    parser = argparse.ArgumentParser(
        description='Deadlock Graph Analyzer'
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--graph',
        type=str,
        help='Path to graph JSON file'
    )
    source.add_argument(
        '--sample',
        choices=sorted(SAMPLES),
        help='Analyse a built-in sample graph'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log parsed matrices and the reduction trace'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the report as JSON instead of the text log'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write log output to this file'
    )
    parser.add_argument(
        '--fail-on-deadlock',
        action='store_true',
        help='Exit with status 2 when a deadlock is found'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the analyzer."""
    args = build_parser().parse_args(argv)

    # JSON goes to stdout untouched; the text log stays quiet
    verbose = args.verbose and not args.json

    with AnalyzerLogger(verbose=verbose, log_file=args.log_file) as logger:
        try:
            nodes, edges = _load_input(args, logger)
        except GraphLoadError as e:
            logger.log(f"Failed to load graph: {e}", "error")
            return EXIT_LOAD_ERROR

        if args.json:
            report = detect_deadlock(nodes, edges)
            print(json.dumps(report.to_dict(), indent=2))
        else:
            report = run_analysis(nodes, edges, logger)

    if args.fail_on_deadlock and report.is_deadlocked:
        return EXIT_DEADLOCK
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
