"""
Evaluation runner for TutorPrompt.

Generates prompts for every dataset sample across the five techniques and
scores them with the heuristic evaluators.

Usage:
    python experiments/run_evaluation.py                              # all techniques
    python experiments/run_evaluation.py --techniques multi_shot      # one technique
    python experiments/run_evaluation.py --show-prompt --top-k 2      # print prompts too
    python experiments/run_evaluation.py --output results/eval.json

Configuration (.env or environment; flags override):
    TUTORPROMPT_DATASET   path to an evaluation dataset JSON
    TUTORPROMPT_LIBRARY   path to an example library JSON
    TUTORPROMPT_TOP_K     examples per multi-shot prompt (default 3)
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / '.env')

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tutorprompt import (
    EvaluationHarness, ExampleLibrary, ExampleSelector, PromptBuilder, TestResult,
    default_library, load_dataset,
)
from tutorprompt.metrics import PASS_RATE_TARGET, recommendations, summarize
from tutorprompt.techniques import TECHNIQUES, normalize_technique


# ── Construction ──────────────────────────────────────────────────────────────

def build_harness(
    dataset_path: Optional[str] = None,
    library_path: Optional[str] = None,
    top_k: int = 3,
) -> EvaluationHarness:
    library = ExampleLibrary.from_json(library_path) if library_path else default_library()
    builder = PromptBuilder(library, selector=ExampleSelector(top_k=top_k))
    return EvaluationHarness(builder, samples=load_dataset(dataset_path))


# ── Summary printer ───────────────────────────────────────────────────────────

def print_results(results: list[TestResult], show_prompt: bool = False) -> None:
    for r in results:
        status = 'PASSED' if r.passed else 'FAILED'
        print(f"[{r.technique} | {r.subject} | {r.sample_id}] {status} ({r.overall_score}/100)")
        if r.error:
            print(f"    ERROR: {r.error}")
        if show_prompt and r.prompt:
            print('-' * 60)
            print(r.prompt)
            print('-' * 60)


def print_summary(results: list[TestResult]) -> None:
    if not results:
        print("No results to summarise.")
        return

    summary = summarize(results)
    print(f"\n{'='*60}")
    print("EVALUATION SUMMARY")
    print(f"{'='*60}")
    print(f"Total tests:   {summary.total_tests}")
    print(f"Passed:        {summary.passed_tests} ({summary.pass_rate:.1f}%)")
    print(f"Failed:        {summary.failed_tests}")
    print(f"Average score: {summary.average_score:.1f}/100")

    print("\nBy technique:")
    for name, t in summary.techniques.items():
        flag = 'ok ' if t.pass_rate >= PASS_RATE_TARGET else 'low'
        print(f"  [{flag}] {name:<20} {t.average_score:.1f}/100  ({t.pass_rate:.1f}% pass, n={t.total})")

    recs = recommendations(summary)
    if recs:
        print("\nRecommendations:")
        for rec in recs:
            print(f"  - {rec}")
    print(f"\nAll criteria met: {'yes' if summary.all_criteria_met else 'no'}")


# ── CLI entry point ───────────────────────────────────────────────────────────

if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(
        description='TutorPrompt heuristic evaluation — 5 techniques × 3 subjects',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Available techniques: {', '.join(TECHNIQUES)}",
    )
    parser.add_argument(
        '--techniques', default='all',
        help='Comma-separated technique names, or "all" (default: all)',
    )
    parser.add_argument(
        '--dataset', default=os.environ.get('TUTORPROMPT_DATASET'),
        help='Evaluation dataset JSON (default: $TUTORPROMPT_DATASET or packaged dataset)',
    )
    parser.add_argument(
        '--library', default=os.environ.get('TUTORPROMPT_LIBRARY'),
        help='Example library JSON (default: $TUTORPROMPT_LIBRARY or built-in library)',
    )
    parser.add_argument(
        '--top-k', type=int, default=None,
        help='Examples per multi-shot prompt (default: $TUTORPROMPT_TOP_K or 3)',
    )
    parser.add_argument(
        '--output', default=None,
        help='Write detailed results to this JSON file',
    )
    parser.add_argument(
        '--show-prompt', action='store_true',
        help='Print every generated prompt',
    )
    parser.add_argument(
        '--log-level', default='WARNING', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: WARNING)',
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        if args.techniques == 'all':
            active_techniques = TECHNIQUES
        else:
            active_techniques = tuple(normalize_technique(t) for t in args.techniques.split(','))
        top_k = args.top_k if args.top_k is not None else int(os.environ.get('TUTORPROMPT_TOP_K', 3))
        harness = build_harness(args.dataset, args.library, top_k)
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    results = harness.run_all(active_techniques)
    print_results(results, show_prompt=args.show_prompt)
    print_summary(results)

    if args.output:
        path = harness.export(results, args.output)
        print(f"\nResults saved to {path}")
