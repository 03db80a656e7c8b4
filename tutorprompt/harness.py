"""
EvaluationHarness: generate a prompt for each dataset sample and score it.

Usage:
    from tutorprompt import EvaluationHarness, PromptBuilder, default_library

    harness = EvaluationHarness(PromptBuilder(default_library()))
    results = harness.run_all()
    print(harness.summary(results).pass_rate)
"""

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .dataset import EvaluationSample, load_dataset
from .evaluators import PromptEvaluator
from .exceptions import TutorPromptError
from .metrics import EvaluationSummary, TestResult, recommendations, summarize
from .techniques import TECHNIQUES, PromptBuilder, normalize_technique

logger = logging.getLogger(__name__)

FRAMEWORK_VERSION = "1.0.0"


class EvaluationHarness:
    """Run heuristic evaluation over the five prompting techniques."""

    def __init__(
        self,
        builder: PromptBuilder,
        evaluator: Optional[PromptEvaluator] = None,
        samples: Optional[dict[str, list[EvaluationSample]]] = None,
    ):
        """
        Args:
            builder:   PromptBuilder used to generate every prompt
            evaluator: PromptEvaluator (uses default weights if not provided)
            samples:   technique -> samples (loads the packaged dataset if not provided)
        """
        self.builder = builder
        self.evaluator = evaluator or PromptEvaluator()
        self.samples = samples if samples is not None else load_dataset()

    def run_sample(self, sample: EvaluationSample) -> TestResult:
        """Generate and score one sample. Library errors are recorded, not raised."""
        options = {}
        if sample.technique == 'dynamic' and sample.profile is not None:
            options['profile'] = sample.profile

        start = time.perf_counter()
        try:
            generated = self.builder.generate(
                sample.technique, sample.subject, sample.query, sample.level, **options
            )
        except TutorPromptError as e:
            logger.warning("Sample %s failed: %s", sample.id, e)
            return TestResult(
                sample_id=sample.id,
                technique=sample.technique,
                subject=sample.subject,
                query=sample.query,
                overall_score=0,
                passed=False,
                response_time_ms=(time.perf_counter() - start) * 1000,
                error=str(e),
            )
        elapsed_ms = (time.perf_counter() - start) * 1000

        evaluation = self.evaluator.evaluate(sample, generated.prompt, elapsed_ms)
        logger.debug(
            "Sample %s: %s (%d/100)", sample.id, evaluation.status, evaluation.overall_score,
        )
        return TestResult(
            sample_id=sample.id,
            technique=sample.technique,
            subject=sample.subject,
            query=sample.query,
            overall_score=evaluation.overall_score,
            passed=evaluation.passed,
            response_time_ms=elapsed_ms,
            prompt=generated.prompt,
            evaluation=evaluation,
        )

    def run_technique(self, technique: str) -> list[TestResult]:
        technique = normalize_technique(technique)
        if technique not in self.samples:
            raise ValueError(f"No test samples found for technique: {technique}")
        return [self.run_sample(s) for s in self.samples[technique]]

    def run_all(self, techniques: tuple[str, ...] = TECHNIQUES) -> list[TestResult]:
        results = []
        for technique in techniques:
            results.extend(self.run_technique(technique))
        return results

    @staticmethod
    def summary(results: list[TestResult]) -> EvaluationSummary:
        return summarize(results)

    @staticmethod
    def export(results: list[TestResult], path: Union[str, Path]) -> Path:
        """Write summary and per-sample results to a JSON file."""
        summary = summarize(results)
        data = {
            'metadata': {
                'timestamp': datetime.now(timezone.utc).isoformat(),
                'framework_version': FRAMEWORK_VERSION,
                'total_samples': summary.total_tests,
            },
            'summary': summary.to_dict(),
            'recommendations': recommendations(summary),
            'detailed_results': [
                {
                    'sample_id': r.sample_id,
                    'technique': r.technique,
                    'subject': r.subject,
                    'query': r.query,
                    'overall_score': r.overall_score,
                    'passed': r.passed,
                    'response_time_ms': r.response_time_ms,
                    'evaluation': r.evaluation.to_dict() if r.evaluation else None,
                    'error': r.error,
                }
                for r in results
            ],
        }
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return path
