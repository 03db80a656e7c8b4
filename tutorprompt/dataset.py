"""
Evaluation dataset: fixed test records per prompting technique.

File layout:
    {
      "metadata": {...},
      "zero_shot_samples": [{"id": ..., "subject": ..., "query": ..., "level": ...}, ...],
      "one_shot_samples": [...],
      ...
    }
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .adaptation import LearnerProfile
from .techniques import TECHNIQUES

DEFAULT_DATASET_PATH = Path(__file__).parent / 'data' / 'evaluation_dataset.json'
DEFAULT_MAX_RESPONSE_MS = 2000


@dataclass(frozen=True)
class EvaluationSample:
    id: str
    technique: str
    subject: str
    query: str
    level: str
    expected_output: Optional[str] = None
    max_response_ms: int = DEFAULT_MAX_RESPONSE_MS
    profile: Optional[LearnerProfile] = None

    @classmethod
    def from_record(cls, technique: str, record: dict) -> 'EvaluationSample':
        missing = [k for k in ('id', 'subject', 'query', 'level') if k not in record]
        if missing:
            raise ValueError(
                f"Sample {record.get('id', '?')!r} is missing fields: {', '.join(missing)}"
            )
        profile = record.get('profile')
        return cls(
            id=record['id'],
            technique=technique,
            subject=record['subject'],
            query=record['query'],
            level=record['level'],
            expected_output=record.get('expected_output'),
            max_response_ms=record.get('max_response_ms', DEFAULT_MAX_RESPONSE_MS),
            profile=LearnerProfile(**profile) if profile else None,
        )


def parse_dataset(data: dict) -> dict[str, list[EvaluationSample]]:
    """Split raw dataset JSON into samples keyed by technique."""
    samples = {}
    for technique in TECHNIQUES:
        key = f'{technique}_samples'
        if key not in data:
            raise ValueError(f"No test samples found for technique {technique!r} (expected key {key!r})")
        samples[technique] = [EvaluationSample.from_record(technique, r) for r in data[key]]
    return samples


def load_dataset(path: Optional[Union[str, Path]] = None) -> dict[str, list[EvaluationSample]]:
    """Load evaluation samples from JSON (defaults to the packaged dataset)."""
    path = Path(path) if path else DEFAULT_DATASET_PATH
    with open(path, encoding='utf-8') as f:
        return parse_dataset(json.load(f))
