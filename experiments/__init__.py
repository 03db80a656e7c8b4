"""TutorPrompt experiments module."""

from .run_evaluation import build_harness, print_results, print_summary
