#!/usr/bin/env python3
"""Analyze attempt history to track score trends per question."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from cot_game.config import settings
from cot_game.services.attempt_history import AttemptHistory, summarize_attempts


def analyze_attempts():
    history_path = Path(settings.HISTORY_PATH)

    if not history_path.exists():
        print("No attempt history found. Solve a question first.")
        return

    attempts = AttemptHistory(history_path).load()["attempts"]
    if not attempts:
        print("No attempts recorded yet.")
        return

    summary = summarize_attempts(attempts)

    print(f"\n{'='*60}")
    print(f"ATTEMPT HISTORY ANALYSIS ({len(attempts)} attempts)")
    print(f"{'='*60}\n")

    print(f"{'#':<4} {'Timestamp':<20} {'Q':<5} {'Score':<6} {'Model':<24}")
    print("-" * 60)

    for row in summary["rows"]:
        score = row["Score"]
        # Color code score (terminal colors)
        if not isinstance(score, int):
            score_str = f"{'-':<6}"
        elif score >= 70:
            score_str = f"\033[92m{score:<6}\033[0m"  # Green
        elif score >= 50:
            score_str = f"\033[93m{score:<6}\033[0m"  # Yellow
        else:
            score_str = f"\033[91m{score:<6}\033[0m"  # Red

        print(f"{row['#']:<4} {row['Timestamp']:<20} {row['Question']!s:<5} {score_str} {row['Model']:<24}")

    print("-" * 60)

    stats = summary["stats"]
    if stats and len(attempts) >= 2:
        print(f"\nStatistics:")
        print(f"  Best score:  {stats['best']}")
        print(f"  Worst score: {stats['worst']}")
        print(f"  Average:     {stats['avg']:.1f}")
        print(f"  Trend:       {'↑' if stats['trend'] > 0 else '↓'} {abs(stats['trend'])} (first → last)")

    print("\nBest score per question:")
    for qid, best in sorted(summary["best_by_question"].items()):
        print(f"  #{qid:<4} {best}")

    print(f"\n{'='*60}\n")


if __name__ == "__main__":
    analyze_attempts()
