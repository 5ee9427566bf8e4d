"""
Display Module

Terminal display formatting and colorized output for assessment results.

Provides:
    - Colors: ANSI terminal color codes
    - Display functions for geometry and ranking assessments
"""

from __future__ import annotations
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from treatment_network.assessment.models import (
        NetworkGeometryAssessment,
        TreatmentRankingAssessment,
    )


# =============================================================================
# Terminal Colors
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: str, bold: bool = False) -> str:
    """Apply color to text."""
    style = Colors.BOLD if bold else ""
    return f"{style}{color}{text}{Colors.RESET}"


def severity_color(severity: str) -> str:
    return {
        "CRITICAL": Colors.RED,
        "HIGH": Colors.YELLOW,
        "MEDIUM": Colors.BLUE,
        "LOW": Colors.GRAY,
    }.get(severity, Colors.RESET)


def confidence_color(confidence: float) -> str:
    if confidence >= 0.7:
        return Colors.GREEN
    if confidence >= 0.5:
        return Colors.YELLOW
    return Colors.RED


# =============================================================================
# Display Functions
# =============================================================================

def print_header(title: str, char: str = "=", width: int = 78) -> None:
    print(f"\n{colored(char * width, Colors.CYAN)}")
    print(f"{colored(f' {title} '.center(width), Colors.CYAN, bold=True)}")
    print(f"{colored(char * width, Colors.CYAN)}")


def print_subheader(title: str, char: str = "-", width: int = 78) -> None:
    print(f"\n{colored(f' {title} ', Colors.WHITE, bold=True)}")
    print(f"{colored(char * width, Colors.GRAY)}")


def print_messages(title: str, messages: List[str], color: str) -> None:
    if not messages:
        return
    print_subheader(title)
    for message in messages:
        print(f"  {colored('•', color)} {message}")


def display_geometry(result: "NetworkGeometryAssessment") -> None:
    """Display a network geometry assessment."""
    print_header("Network Geometry Assessment")

    print_subheader("Network Summary")
    ch = result.characteristics
    print(f"  {'Treatments:':<22} {result.n_treatments}")
    print(f"  {'Studies:':<22} {result.n_studies}")
    print(f"  {'Direct comparisons:':<22} {len(result.edges)}")
    print(f"  {'Multi-arm trials:':<22} {len(result.multi_arm_trials)}")
    print(f"  {'Avg connections:':<22} {ch.avg_connections:.2f}")
    print(f"  {'Completeness:':<22} {ch.completeness:.1%}")

    status = colored("Yes", Colors.GREEN) if result.connectivity.is_connected else colored("No", Colors.RED)
    print(f"  {'Connected:':<22} {status}")
    print(f"  {'Components:':<22} {result.connectivity.n_components}")
    if ch.is_star_shaped:
        print(f"  {'Star-shaped:':<22} {colored('Yes', Colors.YELLOW)} (hub: {ch.central_treatment})")
    if ch.articulation_treatments:
        print(f"  {'Cut treatments:':<22} {', '.join(ch.articulation_treatments)}")

    print_subheader("Treatments")
    print(f"  {'Treatment':<24} {'Studies':>8} {'Participants':>13} {'Degree':>7}")
    for node in result.nodes:
        print(f"  {node.treatment:<24} {node.n_studies:>8} {node.total_participants:>13} {node.n_comparisons:>7}")

    if result.detected_issues:
        print_subheader("Detected Issues")
        for issue in result.detected_issues:
            sev = colored(f"[{issue.severity}]", severity_color(issue.severity), bold=True)
            print(f"  {sev} {issue.description}")

    print_messages("Recommendations", result.recommendations, Colors.CYAN)

    conf = colored(f"{result.confidence:.2f}", confidence_color(result.confidence), bold=True)
    print(f"\n  Confidence (heuristic): {conf}")


def display_ranking(result: "TreatmentRankingAssessment") -> None:
    """Display a treatment ranking assessment."""
    print_header("Treatment Ranking")

    direction = "higher is better" if result.higher_is_better else "lower is better"
    print(f"\n  {result.n_treatments} treatments, {result.n_simulations:,} simulations ({direction})")

    print_subheader("Rankings")
    print(f"  {'#':>3} {'Treatment':<24} {'SUCRA':>7} {'P-score':>8} {'P(best)':>8} {'Mean':>6} {'Median':>7}")
    for i, r in enumerate(result.rankings, start=1):
        name = f"{r.treatment}{' (ref)' if r.is_reference else ''}"
        print(
            f"  {i:>3} {name:<24} {r.sucra:>6.1f}% {r.p_score:>8.3f} "
            f"{r.prob_best:>8.3f} {r.mean_rank:>6.2f} {r.median_rank:>7}"
        )

    print_subheader("Interpretation")
    print(f"  {result.interpretation}")

    print_messages("Warnings", result.warnings, Colors.YELLOW)
    print_messages("Recommendations", result.recommendations, Colors.CYAN)

    conf = colored(f"{result.confidence:.2f}", confidence_color(result.confidence), bold=True)
    print(f"\n  Confidence (heuristic): {conf}")
