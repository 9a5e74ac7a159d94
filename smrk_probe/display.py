"""
Output formatting and optional matplotlib plotting.
"""

import sys
from typing import List, Optional

from .engine import SymmetryReport


def format_invariant_report(results: list) -> str:
    """Format invariant check results for terminal output."""
    lines = []
    lines.append("=" * 60)
    lines.append("  INVARIANT VALIDATION REPORT")
    lines.append("=" * 60)

    for r in results:
        status = "PASS" if r.passed else "FAIL"
        marker = " [+]" if r.passed else " [X]"
        lines.append(f"{marker} {r.name}: {status}")
        lines.append(f"      {r.message}")

    lines.append("-" * 60)
    if all(r.passed for r in results):
        lines.append("  ENGINE NOMINAL: All invariants hold.")
    else:
        lines.append("  ENGINE COMPROMISED: One or more invariants failed.")
    lines.append("=" * 60)

    return "\n".join(lines)


def format_report(report: SymmetryReport) -> str:
    """Render a probe report in the layout of the web front end."""
    return "\n".join([
        "SMRK Spectral Probe v0.1",
        f"N={report.n}, Pmax={report.p_max}, alpha={report.alpha}, beta={report.beta}",
        f"seed={report.seed}, trials={report.trials}",
        "",
        f"sym_abs_mean = {report.sym_abs_mean:.6e}",
        f"sym_abs_max  = {report.sym_abs_max:.6e}",
        f"hx_norm_mean = {report.hx_norm_mean:.6e}",
        f"x_norm_mean  = {report.x_norm_mean:.6e}",
        f"relative     = {report.relative_defect:.6e}",
    ])


def format_sweep(reports: List[SymmetryReport]) -> str:
    lines = []
    lines.append("=" * 60)
    lines.append("  SYMMETRY DEFECT vs TRUNCATION SIZE")
    lines.append("=" * 60)
    lines.append(f"  {'N':>8s}  {'mean defect':>12s}  {'max defect':>12s}  {'relative':>10s}")
    lines.append(f"  {'-'*8}  {'-'*12}  {'-'*12}  {'-'*10}")
    for r in reports:
        lines.append(f"  {r.n:8d}  {r.sym_abs_mean:12.4e}  "
                     f"{r.sym_abs_max:12.4e}  {r.relative_defect:10.3e}")
    lines.append("=" * 60)
    return "\n".join(lines)


def plot_defect_sweep(reports: List[SymmetryReport],
                      output_path: Optional[str] = None,
                      show: bool = True) -> None:
    """
    Plot mean and max defect against N on log-log axes.
    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib
        if not show:
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib is required for plotting. Install with: "
              "pip install matplotlib", file=sys.stderr)
        return

    sizes = [r.n for r in reports]
    fig, axes = plt.subplots(2, 1, figsize=(10, 7), sharex=True)

    ax1 = axes[0]
    ax1.loglog(sizes, [r.sym_abs_mean for r in reports], "o-", label="mean")
    ax1.loglog(sizes, [r.sym_abs_max for r in reports], "s--", label="max")
    ax1.set_ylabel("|<x,Hy> - <Hx,y>|")
    ax1.set_title(f"Symmetry defect (Pmax={reports[0].p_max}, "
                  f"alpha={reports[0].alpha}, beta={reports[0].beta})")
    ax1.legend(fontsize=8)

    ax2 = axes[1]
    ax2.loglog(sizes, [r.relative_defect for r in reports], "o-")
    ax2.set_ylabel("defect / (||Hx|| ||x||)")
    ax2.set_xlabel("N")

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150, bbox_inches="tight")
        print(f"Plot saved to {output_path}")
    if show:
        plt.show()
    else:
        plt.close(fig)
