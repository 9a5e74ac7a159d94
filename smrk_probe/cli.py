"""
Command-line interface for the SMRK probe.

Usage:
    python -m smrk_probe version
    python -m smrk_probe info --preset quick
    python -m smrk_probe matvec --n 10 --p-max 5 --unit 1
    python -m smrk_probe probe --n 2000 --p-max 100 --seed 7 --trials 20
    python -m smrk_probe sweep --sizes 100,1000,10000
    python -m smrk_probe plot --sizes 100,1000,10000 --output defect.png
    python -m smrk_probe validate
"""

import json
import logging
import sys
import time

import click
import numpy as np
from tqdm import tqdm

from .config import (
    ProbeConfig,
    InvalidArgument,
    ArithmeticDegenerate,
    MAX_MATVEC_N,
    MAX_PROBE_N,
    MAX_PRIME_CUTOFF,
    MAX_TRIALS,
)
from .engine import SymmetryProbe, get_version, matvec as run_matvec, size_sweep
from .invariants import run_all_invariants
from .rng import SplitMix64
from .display import (
    format_invariant_report,
    format_report,
    format_sweep,
    plot_defect_sweep,
)

PRESETS = {
    "quick": ProbeConfig.quick,
    "default": ProbeConfig.default,
    "large": ProbeConfig.large,
}


def _build_config(preset, **overrides) -> ProbeConfig:
    """Build ProbeConfig from a preset plus explicit CLI options."""
    cfg = PRESETS[preset]()
    changes = {k: v for k, v in overrides.items() if v is not None}
    if changes:
        cfg = cfg.replace(**changes)
    return cfg


def _fail(e: Exception, code: int = 2):
    click.echo(f"Error: {e}", err=True)
    sys.exit(code)


def _parse_sizes(text: str):
    try:
        return [int(s) for s in text.split(",") if s.strip()]
    except ValueError:
        raise click.BadParameter(f"expected comma-separated integers, got {text!r}")


preset_option = click.option(
    "--preset", type=click.Choice(sorted(PRESETS)), default="default",
    help="Configuration preset.")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose):
    """SMRK Spectral Probe -- symmetry of the truncated prime-shift operator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


@main.command()
def version():
    """Print the engine version string."""
    click.echo(get_version())


@main.command()
@preset_option
def info(preset):
    """Show preset configuration, guardrails and cost estimate."""
    cfg = PRESETS[preset]()

    click.echo("=" * 50)
    click.echo("  SMRK PROBE - System Information")
    click.echo("=" * 50)
    click.echo(f"  Truncation size (N):   {cfg.n}")
    click.echo(f"  Prime cutoff (Pmax):   {cfg.prime_cutoff}")
    click.echo(f"  Primes <= Pmax:        {cfg.num_primes()}")
    click.echo(f"  alpha, beta:           {cfg.alpha}, {cfg.beta}")
    click.echo(f"  Seed:                  {cfg.seed}")
    click.echo(f"  Trials:                {cfg.trials}")
    click.echo(f"  Shift-term updates:    {cfg.work_estimate():.3e}")

    click.echo("\n  Guardrails:")
    click.echo(f"    matvec N    <= {MAX_MATVEC_N}")
    click.echo(f"    probe N     <= {MAX_PROBE_N}")
    click.echo(f"    Pmax        <= {MAX_PRIME_CUTOFF}")
    click.echo(f"    trials      in 1..{MAX_TRIALS}")
    click.echo("=" * 50)


@main.command()
@click.option("--n", "n", type=int, required=True, help="Truncation size N.")
@click.option("--p-max", type=int, required=True, help="Prime cutoff.")
@click.option("--alpha", type=float, default=0.0, help="Von Mangoldt coefficient.")
@click.option("--beta", type=float, default=0.0, help="log n coefficient.")
@click.option("--unit", type=int, default=None,
              help="Use the unit vector at integer K (1-based).")
@click.option("--random-seed", type=int, default=None,
              help="Use a signed random vector from this seed.")
@click.option("--input", "input_path", type=click.Path(exists=True), default=None,
              help="Read x from a whitespace-separated text file.")
@click.option("--output", "-o", type=str, default=None,
              help="Write y to a text file instead of printing.")
def matvec(n, p_max, alpha, beta, unit, random_seed, input_path, output):
    """Apply H to a vector and print y = Hx."""
    chosen = [o for o in (unit, random_seed, input_path) if o is not None]
    if len(chosen) != 1:
        raise click.UsageError("give exactly one of --unit, --random-seed, --input")

    if n < 1 or n > MAX_MATVEC_N:
        _fail(InvalidArgument(f"N must be in 1..={MAX_MATVEC_N}, got {n}"))

    if input_path is not None:
        x = np.atleast_1d(np.loadtxt(input_path, dtype=np.float64))
    elif random_seed is not None:
        x = SplitMix64(random_seed).signed_vector(n)
    else:
        if not 1 <= unit <= n:
            raise click.BadParameter(f"--unit must be in 1..{n}, got {unit}")
        x = np.zeros(n)
        x[unit - 1] = 1.0

    try:
        y = run_matvec(n, p_max, alpha, beta, x)
    except InvalidArgument as e:
        _fail(e)

    if output:
        np.savetxt(output, y, fmt="%.17g")
        click.echo(f"Wrote {len(y)} values to {output}")
    else:
        for i, v in enumerate(y, start=1):
            click.echo(f"{i}\t{v:.17g}")


@main.command()
@preset_option
@click.option("--n", "n", type=int, default=None, help="Truncation size N.")
@click.option("--p-max", type=int, default=None, help="Prime cutoff.")
@click.option("--alpha", type=float, default=None, help="Von Mangoldt coefficient.")
@click.option("--beta", type=float, default=None, help="log n coefficient.")
@click.option("--seed", type=int, default=None, help="RNG seed.")
@click.option("--trials", type=int, default=None, help="Number of trials.")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
def probe(preset, n, p_max, alpha, beta, seed, trials, as_json):
    """Estimate the symmetry defect of H with random probes."""
    try:
        cfg = _build_config(preset, n=n, prime_cutoff=p_max, alpha=alpha,
                            beta=beta, seed=seed, trials=trials)
    except InvalidArgument as e:
        _fail(e)

    t0 = time.time()
    runner = SymmetryProbe(cfg)
    results = list(tqdm(runner.iter_trials(), total=cfg.trials,
                        desc="Probing", unit="trial", disable=as_json))
    report = runner.aggregate(results)
    elapsed = time.time() - t0

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        click.echo(format_report(report))
        click.echo(f"\nCompleted in {elapsed:.1f}s")


def _run_sweep(sizes, p_max, alpha, beta, seed, trials):
    try:
        return size_sweep(tqdm(sizes, desc="Sweeping", unit="N"), p_max,
                          alpha=alpha, beta=beta, seed=seed, trials=trials)
    except InvalidArgument as e:
        _fail(e)


sweep_options = [
    click.option("--sizes", type=str, default="100,300,1000,3000,10000",
                 help="Comma-separated truncation sizes."),
    click.option("--p-max", type=int, default=100, help="Prime cutoff."),
    click.option("--alpha", type=float, default=1.0, help="Von Mangoldt coefficient."),
    click.option("--beta", type=float, default=0.0, help="log n coefficient."),
    click.option("--seed", type=int, default=42, help="RNG seed."),
    click.option("--trials", type=int, default=10, help="Trials per size."),
]


def _with_sweep_options(f):
    for option in reversed(sweep_options):
        f = option(f)
    return f


@main.command()
@_with_sweep_options
def sweep(sizes, p_max, alpha, beta, seed, trials):
    """Run one probe per truncation size and tabulate the defect."""
    reports = _run_sweep(_parse_sizes(sizes), p_max, alpha, beta, seed, trials)
    click.echo(format_sweep(reports))


@main.command()
@_with_sweep_options
@click.option("--output", "-o", type=str, default=None,
              help="Save plot to file instead of displaying.")
def plot(sizes, p_max, alpha, beta, seed, trials, output):
    """Plot the symmetry defect against truncation size."""
    t0 = time.time()
    reports = _run_sweep(_parse_sizes(sizes), p_max, alpha, beta, seed, trials)
    plot_defect_sweep(reports, output_path=output, show=output is None)
    click.echo(f"Completed in {time.time() - t0:.1f}s")


@main.command()
@preset_option
def validate(preset):
    """Run all invariant checks."""
    cfg = PRESETS[preset]()
    click.echo(f"Configuration: N={cfg.n}, Pmax={cfg.prime_cutoff}, "
               f"alpha={cfg.alpha}, beta={cfg.beta}, seed={cfg.seed}")
    click.echo("Running invariant checks...\n")

    t0 = time.time()
    try:
        results = run_all_invariants(cfg)
    except ArithmeticDegenerate as e:
        click.echo(f"\nFATAL: {e}", err=True)
        sys.exit(1)

    click.echo(format_invariant_report(results))
    click.echo(f"\nCompleted in {time.time() - t0:.1f}s")

    if not all(r.passed for r in results):
        sys.exit(1)
