"""
Defect sweep -- batch run of the symmetry probe.

Probes H over a geometric grid of truncation sizes for three diagonal
regimes and stores every per-trial defect, so the scaling of the
rounding-only asymmetry with N can be studied offline.

Output: artifacts/defect_sweep.npz

Regimes:
  shift    (alpha=0, beta=0)  -- prime shifts only
  mangoldt (alpha=1, beta=0)  -- von Mangoldt diagonal
  log      (alpha=0, beta=1)  -- log n diagonal

Usage:
    python scripts/probe_sweep.py              # full run
    python scripts/probe_sweep.py --smoke      # quick test
"""

import sys
import os
import time
import argparse

import numpy as np
from tqdm import tqdm

# Allow running as `python scripts/probe_sweep.py` without install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from smrk_probe.config import ProbeConfig
from smrk_probe.engine import SymmetryProbe


REGIMES = [
    ("shift",    0.0, 0.0),
    ("mangoldt", 1.0, 0.0),
    ("log",      0.0, 1.0),
]
SEED = 20240101


def sweep_regime(sizes, p_max: int, alpha: float, beta: float,
                 trials: int, label: str) -> np.ndarray:
    """
    Per-trial defects for one regime, shape (len(sizes), trials).
    Row i uses truncation size sizes[i].
    """
    defects = np.empty((len(sizes), trials), dtype=np.float64)
    with tqdm(total=len(sizes) * trials, desc=label, unit="trial") as pbar:
        for i, n in enumerate(sizes):
            cfg = ProbeConfig(n=int(n), prime_cutoff=p_max, alpha=alpha,
                              beta=beta, seed=SEED, trials=trials)
            for tr in SymmetryProbe(cfg).iter_trials():
                defects[i, tr.index] = tr.defect
                pbar.update(1)
    return defects


def main():
    parser = argparse.ArgumentParser(description="Sweep the SMRK symmetry defect")
    parser.add_argument("--smoke", action="store_true",
                        help="Quick smoke test with reduced parameters")
    parser.add_argument("--p-max", type=int, default=1000, help="Prime cutoff")
    parser.add_argument("--output", "-o", type=str, default=None,
                        help="Output path (default: artifacts/defect_sweep.npz)")
    args = parser.parse_args()

    if args.smoke:
        sizes = np.array([50, 100, 200])
        trials = 3
        p_max = min(args.p_max, 50)
        print("SMOKE TEST MODE: reduced parameters for quick verification\n")
    else:
        sizes = np.unique(np.geomspace(100, 20_000, 12).astype(int))
        trials = 50
        p_max = args.p_max
        print(f"Full sweep: {len(sizes)} sizes x {trials} trials, p_max={p_max}\n")

    if args.output:
        out_path = args.output
    else:
        out_dir = os.path.join(os.path.dirname(__file__), "..", "artifacts")
        os.makedirs(out_dir, exist_ok=True)
        out_path = os.path.join(out_dir, "defect_sweep.npz")

    total_t0 = time.time()
    arrays = {"sizes": sizes}

    for label, alpha, beta in REGIMES:
        t0 = time.time()
        defects = sweep_regime(sizes, p_max, alpha, beta, trials, label)
        arrays[label] = defects
        print(f"  {label}: mean defect at N={sizes[-1]}: "
              f"{defects[-1].mean():.3e} ({time.time() - t0:.1f}s)")

    np.savez(out_path, p_max=p_max, seed=SEED, **arrays)
    print(f"\n{'='*60}")
    print(f"  OUTPUT: {out_path}")
    print(f"  Total time: {(time.time() - total_t0) / 60:.1f} min")
    print(f"{'='*60}")


if __name__ == "__main__":
    main()
