#!/usr/bin/env python3
"""
One-shot runner:
  1) Run the bug zoo on a source file (blocks until the ticks are done)
  2) Analyze only the session that run just produced

Usage:
  python run_sim_then_analyze.py --code path/to/file.js --ticks 200 --outdir reports --tag demo
"""
import argparse
import subprocess
import sys
import os
import csv

def get_latest_session_id(overall_path: str) -> str | None:
    if not os.path.exists(overall_path):
        return None
    last_sid = None
    with open(overall_path, newline="") as f:
        for row in csv.DictReader(f):
            sid = row.get("session_id")
            if sid:
                last_sid = sid
    return last_sid

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--code", required=True)
    ap.add_argument("--ticks", type=int, default=100)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--overall", default="runs/zoo_ticks.csv")
    ap.add_argument("--category", default="runs/zoo_category_ticks.csv")
    ap.add_argument("--outdir", default="reports")
    ap.add_argument("--tag", default="")
    args = ap.parse_args()

    # 1) Run the simulation
    sim_cmd = [sys.executable, "-m", "bug_zoo.main",
               "--code", args.code, "--ticks", str(args.ticks),
               "--csv", args.overall, "--category-csv", args.category]
    if args.seed is not None:
        sim_cmd += ["--seed", str(args.seed)]
    print("[launcher] Starting run:", " ".join(sim_cmd))
    ret = subprocess.call(sim_cmd)
    if ret != 0:
        print(f"[launcher] Run exited with code {ret}", file=sys.stderr)

    # 2) Resolve latest session_id
    sid = get_latest_session_id(args.overall)
    if not sid:
        print("[launcher] No session_id found in overall CSV; did any tick complete?")
        sys.exit(0)

    # 3) Analyze only this session
    ana_cmd = [
        sys.executable, "analyze_run_csv.py",
        "--overall", args.overall,
        "--category", args.category,
        "--outdir", args.outdir,
        "--tag", args.tag,
        "--session", sid
    ]
    print("[launcher] Analyzing session:", sid)
    print("[launcher] Running:", " ".join(ana_cmd))
    sys.exit(subprocess.call(ana_cmd))

if __name__ == "__main__":
    main()
