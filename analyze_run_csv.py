#!/usr/bin/env python3
"""
Analyze tick CSVs produced by TickCsvLogger.

Features:
  - --session latest|<id> filters to a single run (runs/ can keep many)
  - Saves timestamped CSV exports and PNG plots under --outdir
  - Overall plot:
      (1) Total N + hybrids + per-category N
      (2) Avg hp, avg aggression & avg speed
      (3) Chaos score
  - Category plot: one line of N per category (base and hybrid)
Usage examples:
  python analyze_run_csv.py --overall runs/zoo_ticks.csv \
                            --category runs/zoo_category_ticks.csv \
                            --outdir reports \
                            --tag demo \
                            --session latest
"""
import argparse
import os
import sys
import time
import pandas as pd

# Use non-interactive backend for headless operation
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


OVERALL_NUMERIC = ("tick", "n", "hybrids", "total_hp", "avg_hp", "avg_aggression", "avg_speed",
                   "avg_reproduction_rate", "hp_min", "hp_median", "hp_max", "critical", "high",
                   "chaos", "events")
CATEGORY_NUMERIC = ("tick", "hybrid", "n", "avg_hp", "avg_aggression", "avg_speed")


# ------------------------- utilities -------------------------
def ensure_dir(p: str) -> None:
    os.makedirs(p, exist_ok=True)

def timestamp(tag: str | None = None) -> str:
    t = time.strftime("%Y%m%d_%H%M%S")
    return f"{t}__{tag}" if tag else t

def exists(path: str | None) -> bool:
    return bool(path and os.path.exists(path))


# ------------------------- loading ---------------------------
def load_csvs(overall_path: str, category_path: str | None):
    if not exists(overall_path):
        print(
            "\n[ERROR] Overall CSV not found.\n"
            f"  Expected: {overall_path}\n"
            "Hints:\n"
            "  • Run `python -m bug_zoo.main --code <file>` for at least one tick.\n"
            "  • Confirm --csv on the run matches --overall here.\n",
            file=sys.stderr
        )
        sys.exit(1)

    df_overall = pd.read_csv(overall_path)
    df_category = pd.read_csv(category_path) if (category_path and exists(category_path)) else None
    return df_overall, df_category


def latest_session_id(df: pd.DataFrame) -> str | None:
    """Return the last session_id in file order (used by --session latest)."""
    if "session_id" not in df.columns or len(df) == 0:
        return None
    s = df["session_id"].dropna()
    return s.iloc[-1] if len(s) else None


def filter_session(df: pd.DataFrame | None, sid: str) -> pd.DataFrame | None:
    if df is None or "session_id" not in df.columns:
        return df
    return df[df["session_id"].astype(str) == str(sid)].copy()


# ------------------------- cleaning --------------------------
def _coerce(df: pd.DataFrame, cols) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def clean_overall(df_overall: pd.DataFrame) -> pd.DataFrame:
    df_overall = _coerce(df_overall.copy(), OVERALL_NUMERIC)
    # If multiple sessions are present, average by tick
    if "session_id" in df_overall.columns and "tick" in df_overall.columns:
        keep = [c for c in OVERALL_NUMERIC if c != "tick" and c in df_overall.columns]
        d = df_overall.groupby("tick", as_index=False)[keep].mean()
        return d.sort_values("tick")
    return df_overall.sort_values("tick") if "tick" in df_overall.columns else df_overall


def clean_category(df_category: pd.DataFrame | None) -> pd.DataFrame:
    if df_category is None or len(df_category) == 0:
        return pd.DataFrame()
    df_category = _coerce(df_category.copy(), CATEGORY_NUMERIC)
    keep = [c for c in CATEGORY_NUMERIC if c not in ("tick", "hybrid") and c in df_category.columns]
    keys = [k for k in ("category", "name", "tick") if k in df_category.columns]
    d = df_category.groupby(keys, as_index=False)[keep].mean()
    return d.sort_values(keys)


# ------------------------- plotting --------------------------
def plot_overall(df_overall: pd.DataFrame, df_category: pd.DataFrame | None, outdir: str, tag: str | None) -> str:
    """
    Trends figure with 3 subplots:
      (1) Total N, hybrids, and per-category N
      (2) Avg hp / aggression / speed
      (3) Chaos score
    """
    ensure_dir(outdir)
    g = clean_overall(df_overall)
    fig, ax = plt.subplots(3, 1, figsize=(10, 11), sharex=True)

    if {"tick", "n"} <= set(g.columns):
        ax[0].plot(g["tick"], g["n"], label="Total N", color="black", linewidth=2.25)
    if "hybrids" in g.columns:
        ax[0].plot(g["tick"], g["hybrids"], label="Hybrids", linestyle="--")

    if df_category is not None and len(df_category) > 0:
        try:
            g_cat = clean_category(df_category)
            for cat, sub in g_cat.groupby("category"):
                ax[0].plot(sub["tick"], sub["n"], linewidth=1.2, label=f"N: {cat}")
        except Exception as e:
            print(f"[WARN] Skipping per-category N overlay: {e}", file=sys.stderr)

    ax[0].set_ylabel("Count")
    ax[0].legend(loc="best", ncols=2, fontsize="small")
    ax[0].grid(alpha=0.25)

    for col, label in (("avg_hp", "Avg hp"), ("avg_aggression", "Avg aggression"), ("avg_speed", "Avg speed")):
        if col in g.columns:
            ax[1].plot(g["tick"], g[col], label=label)
    ax[1].set_ylabel("Stat value")
    ax[1].legend(loc="best")
    ax[1].grid(alpha=0.25)

    if "chaos" in g.columns:
        ax[2].plot(g["tick"], g["chaos"], color="tab:red", label="Chaos")
        ax[2].axhline(30, color="gray", linewidth=0.8, linestyle=":")
        ax[2].axhline(70, color="gray", linewidth=0.8, linestyle=":")
    ax[2].set_xlabel("Tick")
    ax[2].set_ylabel("Chaos")
    ax[2].set_ylim(0, 100)
    ax[2].legend(loc="best")
    ax[2].grid(alpha=0.25)

    fig.tight_layout()
    png = os.path.join(outdir, f"overall_trends_{timestamp(tag)}.png")
    fig.savefig(png, dpi=160)
    plt.close(fig)
    print(f"[OK] Saved {png}")
    return png


def plot_categories(df_category: pd.DataFrame | None, outdir: str, tag: str | None) -> str | None:
    if df_category is None or len(df_category) == 0:
        print("[INFO] No category CSV provided or rows = 0; skipping category plot.")
        return None
    needed = {"tick", "n", "category"}
    if not needed.issubset(df_category.columns):
        print(f"[WARN] category CSV missing columns {needed - set(df_category.columns)}; skipping category plot.")
        return None

    ensure_dir(outdir)
    g = clean_category(df_category)
    fig, ax = plt.subplots(2, 1, figsize=(10, 8), sharex=True)
    for cat, sub in g.groupby("category"):
        style = "--" if "+" in str(cat) else "-"
        ax[0].plot(sub["tick"], sub["n"], linestyle=style, label=str(cat))
        if "avg_hp" in sub.columns:
            ax[1].plot(sub["tick"], sub["avg_hp"], linestyle=style, label=str(cat))
    ax[0].set_ylabel("Count")
    ax[0].legend(loc="best", fontsize="small")
    ax[0].grid(alpha=0.25)
    ax[1].set_xlabel("Tick")
    ax[1].set_ylabel("Avg hp")
    ax[1].grid(alpha=0.25)

    fig.tight_layout()
    png = os.path.join(outdir, f"category_trends_{timestamp(tag)}.png")
    fig.savefig(png, dpi=160)
    plt.close(fig)
    print(f"[OK] Saved {png}")
    return png


# ------------------------- exports ---------------------------
def export_csv(df: pd.DataFrame, outdir: str, base: str, tag: str | None) -> str:
    ensure_dir(outdir)
    path = os.path.join(outdir, f"{base}_{timestamp(tag)}.csv")
    df.to_csv(path, index=False)
    print(f"[OK] Wrote {path}")
    return path


# ------------------------- main ------------------------------
def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--overall", type=str, default="runs/zoo_ticks.csv",
                    help="Path to overall tick CSV written by the CLI")
    ap.add_argument("--category", type=str, default="runs/zoo_category_ticks.csv",
                    help="Path to per-category tick CSV (pass '' to disable)")
    ap.add_argument("--outdir", type=str, default="reports")
    ap.add_argument("--tag", type=str, default="",
                    help="Optional label to append to filenames")
    ap.add_argument("--session", type=str, default="",
                    help="Session ID to analyze; 'latest' picks the most recent session.")
    args = ap.parse_args()

    df_overall, df_category = load_csvs(args.overall, args.category or None)

    if args.session:
        if "session_id" not in df_overall.columns:
            print("[WARN] --session provided but overall CSV has no session_id; ignoring.")
        else:
            sid = latest_session_id(df_overall) if args.session == "latest" else args.session
            if sid:
                df_overall = filter_session(df_overall, sid)
                df_category = filter_session(df_category, sid)
                print(f"[OK] Filtering analysis to session_id={sid}")
            else:
                print("[WARN] Could not resolve latest session_id; analyzing all data.")

    print(f"[INFO] Overall rows after filter: {len(df_overall)}")
    tag = args.tag or None

    export_csv(clean_overall(df_overall), args.outdir, base="overall_summary", tag=tag)
    df_category_clean = clean_category(df_category)
    if len(df_category_clean) > 0:
        export_csv(df_category_clean, args.outdir, base="category_summary", tag=tag)

    plot_overall(df_overall, df_category, args.outdir, tag=tag)
    plot_categories(df_category, args.outdir, tag=tag)

    print(f"\nDone. Outputs are in: {args.outdir}")

if __name__ == "__main__":
    main()
