# bug_zoo/main.py
from __future__ import annotations
import argparse
import os
import random
import sys

from .sim.config import SIM, SESSION
from .sim.catalog import encyclopedia
from .sim.live import ZooSession, run_periodic
from .sim.metrics import summarize_tick
from .recording.csv_writer import TickCsvLogger
from .recording.recorder import Recorder


def _read_code(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    if not os.path.exists(path):
        print(f"[ERROR] Code file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with open(path, encoding="utf-8") as f:
        return f.read()


def _print_encyclopedia():
    rows = encyclopedia()
    n_base = sum(1 for a in rows if not a.category.is_hybrid)
    print(f"{len(rows)} bug creatures | {n_base} base types | {len(rows) - n_base} hybrids")
    for a in rows:
        print(f"  {a.name:<30} {a.severity.label:<8} {str(a.breed_type):<28} {a.label}")


def _print_tick(session: ZooSession, n_events: int):
    s = summarize_tick(session.tick_count, session.creatures)
    print(
        f"Tick {s['tick']:4d} | N={s['n']:2d} hybrids={s['hybrids']:2d} "
        f"avg_hp={s['avg_hp']:6.2f} avg_aggr={s['avg_aggression']:6.2f} "
        f"threats={s['active_threats']:2d} chaos={s['chaos']:3d} events={n_events}"
    )


def run():
    parser = argparse.ArgumentParser(description="Bug Zoo: grow bug creatures from source code and watch them evolve")
    parser.add_argument("--code", type=str, default=None, help="source file to analyze ('-' reads stdin)")
    parser.add_argument("--ticks", type=int, default=SIM.ticks)
    parser.add_argument("--seed", type=int, default=SIM.seed, help="seed for the tick stream (generation is always seeded by the code)")
    parser.add_argument("--csv", type=str, default=SIM.track_csv)
    parser.add_argument("--category-csv", type=str, default=SIM.category_csv)
    parser.add_argument("--live", action="store_true", help="tick on a timer instead of as fast as possible")
    parser.add_argument("--interval", type=float, default=SESSION.tick_interval)
    parser.add_argument("--record", action="store_true", help="save an NPZ trace of the run")
    parser.add_argument("--events", action="store_true", help="print every tick event")
    parser.add_argument("--encyclopedia", action="store_true", help="list every archetype and hybrid, then exit")
    args = parser.parse_args()

    if args.encyclopedia:
        _print_encyclopedia()
        return

    if args.code is None:
        parser.error("--code is required unless --encyclopedia is given")

    code = _read_code(args.code)
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    session = ZooSession.from_text(code, rng=rng)

    for line in session.events:
        print(f"  > {line}")
    print(session.intro_narration)
    if not session.creatures:
        return
    for c in session.creatures:
        print(f"  {c.name:<14} {c.severity.label:<8} hp={c.hp:3d} aggr={c.aggression:2d} "
              f"speed={c.speed:2d} rate={c.reproduction_rate:.2f} [{c.status.value}]")

    logger = None
    if args.csv:
        logger = TickCsvLogger(overall_path=args.csv,
                               category_path=args.category_csv or "",
                               enable_categories=bool(args.category_csv))
        print(f"[INFO] session_id={logger.session_id}")

    recorder = Recorder(enabled=args.record)
    recorder.maybe_capture(session)

    last_narration = session.narration

    def on_tick(sess, result):
        nonlocal last_narration
        _print_tick(sess, len(result.events))
        if args.events:
            for e in result.events:
                print(f"  > {e.message}")
        if sess.narration != last_narration:
            print(f"  ~ {sess.narration}")
            last_narration = sess.narration
        if logger is not None:
            logger.append_tick(tick=sess.tick_count, pop=sess.creatures, events=len(result.events))
        recorder.maybe_capture(sess)
        if sess.living_count() == 0:
            print("[INFO] every creature has gone extinct; stopping")
            sess.pause()

    interval = args.interval if args.live else 0.0
    try:
        run_periodic(session, interval=interval, max_ticks=args.ticks, on_tick=on_tick)
    except KeyboardInterrupt:
        session.pause()
        print("\n[INFO] interrupted")

    hybrids = session.lineage.hybrids()
    print(f"\nDone after {session.tick_count} ticks. "
          f"{session.living_count()} creatures alive, {len(hybrids)} hybrid lines seen.")
    if args.record:
        recorder.save_npz()


if __name__ == "__main__":
    run()
