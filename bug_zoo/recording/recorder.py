# bug_zoo/recording/recorder.py
from __future__ import annotations
import os, time
from typing import Optional
import numpy as np


class Recorder:
    """
    Capture a trace of the population every `stride_ticks` ticks (NPZ).
    Stores per-creature hp/aggression/speed/severity, a hybrid mask, the
    tick number and the chaos score. Write-only: nothing reads it back.
    """
    def __init__(self, enabled=False, stride_ticks=1, out_dir="recordings"):
        self.enabled = enabled
        self.stride_ticks = max(1, int(stride_ticks))
        self.out_dir = out_dir
        self._calls = 0
        self.stats_list = []
        self.hybrid_list = []
        self.tick_list = []
        self.chaos_list = []
        self.maxN = 0

    def toggle(self): self.enabled = not self.enabled; print(f"[Recorder] {'ON' if self.enabled else 'OFF'}")
    def clear(self):
        self._calls = 0
        self.stats_list.clear(); self.hybrid_list.clear()
        self.tick_list.clear(); self.chaos_list.clear()
        self.maxN = 0
        print("[Recorder] cleared")

    def maybe_capture(self, session):
        if not self.enabled: return
        self._calls += 1
        if (self._calls % self.stride_ticks) != 0: return

        pop = [c for c in session.creatures if not c.is_extinct]
        N = len(pop); self.maxN = max(self.maxN, N)
        st = np.zeros((N, 4), np.float32)
        hyb = np.zeros((N,), np.bool_)

        for i, c in enumerate(pop):
            st[i] = (c.hp, c.aggression, c.speed, int(c.severity))
            hyb[i] = c.is_hybrid

        self.stats_list.append(st)
        self.hybrid_list.append(hyb)
        self.tick_list.append(session.tick_count)
        self.chaos_list.append(session.chaos)

    def save_npz(self, out_path: Optional[str]=None):
        if not self.stats_list:
            print("[Recorder] nothing to save"); return None

        T = len(self.stats_list); maxN = self.maxN
        stats = np.full((T, maxN, 4), np.nan, np.float32)
        hybrid = np.zeros((T, maxN), np.bool_)
        count = np.zeros((T,), np.int32)

        for t in range(T):
            N = self.stats_list[t].shape[0]
            count[t] = N
            if N:
                stats[t, :N] = self.stats_list[t]
                hybrid[t, :N] = self.hybrid_list[t]

        if out_path is None:
            os.makedirs(self.out_dir, exist_ok=True)
            stamp = time.strftime("%Y%m%d_%H%M%S")
            out_path = os.path.join(self.out_dir, f"zoo_run_{stamp}.npz")

        np.savez_compressed(
            out_path,
            stride_ticks=np.int32(self.stride_ticks),
            stats=stats, hybrid=hybrid, count=count,
            tick=np.asarray(self.tick_list, np.int32),
            chaos=np.asarray(self.chaos_list, np.int32),
            columns=np.array(["hp", "aggression", "speed", "severity"]),
        )
        print(f"[Recorder] saved: {out_path} (T={T}, maxN={maxN})")
        return out_path
