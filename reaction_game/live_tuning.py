# live_tuning.py
from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Dict, Tuple

from reaction_game.config import ConfigError, GameConfig

_TUNABLE = {f.name for f in dataclasses.fields(GameConfig)}


class RuntimeParamWatcher:
    """Watch a JSON file of ``GameConfig`` overrides and hot-reload it."""

    def __init__(self, path: str | Path = "runtime_params.json") -> None:
        self.path = Path(path).expanduser().resolve()
        self._stamp: Tuple[float, int] = (0.0, -1)  # (mtime, size)
        self.params: Dict[str, Any] = {}

        print(f"[Runtime] Watching: {self.path}")
        self._load(initial=True)

    # ------------------------------------------------------------------
    #   Internal helpers
    # ------------------------------------------------------------------
    def _load(self, *, initial: bool = False) -> None:
        try:
            with self.path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
            stat = self.path.stat()
            self._stamp = (stat.st_mtime, stat.st_size)
        except FileNotFoundError:
            if initial:
                print(
                    f"[Runtime] {self.path} not found – live-tuning disabled "
                    "(create the file to enable)."
                )
            else:
                print(f"[Runtime] {self.path} was deleted – keeping old params.")
            return
        except json.JSONDecodeError as exc:
            print(f"[Runtime] JSON error in {self.path}: {exc}")
            return

        if not isinstance(data, dict):
            print(f"[Runtime] {self.path} must hold a JSON object – ignored.")
            return
        unknown = sorted(set(data) - _TUNABLE)
        if unknown:
            print(f"[Runtime] Ignoring unknown keys: {', '.join(unknown)}")
        self.params = {k: v for k, v in data.items() if k in _TUNABLE}
        if not initial:
            print(f"[Runtime] Reloaded parameters from {self.path}")

    # ------------------------------------------------------------------
    #   Public API
    # ------------------------------------------------------------------
    def maybe_reload(self) -> bool:
        """
        If the watched file changed since the last call reload it and
        return **True**, else return **False**.
        """
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return False

        mtime, fsize = self._stamp
        # Some filesystems only update timestamps in 1- or 2-second ticks,
        # so any change >=1 s *or* a size change counts as "modified".
        if stat.st_size != fsize or stat.st_mtime - mtime >= 1.0:
            self._load()
            return True
        return False

    def tuned(self, base: GameConfig) -> GameConfig:
        """``base`` with the watched overrides applied, or ``base`` if invalid."""
        if not self.params:
            return base
        params = dict(self.params)
        if "aim_offset" in params and isinstance(params["aim_offset"], list):
            params["aim_offset"] = tuple(params["aim_offset"])
        try:
            return dataclasses.replace(base, **params)
        except (ConfigError, TypeError) as exc:
            print(f"[Runtime] Rejected parameters, keeping previous config: {exc}")
            return base
