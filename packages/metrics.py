import threading
from collections import defaultdict
from typing import Dict, Tuple


_lock = threading.Lock()
_counters: Dict[str, int] = defaultdict(int)
_durations: Dict[str, float] = defaultdict(float)


def inc(name: str, value: int = 1) -> None:
    with _lock:
        _counters[name] += value


def observe(name: str, seconds: float) -> None:
    with _lock:
        _durations[name] += seconds


def snapshot() -> Tuple[Dict[str, int], Dict[str, float]]:
    with _lock:
        return dict(_counters), dict(_durations)


def reset() -> None:
    with _lock:
        _counters.clear()
        _durations.clear()


def render_text() -> str:
    counters, durations = snapshot()
    lines = [f"{name} {value}" for name, value in sorted(counters.items())]
    lines.extend(f"{name}_sum {value}" for name, value in sorted(durations.items()))
    return "\n".join(lines) + "\n"
