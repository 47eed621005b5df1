"""Shared test helpers for TreadPro."""

from treadpro.timer.engine import WorkoutEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


ENGINE_SIGNALS = (
    "countdown_cue",
    "segment_end_cue",
    "segment_changed",
    "finished",
    "cancelled",
    "state_changed",
    "updated",
)


def collect_all(engine: WorkoutEngine) -> dict[str, SignalCollector]:
    """Attach a collector to every engine signal."""
    collectors = {}
    for name in ENGINE_SIGNALS:
        c = SignalCollector()
        getattr(engine, name).connect(c)
        collectors[name] = c
    return collectors


def run_ticks(engine: WorkoutEngine, n: int) -> None:
    """Drive *n* ticks synchronously, as the QTimer would."""
    for _ in range(n):
        engine._on_tick()
