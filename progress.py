"""Progress tracking for CLI runs."""

import time


class ProgressRenderer:
    """Minimal in-terminal progress bar for batch runs."""

    def __init__(self, enable: bool = True, width: int = 40):
        self.enable = enable
        self.width = width
        self.reset(0)

    def reset(self, total: int) -> None:
        self.total = max(total, 0)
        self.stars = 0
        self.failed = 0
        self.start = time.time()
        self.last_line = ""

    def update(self, current: int, *, stars: int = 0, failed: bool = False) -> None:
        if failed:
            self.failed += 1
        else:
            self.stars += stars
        if not self.enable or self.total <= 0:
            return

        pct = current / self.total if self.total else 0
        filled = int(self.width * pct)
        bar = "#" * filled + "-" * (self.width - filled)
        elapsed = time.time() - self.start
        rate = current / elapsed if elapsed > 0 else 0
        remaining = self.total - current
        eta = remaining / rate if rate > 0 else None

        line = (
            f"[{bar}] {current}/{self.total} "
            f"stars:{self.stars} failed:{self.failed} "
            f"elapsed:{elapsed:.1f}s"
        )
        if eta is not None:
            line += f" ETA:{eta:.1f}s"

        # Minimize flicker by only rewriting when content changes
        if line != self.last_line:
            print("\r" + line, end="", flush=True)
            self.last_line = line

        if current >= self.total:
            print()
