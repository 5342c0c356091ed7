# Snake - Dark Mode
# Fixed-timestep driving: frame timestamps in, discrete snake/mouse ticks out.

import logging

logger = logging.getLogger(__name__)


class TickAccumulator:
    """Banks elapsed seconds and pays them out one tick at a time.

    The rate is asked for again before every tick because a tick can change it
    (an apple bumps the snake speed, a banana slows it).
    """

    def __init__(self):
        self.elapsed = 0.0

    def add(self, dt):
        self.elapsed += max(0.0, dt)

    def reset(self):
        self.elapsed = 0.0

    def drain(self, rate, step):
        """Run step() while a full tick is banked. Returns how many ticks ran."""
        ticks = 0
        while True:
            duration = 1.0 / rate()
            if self.elapsed < duration:
                return ticks
            step()
            self.elapsed -= duration
            ticks += 1


class ErrorSink:
    """Keeps the first fault only and forwards it to an optional reporter."""

    def __init__(self, report=None):
        self.report = report
        self.error = None

    @property
    def captured(self):
        return self.error is not None

    def handle(self, exc):
        if self.error is not None:
            return False
        self.error = exc
        if self.report is not None:
            self.report(str(exc) or type(exc).__name__)
        return True


class FrameLoop:
    """One call per display frame, the only thing that mutates the engine.

    While the engine is not playing the accumulators stay frozen, so resuming
    never releases a burst of catch-up ticks. Any exception halts the loop for
    good; it is logged and reported once through the error sink.
    """

    def __init__(self, engine, present=None, errors=None):
        self.engine = engine
        self.present = present
        self.errors = errors or ErrorSink()
        self.snake_acc = TickAccumulator()
        self.mouse_acc = TickAccumulator()
        self.last_time = None
        self.halted = False
        self._seen_runs = engine.runs

    def reset(self):
        self.snake_acc.reset()
        self.mouse_acc.reset()
        self.last_time = None

    def on_frame(self, timestamp):
        """Advance by the time since the previous frame. Returns False once halted."""
        if self.halted:
            return False
        try:
            self._frame(timestamp)
        except Exception as exc:
            logger.exception("Frame failed, stopping the loop")
            self.fail(exc)
            return False
        return True

    # Render passes run outside on_frame in the window; their faults land here too.
    def fail(self, exc):
        self.halted = True
        self.errors.handle(exc)

    def _frame(self, timestamp):
        engine = self.engine
        if engine.runs != self._seen_runs:
            self._seen_runs = engine.runs
            self.reset()

        if self.last_time is None:
            self.last_time = timestamp
        dt = timestamp - self.last_time
        self.last_time = timestamp

        if engine.playing:
            self.snake_acc.add(dt)
            self.mouse_acc.add(dt)
            self.snake_acc.drain(engine.snake_cps, engine.tick)
            self.mouse_acc.drain(engine.mouse_cps, engine.tick_mouse)

        if self.present is not None:
            self.present(engine.snapshot())
