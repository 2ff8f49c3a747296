import io
import signal

from taskkit.logger import Logger
from taskkit.signals import InterruptCounter, intercept_interrupt_signals


def _counter():
    out, err = io.StringIO(), io.StringIO()
    codes = []
    counter = InterruptCounter(Logger(stdout=out, stderr=err), exit_func=codes.append)
    return counter, out, err, codes


def test_first_two_signals_are_logged():
    counter, out, err, codes = _counter()
    counter.handle(signal.SIGINT, None)
    counter.handle(signal.SIGINT, None)
    assert out.getvalue() == 'task: Signal received: "interrupt"\n' * 2
    assert codes == []
    assert err.getvalue() == ""


def test_third_signal_forces_exit():
    counter, out, err, codes = _counter()
    for _ in range(3):
        counter.handle(signal.SIGINT, None)
    assert codes == [1]
    assert err.getvalue() == (
        'task: Signal received for the third time: "interrupt". Forcing shutdown\n'
    )


def test_sigterm_name():
    counter, out, _, _ = _counter()
    counter.handle(signal.SIGTERM, None)
    assert out.getvalue() == 'task: Signal received: "terminated"\n'


def test_intercept_installs_handlers():
    previous_int = signal.getsignal(signal.SIGINT)
    previous_term = signal.getsignal(signal.SIGTERM)
    try:
        counter = intercept_interrupt_signals(Logger(stdout=io.StringIO()))
        assert signal.getsignal(signal.SIGINT) == counter.handle
        assert signal.getsignal(signal.SIGTERM) == counter.handle
        assert counter.count == 0
    finally:
        signal.signal(signal.SIGINT, previous_int)
        signal.signal(signal.SIGTERM, previous_term)