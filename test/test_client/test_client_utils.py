from synccircle.client import Debouncer, QueryCache
from fakes import TimerFactory

def test_query_cache_fetch_and_invalidate():
    cache = QueryCache()
    loads = []

    def loader():
        loads.append(1)
        return len(loads)

    assert cache.fetch('/a', loader) == 1
    assert cache.fetch('/a', loader) == 1

    cache.invalidate('/a')
    assert cache.is_stale('/a')
    # Invalidated entries keep serving their last value through get()
    assert cache.get('/a') == 1
    assert cache.fetch('/a', loader) == 2
    assert not cache.is_stale('/a')

def test_query_cache_evict():
    cache = QueryCache()
    cache.set('/a', {'x': 1})
    cache.evict('/a')
    assert '/a' not in cache
    assert cache.get('/a', 'missing') == 'missing'
    # Unknown keys are fine
    cache.evict('/b')
    cache.invalidate('/b')

def test_debouncer_restarts_and_flushes():
    calls = []
    timers = TimerFactory()
    debouncer = Debouncer(2.0, lambda: calls.append('run'), timer_factory=timers)

    debouncer.schedule()
    debouncer.schedule()
    assert debouncer.pending
    assert timers.timers[0].cancelled
    assert timers.last.daemon and timers.last.started

    assert debouncer.flush() is True
    assert calls == ['run']
    assert not debouncer.pending
    assert debouncer.flush() is False

def test_debouncer_cancel():
    calls = []
    timers = TimerFactory()
    debouncer = Debouncer(1.0, lambda: calls.append('run'), timer_factory=timers)

    debouncer.schedule()
    assert debouncer.cancel() is True
    timers.last.function()
    assert calls == []
    assert debouncer.cancel() is False
