from __future__ import annotations

import threading
import time

from userhub.core.locks import KeyedLock


def test_same_key_is_serialized_and_released():
    locks = KeyedLock()
    inside = []
    overlap = []

    def _worker():
        with locks.hold("9876543210"):
            inside.append(1)
            if len(inside) > 1:
                overlap.append(True)
            time.sleep(0.01)
            inside.pop()

    threads = [threading.Thread(target=_worker) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlap == []
    assert len(locks) == 0


def test_different_keys_do_not_block_each_other():
    locks = KeyedLock()
    with locks.hold("a"):
        acquired = threading.Event()

        def _other():
            with locks.hold("b"):
                acquired.set()

        thread = threading.Thread(target=_other)
        thread.start()
        assert acquired.wait(timeout=1)
        thread.join()
        assert len(locks) == 1
    assert len(locks) == 0
