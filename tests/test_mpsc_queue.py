import threading

import pytest

from cooperutil.mpsc_queue import MpscQueue


def test_fifo_order():
    q = MpscQueue()
    for item in ("a", "b", "c"):
        q.enqueue(item)
    assert [q.dequeue(), q.dequeue(), q.dequeue()] == ["a", "b", "c"]
    assert q.empty()


def test_dequeue_empty_raises():
    q = MpscQueue()
    assert q.empty()
    with pytest.raises(IndexError):
        q.dequeue()


def test_drain_empties_queue():
    q = MpscQueue()
    for i in range(5):
        q.enqueue(i)
    assert list(q.drain()) == [0, 1, 2, 3, 4]
    assert q.empty()
    assert list(q.drain()) == []


def test_many_producers():
    q = MpscQueue()
    per_thread = 200

    def produce(base):
        for i in range(per_thread):
            q.enqueue((base, i))

    threads = [threading.Thread(target=produce, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    items = list(q.drain())
    assert len(items) == 4 * per_thread
    for base in range(4):
        assert [i for b, i in items if b == base] == list(range(per_thread))