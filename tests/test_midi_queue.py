import threading

from samplecore.midi_queue import CAPACITY, MidiQueue


def test_fifo_order():
    queue = MidiQueue()
    for note in (60, 62, 64):
        assert queue.push(("on", note))
    assert [queue.pop() for _ in range(3)] == [("on", 60), ("on", 62), ("on", 64)]


def test_pop_empty_returns_none():
    queue = MidiQueue()
    assert queue.pop() is None
    assert len(queue) == 0


def test_capacity_leaves_one_slot_free():
    queue = MidiQueue()
    results = [queue.push(i) for i in range(CAPACITY)]
    assert results[: CAPACITY - 1] == [True] * (CAPACITY - 1)
    assert results[-1] is False
    assert len(queue) == CAPACITY - 1


def test_push_succeeds_again_after_pop():
    queue = MidiQueue()
    for i in range(CAPACITY - 1):
        queue.push(i)
    assert queue.pop() == 0
    assert queue.push("late")
    assert len(queue) == CAPACITY - 1


def test_clear():
    queue = MidiQueue()
    queue.push(1)
    queue.push(2)
    queue.clear()
    assert len(queue) == 0
    assert queue.pop() is None


def test_producer_consumer_threads_preserve_order():
    queue = MidiQueue()
    total = 500
    received = []

    def produce():
        for i in range(total):
            while not queue.push(i):
                pass

    producer = threading.Thread(target=produce)
    producer.start()
    while len(received) < total:
        event = queue.pop()
        if event is not None:
            received.append(event)
    producer.join()
    assert received == list(range(total))