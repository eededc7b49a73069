import threading

from attendance_payroll.common.locks import KeyedLocks


def test_released_keys_are_dropped():
    locks = KeyedLocks()

    with locks.hold(("WKR001", "2024-01-15")):
        assert len(locks) == 1
    with locks.hold(("WKR001", "2024-01-16")):
        pass

    assert len(locks) == 0


def test_waiters_share_one_lock_until_the_last_leaves():
    locks = KeyedLocks()
    key = ("WKR001", "2024-01-15")
    inside = []
    first_in = threading.Event()
    release = threading.Event()

    def holder():
        with locks.hold(key):
            first_in.set()
            release.wait(timeout=5)
            inside.append("first")

    def waiter():
        first_in.wait(timeout=5)
        with locks.hold(key):
            inside.append("second")

    t1 = threading.Thread(target=holder)
    t2 = threading.Thread(target=waiter)
    t1.start()
    t2.start()
    first_in.wait(timeout=5)
    release.set()
    t1.join()
    t2.join()

    assert inside == ["first", "second"]
    assert len(locks) == 0
