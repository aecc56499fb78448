from concurrent.futures import ThreadPoolExecutor

from casino_engine.application.account_locks import AccountLocks


def test_lock_is_released_from_registry_after_use():
    locks = AccountLocks()
    with locks.hold("u1"):
        assert len(locks) == 1
    assert len(locks) == 0


def test_waiters_share_the_same_lock():
    locks = AccountLocks()
    counter = {"value": 0}

    def increment(_):
        with locks.hold("u1"):
            current = counter["value"]
            counter["value"] = current + 1

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(increment, range(500)))

    assert counter["value"] == 500
    assert len(locks) == 0


def test_registry_does_not_grow_with_accounts_seen():
    locks = AccountLocks()
    for i in range(1000):
        with locks.hold(f"user-{i}"):
            pass
    assert len(locks) == 0
