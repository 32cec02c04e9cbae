from __future__ import annotations


class RequestTracker:
    """Latest-request-wins bookkeeping for one view.

    Each request gets a token from ``issue``. A completion may commit only
    while ``is_current(token)`` holds: a newer request, ``supersede`` or
    ``teardown`` all end interest in older ones. Nothing is cancelled; late
    results are simply dropped.
    """

    def __init__(self) -> None:
        self._latest = 0
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def supersede(self) -> None:
        self._latest += 1

    def is_current(self, token: int) -> bool:
        return self._alive and token == self._latest

    def teardown(self) -> None:
        self._alive = False
