import pytest


class RecordingSender:
    """Stands in for EscrowApiClient; records every call and returns a canned result."""

    def __init__(self, result=None):
        self.calls = []
        self.result = {"ok": True} if result is None else result

    def request(self, method, path, *, json_body=None):
        self.calls.append((method, path, json_body))
        return self.result

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def sender():
    return RecordingSender()
