"""Shared test doubles."""

from typing import BinaryIO, List, Optional, Tuple

import pytest

from filecast.core.interfaces import ConnectionFactory, Executor


class FakeExecutor(Executor):
    """Records executed commands and the bytes piped to them."""

    def __init__(self, exit_codes: Optional[List[int]] = None):
        self.exit_codes = list(exit_codes or [])
        self.calls: List[Tuple[str, Optional[bytes]]] = []
        self.streams: List[BinaryIO] = []
        self.closed = False

    def exec_with_code(self, cmd: str, stdin: Optional[BinaryIO] = None) -> Tuple[str, str, int]:
        data = None
        if stdin is not None:
            self.streams.append(stdin)
            data = stdin.read()
        self.calls.append((cmd, data))
        code = self.exit_codes.pop(0) if self.exit_codes else 0
        return "", "boom" if code else "", code

    def close(self) -> None:
        self.closed = True


class FakeConnectionFactory(ConnectionFactory):
    def __init__(self, executor: Optional[FakeExecutor] = None, error: Optional[Exception] = None):
        self.executor = executor or FakeExecutor()
        self.error = error
        self.created_with: List[dict] = []

    def create(self, params: dict) -> FakeExecutor:
        self.created_with.append(params)
        if self.error:
            raise self.error
        return self.executor


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def factory(executor):
    return FakeConnectionFactory(executor)
