# type: ignore
import pytest

from regvm.runtime.registers import RegisterFile


@pytest.fixture
def registers():
    yield RegisterFile()
