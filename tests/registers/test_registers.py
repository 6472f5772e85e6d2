import logging

import pytest

from regvm.runtime.registers import RegisterFile, IndexOutOfRange

from fixtures import registers  # noqa: F401


def test_initial_state(registers):  # noqa: F811
    assert len(registers) == 512
    assert registers.all() == (0,) * 512


def test_get_set(registers):  # noqa: F811
    registers.set(0, 5)
    registers.set(511, -7)

    assert registers.get(0) == 5
    assert registers.get(511) == -7
    assert registers.all()[511] == -7


def test_set_wraps_to_int32(registers):  # noqa: F811
    registers.set(1, 0x80000000)
    registers.set(2, 0x1_0000_0003)

    assert registers.get(1) == -0x80000000
    assert registers.get(2) == 3


@pytest.mark.parametrize('index', [-1, 512, 1000])
def test_bounds(registers, index):  # noqa: F811
    with pytest.raises(IndexOutOfRange):
        registers.get(index)

    with pytest.raises(IndexOutOfRange):
        registers.set(index, 1)

    assert isinstance(IndexOutOfRange(), IndexError)


def test_clear():
    registers = RegisterFile()

    for i in range(0, 512, 7):
        registers.set(i, i + 1)

    registers.clear()
    assert registers.all() == (0,) * 512


def test_snapshot_is_detached(registers):  # noqa: F811
    snapshot = registers.all()
    registers.set(3, 9)

    assert snapshot[3] == 0


def test_debug_dump_shows_bit_patterns(registers, caplog):  # noqa: F811
    registers.set(2, -1)
    registers.set(5, 255)

    with caplog.at_level(logging.DEBUG):
        registers.debug_dump()

    assert 'R2:FFFFFFFF R5:000000FF' in caplog.text
