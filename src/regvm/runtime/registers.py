import logging as lg

from regvm.common.hwconf import REGISTER_COUNT
from regvm.common.radix import to_int32, to_uint32


class IndexOutOfRange(IndexError):
    pass


class RegisterFile:
    gp: list[int]  # General purpose registers

    def __init__(self, size: int = REGISTER_COUNT):
        self.gp = [0] * size

    def check_index(self, index: int):
        if index < 0 or index >= len(self.gp):
            raise IndexOutOfRange(f'Register index {index} out of range (0-{len(self.gp) - 1})')

    def get(self, index: int) -> int:
        self.check_index(index)
        return self.gp[index]

    def set(self, index: int, value: int):
        self.check_index(index)
        self.gp[index] = to_int32(value)

    def all(self) -> tuple[int, ...]:
        return tuple(self.gp)

    def clear(self):
        self.gp = [0] * len(self.gp)

    def __len__(self) -> int:
        return len(self.gp)

    def debug_dump(self):
        state = [f'R{i}:{to_uint32(v):08X}' for i, v in enumerate(self.gp) if v != 0]
        lg.debug(' '.join(state) if state else 'all registers zero')
