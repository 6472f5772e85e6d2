from pathlib import Path

import regvm.sasm.asm as asm
import regvm.runtime.cpu as cpu
from regvm.runtime.registers import RegisterFile


def find_file(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_file(filename: str) -> str:
    return find_file(filename).read_text()


class ScriptedPrompt:
    ''' Answers prompts from a fixed list, None stands for "cancel" '''

    def __init__(self, *answers: str | None):
        self.answers = list(answers)
        self.asked: list[str] = []

    def __call__(self, message: str) -> str | None:
        self.asked.append(message)
        return self.answers.pop(0)


def run_program(source: str, preset: dict[int, int] | None = None, prompt=None):
    registers = RegisterFile()

    for index, value in (preset or {}).items():
        registers.set(index, value)

    proc = cpu.CPU(registers, prompt)
    output = proc.execute(asm.assemble(source))
    return output, registers
