import sys
from pathlib import Path
import logging as lg
import traceback

import click

from regvm.runtime.registers import RegisterFile
import regvm.runtime.cpu as cpu


EXIT_OK = 0
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def run(data: bytes, registers: RegisterFile, prompt: cpu.Prompt | None = None) -> str:
    ''' Executes a compiled program from a clean register file '''
    registers.clear()
    proc = cpu.CPU(registers, prompt)
    output = proc.execute(data)
    registers.debug_dump()
    return output


def execute(data: bytes, prompt: cpu.Prompt | None = None) -> str:
    return run(data, RegisterFile(), prompt)


def console_prompt(message: str) -> str | None:
    try:
        return click.prompt(message, type=str, err=True)
    except click.Abort:
        return None


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--no-input', is_flag=True, help='Treat every InputOperand as cancelled')
@click.argument('rom_filename', type=Path)
def main(verbose: bool, no_input: bool, rom_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("REGVM")

    try:
        rom = rom_filename.read_bytes()
        output = execute(rom, None if no_input else console_prompt)
        click.echo(output, nl=False)
        sys.exit(EXIT_OK)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    main()
