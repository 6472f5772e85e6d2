''' Compile-and-run driver '''

import sys
from pathlib import Path
import logging as lg
from typing import Callable, TypeAlias

import click

from regvm.sasm.asm import AssemblyError, assemble
from regvm.runtime.registers import RegisterFile
import regvm.runtime.cpu as cpu
import regvm.runtime.emulator as emulator


EXIT_OK = 0
EXIT_COMPILE_ERROR = 1

COMPILING = 'Compiling...'
EXECUTING = 'Executing...'

Progress: TypeAlias = Callable[[str], None]


class RunSettings:
    verbose: bool
    interactive: bool

    def __init__(self):
        self.verbose = False
        self.interactive = True

    def update(
        self,
        verbose: bool | None = None,
        interactive: bool | None = None
    ):
        if verbose is not None:
            self.verbose = verbose

        if interactive is not None:
            self.interactive = interactive

        return self

    def prompt(self) -> cpu.Prompt | None:
        return emulator.console_prompt if self.interactive else None


def silent(_: str):
    pass


def execute_source(
    source: str,
    registers: RegisterFile,
    prompt: cpu.Prompt | None = None,
    progress: Progress = silent
) -> str:
    '''
    Compiles and runs a program. A compilation failure is reported
    as the result text, the same way run-time faults are.
    '''
    try:
        progress(COMPILING)
        registers.clear()
        binary = assemble(source)

        progress(EXECUTING)
        return emulator.run(binary, registers, prompt)

    except AssemblyError as e:
        lg.debug(f'Compilation failed at line {e.lineno}')
        return f'Error: {e}'


def report(status: str):
    click.echo(status, err=True)


@click.command()
@click.pass_context
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--no-input', 'interactive', is_flag=True, flag_value=False, default=True,
              help='Treat every InputOperand as cancelled')
@click.argument('source', type=Path)
def main(ctx: click.Context, source: Path, **params):
    ctx.ensure_object(RunSettings)
    ctx.obj.update(**params)

    lg.basicConfig(level=lg.DEBUG if ctx.obj.verbose else lg.INFO)

    report(COMPILING)

    try:
        binary = assemble(source.read_text())
    except AssemblyError as e:
        lg.error(f'{source.name}:{e.lineno}: {e}')
        sys.exit(EXIT_COMPILE_ERROR)

    report(EXECUTING)
    output = emulator.run(binary, RegisterFile(), ctx.obj.prompt())
    click.echo(output, nl=False)
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    main()
