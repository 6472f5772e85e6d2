import sys
from pathlib import Path
import logging as lg
from typing import Tuple, List
import tomllib

import click

from regvm.sasm.asm import CompilationItem, AssemblyError, compile_items


EXIT_OK = 0
EXIT_COMPILE_ERROR = 1


def collect_file(filepath: str | Path, package: str | None = None) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    namespace = filepath.stem if package is None else f'{package}.{filepath.stem}'
    return CompilationItem(filepath.read_text(), namespace)


def collect_files(filepaths: list[Path]) -> list[CompilationItem]:
    return [collect_file(path) for path in filepaths]


def collect_library(lib_dir: Path) -> list[CompilationItem]:
    ''' Sources listed in <lib_dir>/library.toml, in declaration order '''
    libfile_path = lib_dir / Path('library.toml')
    config = tomllib.loads(libfile_path.read_text())
    library = config['library']

    return [
        collect_file(lib_dir / Path(source), library['package'])
        for source in library['sources']
    ]


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-l', '--library', type=click.Path(path_type=Path), help='Prepend a source library')
@click.argument('sources', nargs=-1, type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, library: Path | None, sources: Tuple[Path], binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("REGVM ASM")

    items: List[CompilationItem] = []

    if library:
        items.extend(collect_library(library))

    items.extend(collect_files(list(sources)))

    try:
        bytestr = compile_items(items)
    except AssemblyError as e:
        lg.error(f'{e.namespace}:{e.lineno}: {e}')
        sys.exit(EXIT_COMPILE_ERROR)

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'Wrote {len(bytestr)} bytes to {binary}')


if __name__ == "__main__":
    compile()
