## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# plates — A minimal stack language with user functions and a trampolined interpreter.
#

import sys
import time
from dataclasses import dataclass

import click

from .errors import PlatesError, PlatesSyntaxError
from .reader import FileReader, InteractiveReader
from .parser import Parser
from .runtime import Runtime
from .interpreter import interpret
from .formatting import write_without_ansi, format_instruction, show_stack


@dataclass(frozen=True)
class RuntimeConfig:
    debug: bool
    verbose: int
    ignore: bool
    stats: bool
    plain: bool
    quiet: bool


class PlatesRunner:
    def __init__(self, config: RuntimeConfig):
        self.debug = config.debug
        self.verbose = config.verbose
        self.ignore = config.ignore
        self.stats_enabled = config.stats
        self.plain = config.plain
        self.quiet = config.quiet

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = Runtime()
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False

    def _report(self, message: str, detail: str, context: str = '') -> None:
        print(f'\033[30;43m {message} \033[0m {detail}\n{context}', file=sys.stderr)

    def _handle_exception(self, exc: PlatesError, reader, is_repl: bool = False) -> bool:
        """Report the error; returns True if execution should carry on."""
        self.failure = self.failure or not is_repl
        where = f"`\033[97m{reader.filename}\033[0m`, line {reader.lineno}" if isinstance(reader, FileReader) else "input"

        if isinstance(exc, PlatesSyntaxError):
            self._report("SYNTAX ERROR.", f"Parsing {where} caused a problem!",
                         f"\033[90m  {exc}\033[0m\n")
        else:
            op = format_instruction(exc.plates_instruction, width=60) if exc.plates_instruction is not None else '?'
            self._report("RUNTIME ERROR.", f"Instruction \033[1;97m`{op}`\033[0m caused an error! "
                         f"(Exception: \033[33m{type(exc).__name__}\033[0m)", f"\033[90m  {exc}\033[0m")
            print(f'\033[1;33m  Stack content is\033[0;33m\n    ', end='', file=sys.stderr)
            show_stack(self.runtime.value_stack, file=sys.stderr)
            print('\033[0m', file=sys.stderr)
        return is_repl or self.ignore

    def _after_step(self, runtime: Runtime, instruction) -> None:
        if self.debug: show_stack(runtime.value_stack)

    def _run(self, reader, is_repl: bool) -> bool:
        return interpret(Parser(reader), self.runtime,
                         on_error=lambda exc: self._handle_exception(exc, reader, is_repl=is_repl),
                         after_step=self._after_step, verbosity=self.verbose, stats=self.total_stats)

    def run_files(self, files: tuple[str, ...]) -> None:
        reader = FileReader(files)
        try:
            self._run(reader, is_repl=False)
        except PlatesError:
            return
        except KeyboardInterrupt:
            self.failure = True
            print(""); return
        if not self.quiet: print("Program completed successfully.")

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('Welcome to the plates REPL! Type EXIT or Ctrl+D to leave.')
        try:
            self._run(InteractiveReader(color=not self.plain), is_repl=True)
        except KeyboardInterrupt:
            print(""); return
        if not self.quiet: print("Program completed successfully.")

    def finalize(self) -> int:
        if self.total_stats:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('files', nargs=-1, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option('--debug', '-d', is_flag=True, help='Print the state of the stack after each instruction.')
@click.option('--verbose', '-v', default=0, count=True, help='Print each top-level instruction as it runs.')
@click.option('--ignore', '-i', is_flag=True, help='Report errors in files and continue executing.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--quiet', '-q', is_flag=True, help='Do not print the completion message.')
@click.pass_context
def cli(ctx: click.Context, files: tuple[str, ...], debug: bool, verbose: int, ignore: bool,
        stats: bool, plain: bool, quiet: bool) -> None:
    """Run plates FILES in order as one program, or start the REPL if none are given."""
    config = RuntimeConfig(debug=debug, verbose=verbose, ignore=ignore, stats=stats, plain=plain, quiet=quiet)
    runner = PlatesRunner(config)

    # No files: if stdin has data, treat it as a file, else start the REPL.
    if not files and not sys.stdin.isatty():
        files = ('-',)
    if files:
        runner.run_files(files)
    else:
        runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='plates')


if __name__ == "__main__":
    main()
