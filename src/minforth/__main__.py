## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# minforth — A minimal Forth: two stacks, a dictionary, and a compiler for new words.
#

import sys
import time
import traceback
from pathlib import Path
from dataclasses import dataclass

import click

from .types import STACK_SIZE
from .errors import ForthFatalError
from .formatting import write_without_ansi
from .runtime import Runtime


SENTINEL = 'exit'


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    ignore: bool
    stats: bool
    plain: bool
    stack_size: int = STACK_SIZE


@dataclass
class ExecutionItem:
    source: str
    filename: str


class ForthRunner:
    def __init__(self, config: RuntimeConfig):
        self.ignore = config.ignore
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.total_stats = {'steps': 0, 'start': time.time()} if config.stats else None
        self.runtime = Runtime(stack_size=config.stack_size, verbosity=config.verbose, stats=self.total_stats)
        self.failure = False
        self.executed_lines = 0

    def _handle_exception(self, exc, filename: str) -> None:
        if isinstance(exc, ForthFatalError):
            # The runtime already wrote the message to the output stream.
            sys.stdout.flush()
            print(f'\033[30;43m FATAL ERROR. \033[0m Word \033[1;97m`{exc.forth_token}`\033[0m stopped `\033[97m{filename}\033[0m` (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
        else:
            print(f'\033[30;43m RUNTIME ERROR. \033[0m Interpreting `\033[97m{filename}\033[0m` caused an error! (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
            tb_lines = traceback.format_exception(exc, limit=-8)
            print(''.join(tb_lines).rstrip(), file=sys.stderr)

        self.failure = True
        if not self.ignore:
            sys.exit(self.finalize())
        self.runtime.reset()

    def interpret(self, line: str, filename: str) -> None:
        try:
            self.runtime.interpret(line)
        except Exception as exc:
            self._handle_exception(exc, filename)
        else:
            self.executed_lines += 1

    def execute_items(self, items: list[ExecutionItem]) -> bool:
        """Feed each line to the runtime; returns False once the `exit` line is seen."""
        for item in items:
            for line in item.source.splitlines():
                if line.rstrip('\r\n') == SENTINEL: return False
                self.interpret(line, item.filename)
        return True

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print("Simple Forth Interpreter")
        print(f"Type '{SENTINEL}' to quit\n")

        while True:
            try:
                line = input(f"\033[36m{self.runtime.prompt}\033[0m")
            except (KeyboardInterrupt, EOFError):
                print(""); break
            if line.rstrip('\r\n') == SENTINEL: break
            self.interpret(line, '<REPL>')
            sys.stdout.flush()

    def finalize(self) -> int:
        sys.stdout.flush()
        if self.total_stats and self.executed_lines > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m", file=sys.stderr)
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m", file=sys.stderr)
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m", file=sys.stderr)
        return 1 if self.failure else 0


def _inline_command_source(index: int, command: str) -> ExecutionItem:
    return ExecutionItem(command.rstrip() + '\n', f'<INPUT_{index}>')


def _parse_dev_tokens(tokens: list[str]) -> list[tuple[str, Path | str | None]]:
    actions: list[tuple[str, Path | str | None]] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == '--':
            index += 1
            continue
        if token in ('-c', '--command'):
            index += 1
            if index >= len(tokens):
                raise click.BadParameter("Missing inline Forth code after -c/--command option.")
            actions.append(('command', tokens[index]))
            index += 1
            continue
        if token.startswith('-c=') or token.startswith('--command='):
            _, value = token.split('=', 1)
            if value == '':
                raise click.BadParameter("Empty Forth code supplied to command option.")
            actions.append(('command', value))
            index += 1
            continue
        if token in ('-r', '--repl'):
            actions.append(('repl', None))
            index += 1
            continue
        if token.startswith('-'):
            raise click.BadParameter(f"Unknown option `{token}`.")
        path = Path(token)
        if not path.exists():
            raise click.BadParameter(f"File `{token}` not found.")
        actions.append(('file', path))
        index += 1
    return actions


@click.group(invoke_without_command=True, context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.option('--verbose', '-v', default=0, count=True, help='Trace executed words (twice to include nested words).')
@click.option('--ignore', '-i', is_flag=True, help='Keep going after fatal errors, with empty stacks.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--stack-size', default=STACK_SIZE, type=click.IntRange(min=1), show_default=True, help='Capacity of the data and return stacks.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, stats: bool, plain: bool, stack_size: int) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain, stack_size=stack_size)


@cli.command('run-file')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, script) -> None:
    runner = ForthRunner(ctx.obj['config'])
    runner.execute_items((ExecutionItem(script.read(), script.name or '<STDIN>'),))
    ctx.exit(runner.finalize())


@cli.command('run-dev', context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.argument('tokens', nargs=-1)
@click.pass_context
def run_dev(ctx: click.Context, tokens: tuple[str, ...]) -> None:
    runner = ForthRunner(ctx.obj['config'])
    actions = _parse_dev_tokens(list(tokens))

    command_index = 1
    for action, payload in actions:
        if action == 'file':
            proceed = runner.execute_items((ExecutionItem(payload.read_text(encoding='utf-8'), str(payload)),))
        elif action == 'command':
            proceed = runner.execute_items((_inline_command_source(command_index, payload),))
            command_index += 1
        elif action == 'repl':
            runner.repl()
            proceed = True
        else:
            raise NotImplementedError
        if not proceed: break

    if not actions:
        runner.repl()
    ctx.exit(runner.finalize())


@cli.command('run-repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = ForthRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g, r, i = [], [], 0
    while i < len(a):
        t = a[i]
        if t in ('--ignore', '--stats', '--plain', '-i', '-p') or (t.startswith('-v') and set(t[1:]) == {'v'}) or t == '--verbose':
            g.append(t)
        elif t == '--stack-size' and i + 1 < len(a):
            g.extend(a[i:i+2]); i += 1
        elif t.startswith('--stack-size='):
            g.append(t)
        else:
            r.append(t)
        i += 1
    pos = [t for t in r if not t.startswith('-')]
    has_dev_opt = any(t in ('-c', '-r', '--repl') or t.startswith('-c=') or t.startswith('--command') for t in r)

    if len(r) == 0:
        # No args: if stdin has data, treat as file '-', else REPL
        cmd, tail = ('run-file', ['-']) if not sys.stdin.isatty() else ('run-repl', [])
    elif r == ['-']:
        cmd, tail = 'run-file', ['-']
    elif r == ['--repl']:
        cmd, tail = 'run-repl', []
    elif len(pos) == 1 and not has_dev_opt and Path(pos[0]).is_file():
        cmd, tail = 'run-file', [pos[0]]
    else:
        cmd, tail = 'run-dev', r

    cli.main(args=[*g, cmd, *tail], prog_name='minforth')


if __name__ == "__main__":
    main()
