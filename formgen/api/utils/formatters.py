"""Code formatting for generated TypeScript."""

import re
import shlex
import subprocess

from formgen.config import FormattingOptions
from formgen.errors import FormatterError

_OPENERS = "{[("
_CLOSERS = "}])"
_BRACE_LIST = re.compile(r"^((?:import|export)(?: type)?\s*)\{\s*(.*?)\s*\}")


# A "/" after one of these (or at line start) opens a regex literal, not a division
_REGEX_PRECEDERS = "(,=:[!&|?{};+-*%<>~^"


def _regex_end(line: str, i: int):
    """Index just past the regex literal starting at ``line[i]``, or None."""
    if line[i + 1:i + 2] in ("/", "*"):
        return None
    before = line[:i].rstrip()
    if before and before[-1] not in _REGEX_PRECEDERS:
        return None
    j, in_class = i + 1, False
    while j < len(line):
        ch = line[j]
        if ch == "\\":
            j += 2
            continue
        if ch == "[":
            in_class = True
        elif ch == "]":
            in_class = False
        elif ch == "/" and not in_class:
            j += 1
            while j < len(line) and line[j].isalpha():
                j += 1
            return j
        j += 1
    return None


def _scan(line: str):
    """
    Yield (index, char, in_literal) for each character of a line, tracking
    string and regex literals and stopping at a ``//`` comment.
    """
    quote = None
    i = 0
    while i < len(line):
        ch = line[i]
        if quote:
            if ch == "\\":
                yield i, ch, True
                if i + 1 < len(line):
                    yield i + 1, line[i + 1], True
                i += 2
                continue
            if ch == quote:
                quote = None
            yield i, ch, True
        else:
            if ch == "/":
                if line[i + 1:i + 2] == "/":
                    return
                end = _regex_end(line, i)
                if end is not None:
                    for k in range(i, end):
                        yield k, line[k], True
                    i = end
                    continue
            if ch in "'\"`":
                quote = ch
                yield i, ch, True
            else:
                yield i, ch, False
        i += 1


def _bracket_delta(line: str) -> int:
    delta = 0
    for _, ch, in_string in _scan(line):
        if in_string:
            continue
        if ch in _OPENERS:
            delta += 1
        elif ch in _CLOSERS:
            delta -= 1
    return delta


def _leading_closers(line: str) -> int:
    count = 0
    for ch in line:
        if ch in _CLOSERS:
            count += 1
        else:
            break
    return count


def _requote(line: str, quote: str) -> str:
    """Rewrite '...' / "..." literals to the preferred quote when no escaping is needed."""
    other = '"' if quote == "'" else "'"
    out = []
    i, n = 0, len(line)
    while i < n:
        ch = line[i]
        if ch == "/":
            if line[i + 1:i + 2] == "/":
                out.append(line[i:])
                break
            end = _regex_end(line, i)
            if end is not None:
                out.append(line[i:end])
                i = end
                continue
        if ch in "'\"`":
            j = i + 1
            while j < n and line[j] != ch:
                j += 2 if line[j] == "\\" else 1
            literal = line[i:j + 1]
            body = line[i + 1:j]
            if ch == other and quote not in body and "\\" not in body:
                literal = quote + body + quote
            out.append(literal)
            i = j + 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)


class BuiltinFormatter:
    """
    Deterministic re-indenter for generated TypeScript.

    Lines are stripped and re-indented by bracket depth; runs of blank lines
    collapse to one and blank lines directly inside a block are dropped.
    Formatting already formatted text returns it unchanged.
    """

    def __init__(self, options: FormattingOptions = None):
        self.options = options or FormattingOptions()
        self.indent = "\t" if self.options.use_tabs else " " * self.options.tab_width
        self.quote = "'" if self.options.single_quote else '"'

    def _normalize(self, line: str) -> str:
        if self.options.bracket_spacing:
            line = _BRACE_LIST.sub(lambda m: f"{m.group(1)}{{ {m.group(2)} }}", line)
        else:
            line = _BRACE_LIST.sub(lambda m: f"{m.group(1)}{{{m.group(2)}}}", line)
        return _requote(line, self.quote)

    def format(self, text: str, file_name: str = None) -> str:
        lines = []
        depth = 0
        # Only \n ends a line; U+2028 / U+2029 may sit inside string literals
        for raw in text.split("\n"):
            line = raw.strip()
            if not line:
                if lines and lines[-1] != "" and not lines[-1].endswith(tuple(_OPENERS)):
                    lines.append("")
                continue

            line = self._normalize(line)
            closers = _leading_closers(line)
            if closers and lines and lines[-1] == "":
                lines.pop()

            level = max(depth - closers, 0)
            lines.append(self.indent * level + line)
            depth = max(depth + _bracket_delta(line), 0)

        while lines and lines[-1] == "":
            lines.pop()
        return "\n".join(lines) + "\n"


class PrettierFormatter:
    """Pipe generated text through the ``prettier`` executable."""

    def __init__(self, options: FormattingOptions = None):
        self.options = options or FormattingOptions()

    def command(self, file_name: str = None) -> list:
        opts = self.options
        cmd = shlex.split(opts.prettier_command) + [
            "--stdin-filepath", file_name or "generated.ts",
            "--parser", opts.parser,
            "--tab-width", str(opts.tab_width),
        ]
        if opts.single_quote:
            cmd.append("--single-quote")
        if opts.use_tabs:
            cmd.append("--use-tabs")
        if not opts.bracket_spacing:
            cmd.append("--no-bracket-spacing")
        return cmd

    def format(self, text: str, file_name: str = None) -> str:
        cmd = self.command(file_name)
        try:
            proc = subprocess.run(cmd, input=text, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise FormatterError(f"prettier executable not found: {cmd[0]}") from e

        if proc.returncode != 0:
            raise FormatterError(
                f"prettier failed on {file_name or '<stdin>'}: {proc.stderr.strip()}"
            )
        return proc.stdout


def get_formatter(options: FormattingOptions = None):
    options = options or FormattingOptions()
    if options.backend == "prettier":
        return PrettierFormatter(options)
    return BuiltinFormatter(options)


def format_typescript_code(code: str, options: FormattingOptions = None, file_name: str = None) -> str:
    """Format generated TypeScript with the configured backend."""
    return get_formatter(options).format(code, file_name)
