import re
from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATES_DIR = Path(__file__).parent

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _escape_char(ch: str) -> str:
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if ord(ch) < 0x20 or ord(ch) == 0x7F:
        return f"\\x{ord(ch):02x}"
    return ch


def ts_quote(value: str) -> str:
    """Render a Python string as a single-quoted TypeScript string literal."""
    return "'" + "".join(_escape_char(ch) for ch in str(value)) + "'"


def ts_member(name: str) -> str:
    """Interface member name: bare when it is an identifier, quoted otherwise."""
    name = str(name)
    return name if _IDENTIFIER.match(name) else ts_quote(name)


def get_env(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(disabled_extensions=("jinja",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["ts_quote"] = ts_quote
    env.filters["ts_member"] = ts_member
    return env


env = get_env()
