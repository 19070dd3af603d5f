from __future__ import annotations

from rich.console import Console
from rich.table import Table

from polyenv.core.encoding import ENCODING_ALIASES
from polyenv.core.models import DEFAULT_DIALECT, DIALECT_ALIASES
from polyenv.parsers.dialects import DIALECTS

console = Console()


def dialects_cmd() -> None:
    """List supported dialects, their aliases and main rules."""
    table = Table(title="Dialects", show_lines=False)
    table.add_column("Dialect", style="bold", no_wrap=True)
    table.add_column("Aliases")
    table.add_column("Quotes", no_wrap=True)
    table.add_column("Inline comments", no_wrap=True)
    table.add_column("Multi-line", no_wrap=True)

    for dialect, rules in DIALECTS.items():
        name = dialect.value + (" (default)" if dialect is DEFAULT_DIALECT else "")
        multiline = any(q.multiline for q in rules.quotes.values())
        table.add_row(
            name,
            ", ".join(DIALECT_ALIASES[dialect]),
            " ".join(rules.quotes),
            rules.inline_comment.value,
            "yes" if multiline else "no",
        )

    console.print(table)


def encodings_cmd() -> None:
    """List supported encodings and their aliases."""
    table = Table(title="Encodings", show_lines=False)
    table.add_column("Encoding", style="bold", no_wrap=True)
    table.add_column("Unit", justify="right", no_wrap=True)
    table.add_column("Aliases")

    for enc, aliases in ENCODING_ALIASES.items():
        table.add_row(enc.value, str(enc.unit_size), ", ".join(aliases))

    console.print(table)
