"""Click base classes carrying usage examples.

Every command accepts ``--examples``.  On a leaf command it prints that
command's examples; on a group it prints the group's own examples followed
by those of each subcommand, so ``cnsctl resolve --examples`` covers every
lookup.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    examples: str | None

    def _attach_examples(self, examples: str | None) -> None:
        self.examples = examples

        def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if not value or ctx.resilient_parsing:
                return
            click.echo(self.collect_examples(ctx.command_path))
            ctx.exit(0)

        assert isinstance(self, click.Command)
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=show,
                help="Show usage examples.",
            )
        )

    def collect_examples(self, path: str) -> str:
        """Render the examples block shown for *path*."""
        return f"Examples for '{path}':\n\n{self.examples or '  (none)'}"


class CnsCommand(_ExamplesMixin, click.Command):
    """Leaf command with an optional ``examples`` block."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)


class CnsGroup(_ExamplesMixin, click.Group):
    """Group whose ``--examples`` also lists every subcommand's examples."""

    command_class = CnsCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)

    def collect_examples(self, path: str) -> str:
        blocks = [super().collect_examples(path)]
        for name in sorted(self.commands):
            sub = self.commands[name]
            if isinstance(sub, _ExamplesMixin) and sub.examples:
                blocks.append(f"  # {name}\n{sub.examples}")
        return "\n\n".join(blocks)
