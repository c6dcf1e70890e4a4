"""CLI entry point for egg-railroad."""

import logging
import sys

import click

from egg_railroad.api import TARGETS, render_syntax
from egg_railroad.config import RenderConfig
from egg_railroad.parsers import load, load_default


@click.command()
@click.argument("grammar", required=False, type=click.Path(exists=True))
@click.option("--target", "-t", "target", type=str, default="railroad",
              help=f"What to render: {', '.join(TARGETS)}, or a rule name")
@click.option("--scale", "-s", "scale", type=float, default=None, help="Fixed scale instead of a viewBox")
@click.option("--expanded", "expanded", is_flag=True, help="Do not collapse single-use rules (ascii)")
@click.option("--annotate", "annotate", is_flag=True, help="List every rule with its usage (ascii)")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log validation details to stderr")
def main(
    grammar: str | None,
    target: str,
    scale: float | None,
    expanded: bool,
    annotate: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Egg grammar to BNF listings and SVG railroad diagrams."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    try:
        source = load(grammar) if grammar else load_default()
    except OSError as e:
        click.echo(f"error: cannot read '{grammar}': {e}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    config = RenderConfig(scale=scale, collapsed=not expanded, annotated=annotate)
    rendered = render_syntax(target, source, config)
    if not rendered:
        click.echo(f"error: nothing rendered for target '{target}'", err=True)
        sys.exit(1)

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered)


if __name__ == "__main__":
    main()
