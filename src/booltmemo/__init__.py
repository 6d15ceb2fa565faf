"""Boolean memoizer with asymmetric TTLs for true and false results."""

import logging
import time

import click
from dotenv import load_dotenv

from .config import MemoConfig, load_config
from .janitor import janitor_interval
from .memo import Entry, Memoizer, memoize

__version__ = "0.1.0"

logger = logging.getLogger("booltmemo")


@click.group()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to .env file",
)
@click.pass_context
def main(ctx: click.Context, verbose: int, env_file: str | None) -> None:
    """Demo and diagnostics for the booltmemo cache."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    logging_level = config.logging_level
    if verbose == 1:
        logging_level = logging.INFO
    elif verbose >= 2:
        logging_level = logging.DEBUG

    logging.basicConfig(
        level=logging_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if env_file:
        logger.debug("Loaded environment from file: %s", env_file)

    ctx.obj = config


@main.command("demo")
@click.option("--true-ttl", type=float, default=None, help="Seconds to cache true results")
@click.option("--false-ttl", type=float, default=None, help="Seconds to cache false results")
@click.option(
    "--work-delay",
    type=float,
    default=0.1,
    show_default=True,
    help="Simulated cost of each predicate call in seconds",
)
@click.pass_obj
def demo_command(
    config: MemoConfig,
    true_ttl: float | None,
    false_ttl: float | None,
    work_delay: float,
) -> None:
    """Walk through the cache lifecycle on an "is even" predicate."""
    true_ttl = config.true_ttl_seconds if true_ttl is None else true_ttl
    false_ttl = config.false_ttl_seconds if false_ttl is None else false_ttl
    calls = {"count": 0}

    def is_even(value: int) -> bool:
        calls["count"] += 1
        time.sleep(work_delay)
        return value % 2 == 0

    def timed(label: str, key: int) -> None:
        start = time.monotonic()
        result = memo.get(key)
        elapsed = time.monotonic() - start
        click.echo(f"{label} for {key} took {elapsed:.3f}s: {result} (calls={calls['count']})")

    with Memoizer(is_even, true_ttl, false_ttl) as memo:
        # Each wait overshoots the (clamped) TTL it is meant to outlast by 20%.
        first_wait = memo.false_ttl * 1.2
        second_wait = memo.true_ttl * 1.2

        timed("First call", 42)
        timed("Second call", 42)
        timed("First call", 43)

        click.echo(f"Waiting {first_wait:.3f}s...")
        time.sleep(first_wait)
        timed("Call after wait", 42)
        timed("Call after wait", 43)

        memo.invalidate(42)
        timed("Call after invalidation", 42)

        click.echo(f"Waiting {second_wait:.3f}s more...")
        time.sleep(second_wait)
        timed("Call after second wait", 42)

        memo.clear()
        click.echo("Cache cleared")


@main.command("check-config")
@click.pass_obj
def check_config_command(config: MemoConfig) -> None:
    """Print the effective TTL settings and flag suspicious values."""
    warnings: list[str] = []
    for name, value in (
        ("BOOLTMEMO_TRUE_TTL_SECONDS", config.true_ttl_seconds),
        ("BOOLTMEMO_FALSE_TTL_SECONDS", config.false_ttl_seconds),
    ):
        if value < 0:
            warnings.append(f"{name} is negative; treated as 0 (never cached)")
        elif value == 0:
            warnings.append(f"{name} is 0; results of this polarity are never cached")

    click.echo(f"true_ttl_seconds: {config.true_ttl_seconds:g}")
    click.echo(f"false_ttl_seconds: {config.false_ttl_seconds:g}")
    click.echo(f"janitor_interval_seconds: {config.janitor_interval_seconds:g}")
    click.echo(f"log_level: {config.log_level}")

    if warnings:
        click.echo("Warnings:")
        for item in warnings:
            click.echo(f"- {item}")


__all__ = [
    "__version__",
    "Entry",
    "MemoConfig",
    "Memoizer",
    "janitor_interval",
    "load_config",
    "main",
    "memoize",
]

if __name__ == "__main__":
    main()
