import logging
from pathlib import Path
from typing import Optional

import click

from pytgconfig import constants
from pytgconfig.censor import CensoringFilter
from pytgconfig.runtime import Runtime

pass_runtime = click.make_pass_decorator(Runtime)


def setup_logging(verbosity: int, runtime: Runtime):
    levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    logging.basicConfig(level=levels[min(verbosity, len(levels) - 1)])
    for handler in logging.getLogger().handlers:
        handler.addFilter(CensoringFilter(runtime.censor))


# ============================================================================
# GLOBAL OPTIONS: parameters for all commands
# ============================================================================
@click.group(context_settings=dict(help_option_names=['-h', '--help']))
@click.option("--config", "-c", metavar='PATH',
              help=f"Configuration file ('{constants.DEFAULT_CONFIG_FILE}' by default)")
@click.option("--dry-run", is_flag=True,
              help="don't actually write any files; just print what would be done")
@click.option("--verbosity", "-v", count=True,
              help="[MULTIPLE] increase output verbosity")
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], dry_run: bool, verbosity: int):
    config_filename = Path(config) if config else Path(constants.DEFAULT_CONFIG_FILE).expanduser()
    try:
        ctx.obj = Runtime.from_config_file(config_filename, dry_run=dry_run, required=bool(config))
    except (OSError, ValueError) as e:
        # toml.TomlDecodeError and UnicodeDecodeError are both ValueErrors
        raise click.BadParameter(f"could not load {config_filename}: {e}", param_hint="'--config'")
    setup_logging(verbosity, ctx.obj)
