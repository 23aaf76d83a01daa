import typing

import rich_click as click

from buildinit.clis.init import init
from buildinit.clis.utils import BaseOptions, apply_verbosity, pass_base_opts, pretty_print_exception
from buildinit.loggers import cli_logger


class BaseCommand(click.RichGroup):
    """
    The base buildinit command group that nests all the other commands.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, params=BaseOptions.options(), **kwargs)

    def invoke(self, ctx: click.Context) -> typing.Any:
        base_opts = BaseOptions.from_dict(ctx.params)
        apply_verbosity(base_opts.verbose)
        ctx.obj = base_opts
        try:
            return super().invoke(ctx)
        except (click.ClickException, click.exceptions.Exit, click.exceptions.Abort):
            raise
        except Exception as e:
            if base_opts.verbose >= 3:
                click.secho("Verbose mode on")
                raise e
            pretty_print_exception(e, base_opts.verbose)
            raise SystemExit(1) from e


@pass_base_opts
def main_cb(opts: BaseOptions, *args, **kwargs):
    pass


main = BaseCommand("buildinit", invoke_without_command=True, callback=main_cb)


def register_subcommand(cmd: click.Command, override_existing: bool = False):
    """
    Adds a subcommand to the buildinit group.
    """
    if main.get_command(None, cmd.name) is not None and not override_existing:
        raise ValueError(f"Command {cmd.name} already registered. Skipping")
    cli_logger.info(f"Registering command {cmd.name}")
    main.add_command(cmd)


register_subcommand(init)

if __name__ == "__main__":
    main()
