import types
import typing
from dataclasses import dataclass

import rich_click as click
from rich.console import Console
from rich.panel import Panel
from rich.traceback import Traceback

from buildinit.exceptions.base import BuildInitException
from buildinit.exceptions.user import UnresolvedBuilderImagesError
from buildinit.loggers import get_level_from_cli_verbosity, logger


def remove_unwanted_traceback_frames(
    tb: types.TracebackType, unwanted_module_names: typing.List[str]
) -> types.TracebackType:
    """
    Custom function to remove certain frames from the traceback.
    """
    frames = []
    while tb is not None:
        frame = tb.tb_frame
        frame_info = (frame.f_code.co_filename, frame.f_code.co_name, frame.f_lineno)
        if not any(module_name in frame_info[0] for module_name in unwanted_module_names):
            frames.append((frame, tb.tb_lasti, tb.tb_lineno))
        tb = tb.tb_next

    # Recreate the traceback without unwanted frames
    tb_next = None
    for frame, tb_lasti, tb_lineno in reversed(frames):
        tb_next = types.TracebackType(tb_next, frame, tb_lasti, tb_lineno)

    return tb_next


def pretty_print_traceback(e: Exception, verbosity: int = 1):
    """
    This method will print the Traceback of an error.
    """
    console = Console(stderr=True)
    unwanted_module_names = ["importlib", "click", "rich_click"]

    if verbosity == 0:
        unwanted_module_names.append("buildinit")
        tb = e.__cause__.__traceback__ if e.__cause__ else e.__traceback__
        new_tb = remove_unwanted_traceback_frames(tb, unwanted_module_names)
        console.print(Traceback.from_exception(type(e), e, new_tb))
    elif verbosity == 1:
        click.secho(
            f"Frames from the following modules were removed from the traceback: {unwanted_module_names}."
            f" For more verbose output, use the flags -vv or -vvv.",
            fg="yellow",
        )
        new_tb = remove_unwanted_traceback_frames(e.__traceback__, unwanted_module_names)
        console.print(Traceback.from_exception(type(e), e, new_tb))
    else:
        console.print(Traceback.from_exception(type(e), e, e.__traceback__))


def pretty_print_exception(e: Exception, verbosity: int = 0):
    """
    Prints user errors as a panel and anything unexpected with its traceback.
    """
    if isinstance(e, click.exceptions.Exit):
        raise e

    if isinstance(e, click.ClickException):
        raise e

    if isinstance(e, UnresolvedBuilderImagesError):
        body = "Images without a builder:\n" + "\n".join(f"  - {i}" for i in e.images)
        body += "\nBuilders without an image:\n" + "\n".join(f"  - {b}" for b in e.builders)
        body += "\nPair them with --artifact=<path>=<image>, or pass --force to skip them."
        Console(stderr=True).print(Panel(body, border_style="red", title=type(e).error_code, title_align="left"))
        return

    if isinstance(e, BuildInitException) and verbosity == 0:
        Console(stderr=True).print(Panel(str(e), border_style="red", title=type(e).error_code, title_align="left"))
        return

    pretty_print_traceback(e, verbosity)


@dataclass
class BaseOptions:
    """
    Options shared by every buildinit command.
    """

    config_file: typing.Optional[str] = None
    verbose: int = 0

    @classmethod
    def from_dict(cls, d: typing.Dict[str, typing.Any]) -> "BaseOptions":
        return cls(config_file=d.get("config"), verbose=d.get("verbose") or 0)

    @staticmethod
    def options() -> typing.List[click.Option]:
        return [
            click.Option(
                param_decls=["-v", "--verbose"],
                required=False,
                default=0,
                count=True,
                help="Show more output, repeat for more detail. Unexpected errors are raised with their traceback.",
            ),
            click.Option(
                param_decls=["-c", "--config"],
                required=False,
                type=str,
                default=None,
                help="Path to a buildinit config file. Falls back to $BUILDINIT_CONFIG, ./buildinit.config and "
                "~/.buildinit/config.",
            ),
        ]


pass_base_opts = click.make_pass_decorator(BaseOptions)


def apply_verbosity(verbosity: int):
    logger.setLevel(get_level_from_cli_verbosity(verbosity))
