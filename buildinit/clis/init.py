import dataclasses
import functools
import json
import os
import typing

import rich_click as click
import yaml

from buildinit.clis.utils import BaseOptions, pass_base_opts
from buildinit.configuration import InitConfig, set_if_exists
from buildinit.exceptions.user import BuildInitValueException
from buildinit.initializer import BuildInitializer, parse_cli_artifact
from buildinit.loggers import cli_logger
from buildinit.tools import discovery


def _validate_artifacts(ctx, param, values) -> typing.List[typing.Tuple[str, str]]:
    pairs = []
    for v in values:
        try:
            pairs.append(parse_cli_artifact(v))
        except BuildInitValueException as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param)
    return pairs


def write_config(path: str, initializer: BuildInitializer, manifests: typing.List[str], name: str):
    config = initializer.generate_config(manifests, name=name)
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w") as f:
        f.write(config.to_yaml(encoder=functools.partial(yaml.safe_dump, sort_keys=False)))


@click.command("init")
@click.argument("root", required=False, default=".", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--analyze",
    is_flag=True,
    default=False,
    help="Print the builders and images that were found as JSON and exit without writing anything.",
)
@click.option(
    "--force/--no-force",
    default=None,
    help="Write the config even if some images and builders could not be paired. Overrides the config file.",
)
@click.option(
    "-a",
    "--artifact",
    "cli_artifacts",
    multiple=True,
    callback=_validate_artifacts,
    help="Pair a builder with an image explicitly, as <path>=<image>, e.g. web/Dockerfile=gcr.io/project/web.",
)
@click.option("-o", "--output", default=None, help="Where to write the config, relative to ROOT.")
@click.option("--overwrite", is_flag=True, default=False, help="Replace the output file if it exists.")
@click.option(
    "--enable-buildpacks/--disable-buildpacks",
    default=None,
    help="Detect buildpacks projects. Overrides the config file.",
)
@click.option(
    "--enable-ko/--disable-ko", default=None, help="Detect Go modules buildable with ko. Overrides the config file."
)
@click.option("--name", default=None, help="Name recorded in the config metadata. Defaults to the ROOT directory name.")
@pass_base_opts
def init(
    opts: BaseOptions,
    root: str,
    analyze: bool,
    force: typing.Optional[bool],
    cli_artifacts: typing.List[typing.Tuple[str, str]],
    output: typing.Optional[str],
    overwrite: bool,
    enable_buildpacks: typing.Optional[bool],
    enable_ko: typing.Optional[bool],
    name: typing.Optional[str],
):
    """
    Generate a build config for the project at ROOT by pairing the Dockerfiles and other build files it contains
    with the images its Kubernetes manifests deploy.
    """
    cfg = InitConfig.auto(opts.config_file)
    overrides = {}
    overrides = set_if_exists(overrides, "force", force)
    overrides = set_if_exists(overrides, "enable_buildpacks", enable_buildpacks)
    overrides = set_if_exists(overrides, "enable_ko", enable_ko)
    overrides = set_if_exists(overrides, "output", output)
    cfg = dataclasses.replace(cfg, **overrides)
    cli_logger.debug(f"Running init with {cfg}")

    output_path = cfg.output if os.path.isabs(cfg.output) else os.path.join(root, cfg.output)
    found = discovery.walk(root, cfg, exclude=[os.path.relpath(output_path, root)])

    initializer = BuildInitializer(found.builders, found.images, cli_artifacts=cli_artifacts, force=cfg.force)
    if analyze:
        click.echo(json.dumps(initializer.analyze(), indent=2))
        return

    if os.path.exists(output_path) and not overwrite:
        raise click.ClickException(f"{output_path} already exists, pass --overwrite to replace it")

    initializer.resolve()
    write_config(output_path, initializer, found.manifests, name or os.path.basename(os.path.abspath(root)))
    click.secho(f"Configuration {output_path} was written", fg="green")
