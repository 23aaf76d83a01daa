"""
=====================
Configuration
=====================

buildinit reads its settings from three places, in order of precedence:

#. environment variables named ``BUILDINIT_{SECTION}_{OPTION}``, e.g. ``BUILDINIT_INIT_ENABLE_BUILDPACKS=1``,
#. a config file, either ini style::

    [init]
    enable_buildpacks=true
    buildpacks_builder=gcr.io/buildpacks/builder:v1
    skip_dirs=build,dist

   or yaml::

    init:
      enableBuildpacks: true
      buildpacksBuilder: gcr.io/buildpacks/builder:v1

#. the defaults declared on :py:class:`InitConfig`.

The config file is the one passed explicitly, else ``$BUILDINIT_CONFIG``, else ``./buildinit.config``, else
``~/.buildinit/config``.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass, field

from buildinit.configuration import internal as _internal
from buildinit.configuration.file import ConfigEntry, ConfigFile, get_config_file, set_if_exists

DEFAULT_BUILDPACKS_BUILDER = "gcr.io/buildpacks/builder:v1"
DEFAULT_OUTPUT = "buildinit.yaml"


@dataclass(init=True, repr=True, eq=True, frozen=True)
class InitConfig(object):
    """
    Settings that drive ``buildinit init``.

    :param enable_buildpacks: Detect buildpacks projects in directories that have no Dockerfile.
    :param enable_ko: Detect Go modules that can be built with ko.
    :param buildpacks_builder: Builder image used for detected buildpacks artifacts.
    :param output: Path the generated config is written to.
    :param force: Write the config even when some builders and images cannot be paired.
    :param skip_dirs: Extra directory names that discovery never walks into.
    """

    enable_buildpacks: bool = False
    enable_ko: bool = False
    buildpacks_builder: str = DEFAULT_BUILDPACKS_BUILDER
    output: str = DEFAULT_OUTPUT
    force: bool = False
    skip_dirs: typing.List[str] = field(default_factory=list)

    @classmethod
    def auto(cls, config_file: typing.Optional[typing.Union[str, ConfigFile]] = None) -> InitConfig:
        """
        Reads from Config file, and overrides from Environment variables. Refer to ConfigEntry for details
        :param config_file:
        :return:
        """
        config_file = get_config_file(config_file)
        kwargs = {}
        kwargs = set_if_exists(kwargs, "enable_buildpacks", _internal.Init.ENABLE_BUILDPACKS.read(config_file))
        kwargs = set_if_exists(kwargs, "enable_ko", _internal.Init.ENABLE_KO.read(config_file))
        kwargs = set_if_exists(kwargs, "buildpacks_builder", _internal.Init.BUILDPACKS_BUILDER.read(config_file))
        kwargs = set_if_exists(kwargs, "output", _internal.Init.OUTPUT.read(config_file))
        kwargs = set_if_exists(kwargs, "force", _internal.Init.FORCE.read(config_file))
        kwargs = set_if_exists(kwargs, "skip_dirs", _internal.Init.SKIP_DIRS.read(config_file))
        return InitConfig(**kwargs)


__all__ = [
    "ConfigEntry",
    "ConfigFile",
    "InitConfig",
    "get_config_file",
    "set_if_exists",
]
