"""
Resolution of discovered builders against the images a project deploys, and generation of the config document.
"""

import os
import typing

from buildinit.build.builder import BuilderImagePair, InitBuilder
from buildinit.build.util import Sink, artifacts, echo_info, match_builders_to_images, strip_tags
from buildinit.exceptions.user import BuildInitValueException, UnresolvedBuilderImagesError
from buildinit.loggers import logger
from buildinit.schema import Artifact, BuildConfig, ManifestsConfig, Metadata, ProjectConfig


def parse_cli_artifact(value: str) -> typing.Tuple[str, str]:
    """
    Splits an explicit ``<builder path>=<image>`` pair.
    """
    path, sep, image = value.rpartition("=")
    if not sep or not path or not image:
        raise BuildInitValueException(value, "Expected an artifact of the form <path>=<image>")
    return path, image


class BuildInitializer(object):
    """
    Pairs builders with images.

    Explicit pairs are applied first, then images are matched with the builders configured for them. When exactly one
    image and one builder are left they are paired with each other. Anything else left over on both sides is an
    error, unless ``force`` is set, in which case the leftovers are reported and skipped.
    """

    def __init__(
        self,
        builders: typing.Sequence[InitBuilder],
        images: typing.Sequence[str],
        cli_artifacts: typing.Sequence[typing.Tuple[str, str]] = (),
        force: bool = False,
        warn: Sink = logger.warning,
        out: Sink = echo_info,
    ):
        self._warn = warn
        self._out = out
        self._force = force
        self._images = strip_tags(images, warn=warn)
        self._pairs: typing.List[BuilderImagePair] = []
        self._unresolved_images: typing.List[str] = []
        self._remaining_builders: typing.List[InitBuilder] = list(builders)
        self._all_builders = list(builders)
        self._cli_artifacts = list(cli_artifacts)

    def _take_builder(self, path: str) -> InitBuilder:
        for i, builder in enumerate(self._remaining_builders):
            if os.path.normpath(builder.path()) == os.path.normpath(path):
                return self._remaining_builders.pop(i)
        raise BuildInitValueException(path, "No unpaired builder was found at this path")

    def resolve(self) -> typing.List[BuilderImagePair]:
        """
        Pairs builders with images and returns the pairs.

        :raises UnresolvedBuilderImagesError: if images and builders are left over and ``force`` isn't set.
        """
        self._pairs = []
        self._remaining_builders = list(self._all_builders)
        images = list(self._images)
        for path, image in self._cli_artifacts:
            names = strip_tags([image], warn=self._warn)
            if not names:
                raise BuildInitValueException(image, "Not an image that can be paired with a builder")
            builder = self._take_builder(path)
            self._pairs.append(BuilderImagePair(image_name=names[0], builder=builder))
            images = [i for i in images if i != names[0]]

        pairs, remaining, unresolved = match_builders_to_images(self._remaining_builders, images, warn=self._warn)
        self._pairs.extend(pairs)

        if len(unresolved) == 1 and len(remaining) == 1:
            self._pairs.append(BuilderImagePair(image_name=unresolved[0], builder=remaining[0]))
            remaining, unresolved = [], []

        self._remaining_builders = remaining
        self._unresolved_images = unresolved
        if unresolved and remaining:
            if not self._force:
                raise UnresolvedBuilderImagesError(unresolved, [b.describe() for b in remaining])
            self._warn(f"Leaving images [{', '.join(unresolved)}] without a builder")
            self._warn(f"Leaving builders [{', '.join(b.describe() for b in remaining)}] unused")
        return self._pairs

    @property
    def pairs(self) -> typing.List[BuilderImagePair]:
        return self._pairs

    @property
    def unresolved_images(self) -> typing.List[str]:
        return self._unresolved_images

    @property
    def remaining_builders(self) -> typing.List[InitBuilder]:
        return self._remaining_builders

    def artifacts(self) -> typing.List[Artifact]:
        return artifacts(self._pairs, out=self._out)

    def analyze(self) -> typing.Dict[str, typing.Any]:
        """
        A JSON-able summary of everything that was found, before pairing.
        """
        return {
            "builders": [
                {"name": b.name(), "path": b.path(), "image": b.configured_image()} for b in self._all_builders
            ],
            "images": list(dict.fromkeys(self._images)),
        }

    def generate_config(self, manifests: typing.Sequence[str] = (), name: typing.Optional[str] = None) -> ProjectConfig:
        return ProjectConfig(
            metadata=Metadata(name=name),
            build=BuildConfig(artifacts=self.artifacts()),
            manifests=ManifestsConfig(raw_yaml=list(manifests)) if manifests else None,
        )
