import os
import typing

import click

from buildinit.build.builder import BuilderImagePair, InitBuilder
from buildinit.docker.reference import parse_reference
from buildinit.exceptions.user import ReferenceParseError
from buildinit.loggers import developer_logger, logger
from buildinit.schema import Artifact

ROOT_WORKSPACE = "."

Sink = typing.Callable[[str], None]


def echo_info(msg: str):
    click.secho(msg, fg="blue")


class SortedSet(object):
    """
    A set of strings that always iterates in ascending order.
    """

    def __init__(self, values: typing.Iterable[str] = ()):
        self._values: typing.Set[str] = set(values)

    def add(self, value: str):
        self._values.add(value)

    def values(self) -> typing.List[str]:
        return sorted(self._values)

    def __contains__(self, value: str) -> bool:
        return value in self._values

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self.values())

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self):
        return f"SortedSet({self.values()!r})"


def strip_tags(tagged_images: typing.Iterable[str], warn: Sink = logger.warning) -> typing.List[str]:
    """
    Removes tags from image references, returning the base names in input order. References that cannot be parsed,
    e.g. templated names, and references by digest are skipped with a warning.
    """
    images = []
    for image in tagged_images:
        try:
            parsed = parse_reference(image)
        except ReferenceParseError as e:
            warn(f"Couldn't parse image [{image}]: {e}")
            continue
        if parsed.digest:
            warn(f"Ignoring image referenced by digest: [{image}]")
            continue

        images.append(parsed.base_name)
    return images


def find_exactly_one_matching_builder(builders: typing.Sequence[InitBuilder], image: str) -> int:
    """
    Returns the index of the only builder configured to produce ``image``, or -1 when none or several are.
    """
    matching_index = -1
    for i, builder in enumerate(builders):
        if image != builder.configured_image():
            continue
        # More than one match
        if matching_index != -1:
            return -1
        matching_index = i
    return matching_index


def match_builders_to_images(
    builders: typing.Sequence[InitBuilder],
    images: typing.Iterable[str],
    warn: Sink = logger.warning,
) -> typing.Tuple[typing.List[BuilderImagePair], typing.List[InitBuilder], typing.List[str]]:
    """
    Pairs images with the builders configured to produce them.

    An image is paired only when exactly one of the builders still unpaired is configured for it; a paired builder
    is not offered to later images.

    :return: the pairs in image order, the builders left unpaired, and the sorted images left unpaired.
    """
    pool = list(builders)
    pairs = []
    unresolved_images = SortedSet()
    for image in strip_tags(images, warn=warn):
        idx = find_exactly_one_matching_builder(pool, image)
        developer_logger.debug(f"Image {image} matched builder index {idx} of {pool}")
        if idx != -1:
            pairs.append(BuilderImagePair(image_name=image, builder=pool.pop(idx)))
        else:
            unresolved_images.add(image)
    logger.debug(f"Matched {len(pairs)} images, {len(unresolved_images)} unresolved, {len(pool)} builders left")
    return pairs, pool, unresolved_images.values()


def workspace_of(path: str) -> str:
    return os.path.dirname(os.path.normpath(path)) or ROOT_WORKSPACE


def artifacts(pairs: typing.Iterable[BuilderImagePair], out: Sink = echo_info) -> typing.List[Artifact]:
    """
    Turns each pair into an artifact, in order. The workspace is only set when the builder lives below the project
    root.
    """
    result = []
    for pair in pairs:
        artifact = Artifact(image_name=pair.image_name)

        workspace = workspace_of(pair.builder.path())
        if workspace != ROOT_WORKSPACE:
            out(f"using non standard workspace: {workspace}")
            artifact.workspace = workspace

        pair.builder.update_artifact(artifact)
        result.append(artifact)
    return result
