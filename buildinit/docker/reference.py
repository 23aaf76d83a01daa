"""
Parsing of container image references such as ``gcr.io/project/app:v1`` or ``app@sha256:<hex>``.

The grammar is the one used by the docker distribution project::

    reference       := name [ ":" tag ] [ "@" digest ]
    name            := [domain '/'] path-component ['/' path-component]*
    domain          := domain-component ['.' domain-component]* [':' port-number]
    path-component  := alpha-numeric [separator alpha-numeric]*
    tag             := [\\w][\\w.-]{0,127}
    digest          := algorithm ":" hex (at least 32 characters)
"""

import re
import typing
from dataclasses import dataclass

from buildinit.exceptions.user import ReferenceParseError

NAME_TOTAL_LENGTH_MAX = 255

_ALPHANUMERIC = r"[a-z0-9]+"
_SEPARATOR = r"(?:[._]|__|[-]+)"
_PATH_COMPONENT = rf"{_ALPHANUMERIC}(?:{_SEPARATOR}{_ALPHANUMERIC})*"
_DOMAIN_COMPONENT = r"(?:[a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])"
_DOMAIN = rf"{_DOMAIN_COMPONENT}(?:\.{_DOMAIN_COMPONENT})*(?::[0-9]+)?"
_NAME = rf"(?:{_DOMAIN}/)?{_PATH_COMPONENT}(?:/{_PATH_COMPONENT})*"
_TAG = r"[\w][\w.-]{0,127}"
_DIGEST = r"[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}"

REFERENCE_REGEX = re.compile(rf"^({_NAME})(?::({_TAG}))?(?:@({_DIGEST}))?$")

DEFAULT_TAG = "latest"


@dataclass(frozen=True)
class ImageReference:
    """
    A parsed image reference.

    ``base_name`` is the reference with its tag and digest removed, e.g. ``gcr.io/project/app`` for
    ``gcr.io/project/app:v1``. ``domain`` is empty when the name has no registry part.
    """

    base_name: str
    domain: str = ""
    path: str = ""
    tag: str = ""
    digest: str = ""
    fully_qualified: bool = False

    def __str__(self):
        s = self.base_name
        if self.tag:
            s += f":{self.tag}"
        if self.digest:
            s += f"@{self.digest}"
        return s


def split_domain(name: str) -> typing.Tuple[str, str]:
    """
    Splits a repository name into its registry domain and the remaining path. The first component is only a domain
    if it looks like a host: it contains a ``.`` or a ``:``, or it is ``localhost``.
    """
    i = name.find("/")
    if i == -1:
        return "", name
    first = name[:i]
    if "." in first or ":" in first or first == "localhost":
        return first, name[i + 1 :]
    return "", name


def parse_reference(image: str) -> ImageReference:
    """
    Parses ``image`` into an :py:class:`ImageReference`.

    :raises ReferenceParseError: if ``image`` is not a valid reference. Templated names such as ``{{.IMAGE}}`` are
        rejected here too.
    """
    if not image:
        raise ReferenceParseError(image, "repository name must have at least one component")

    m = REFERENCE_REGEX.match(image)
    if m is None:
        if REFERENCE_REGEX.match(image.lower()) is not None:
            raise ReferenceParseError(image, "repository name must be lowercase")
        raise ReferenceParseError(image, "invalid reference format")

    name, tag, digest = m.group(1), m.group(2) or "", m.group(3) or ""
    if len(name) > NAME_TOTAL_LENGTH_MAX:
        raise ReferenceParseError(
            image, f"repository name must not be more than {NAME_TOTAL_LENGTH_MAX} characters"
        )

    domain, path = split_domain(name)
    fully_qualified = bool(digest) or (bool(tag) and tag != DEFAULT_TAG)
    return ImageReference(
        base_name=name,
        domain=domain,
        path=path,
        tag=tag,
        digest=digest,
        fully_qualified=fully_qualified,
    )
