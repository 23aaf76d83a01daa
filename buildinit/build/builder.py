import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass

from buildinit.schema import Artifact


class InitBuilder(ABC):
    """
    A build configuration found in the project, e.g. a Dockerfile, that can produce one container image.

    Builders are handed to the matcher by discovery and are only ever read from, except for
    :py:meth:`update_artifact` which is called once for the artifact the builder was paired with.
    """

    @abstractmethod
    def name(self) -> str:
        """Human readable name of the build tool, e.g. ``Docker``."""
        raise NotImplementedError("This method is not implemented in the base class.")

    def describe(self) -> str:
        """
        Short description used when listing builders to the user.
        """
        return f"{self.name()} ({self.path()})"

    @abstractmethod
    def configured_image(self) -> typing.Optional[str]:
        """
        The image this builder is statically configured to produce, if its configuration declares one.
        """
        raise NotImplementedError("This method is not implemented in the base class.")

    @abstractmethod
    def path(self) -> str:
        """
        Location of the build configuration, relative to the project root.
        """
        raise NotImplementedError("This method is not implemented in the base class.")

    @abstractmethod
    def update_artifact(self, artifact: Artifact):
        """
        Fill in the builder specific fields of ``artifact``.

        Args:
            artifact: artifact of the image this builder was paired with.
        """
        raise NotImplementedError("This method is not implemented in the base class.")

    def __repr__(self):
        return f"{type(self).__name__}({self.path()!r})"


@dataclass(frozen=True)
class BuilderImagePair:
    image_name: str
    builder: InitBuilder
