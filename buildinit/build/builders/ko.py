import typing
from dataclasses import dataclass

from buildinit.build.builder import InitBuilder
from buildinit.schema import Artifact, KoArtifact

GO_MOD = "go.mod"


@dataclass(frozen=True)
class KoBuilder(InitBuilder):
    """A Go module built with ko."""

    file: str

    def name(self) -> str:
        return "Ko"

    def configured_image(self) -> typing.Optional[str]:
        return None

    def path(self) -> str:
        return self.file

    def update_artifact(self, artifact: Artifact):
        artifact.ko = KoArtifact()
