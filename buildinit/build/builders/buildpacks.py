import typing
from dataclasses import dataclass

from buildinit.build.builder import InitBuilder
from buildinit.configuration import DEFAULT_BUILDPACKS_BUILDER
from buildinit.schema import Artifact, BuildpackArtifact

# Files that mark a directory as something a buildpack knows how to build.
BUILDPACKS_PROJECT_FILES = [
    "package.json",
    "go.mod",
    "requirements.txt",
    "setup.py",
    "Pipfile",
    "pyproject.toml",
    "pom.xml",
    "build.gradle",
    "build.gradle.kts",
]


@dataclass(frozen=True)
class BuildpacksBuilder(InitBuilder):
    file: str
    builder: str = DEFAULT_BUILDPACKS_BUILDER

    def name(self) -> str:
        return "Buildpacks"

    def configured_image(self) -> typing.Optional[str]:
        return None

    def path(self) -> str:
        return self.file

    def update_artifact(self, artifact: Artifact):
        artifact.buildpacks = BuildpackArtifact(builder=self.builder)


def is_buildpacks_project_file(filename: str) -> bool:
    return filename in BUILDPACKS_PROJECT_FILES
