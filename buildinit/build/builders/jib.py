import os
import typing
from dataclasses import dataclass

from buildinit.build.builder import InitBuilder
from buildinit.schema import Artifact, JibArtifact

JIB_MAVEN = "maven"
JIB_GRADLE = "gradle"

_PLUGIN_NAMES = {
    JIB_MAVEN: "Jib Maven Plugin",
    JIB_GRADLE: "Jib Gradle Plugin",
}


@dataclass(frozen=True)
class JibBuilder(InitBuilder):
    """
    A Maven or Gradle build that uses the Jib plugin. Unlike Dockerfiles, the plugin configuration usually names the
    image it produces.

    Args:
        file: the pom.xml or build.gradle(.kts) file.
        project: the module to build in a multi-module project.
        image: the image declared in the plugin configuration.
    """

    file: str
    project: typing.Optional[str] = None
    image: typing.Optional[str] = None

    @property
    def jib_type(self) -> str:
        return JIB_MAVEN if os.path.basename(self.file) == "pom.xml" else JIB_GRADLE

    def name(self) -> str:
        return _PLUGIN_NAMES[self.jib_type]

    def describe(self) -> str:
        if self.project:
            return f"{self.name()} ({self.project}, {self.file})"
        return super().describe()

    def configured_image(self) -> typing.Optional[str]:
        return self.image

    def path(self) -> str:
        return self.file

    def update_artifact(self, artifact: Artifact):
        artifact.jib = JibArtifact(project=self.project, type=self.jib_type)
