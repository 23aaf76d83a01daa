import os
import re
import typing
from dataclasses import dataclass

from buildinit.build.builder import InitBuilder
from buildinit.loggers import logger
from buildinit.schema import Artifact, DockerArtifact

_DIRECTIVE = re.compile(r"^#\s*[a-zA-Z]+\s*=")
_INSTRUCTION = re.compile(r"^\s*([A-Za-z]+)(\s|$)")


@dataclass(frozen=True)
class DockerBuilder(InitBuilder):
    """A Dockerfile. Dockerfiles never name the image they build."""

    file: str

    def name(self) -> str:
        return "Docker"

    def configured_image(self) -> typing.Optional[str]:
        return None

    def path(self) -> str:
        return self.file

    def update_artifact(self, artifact: Artifact):
        artifact.docker = DockerArtifact(dockerfile=os.path.basename(self.file))


def is_dockerfile_name(filename: str) -> bool:
    """
    ``Dockerfile``, ``Dockerfile.<variant>``, ``<variant>.Dockerfile`` and ``<variant>.dockerfile``.
    """
    lowered = filename.lower()
    return lowered == "dockerfile" or lowered.startswith("dockerfile.") or lowered.endswith(".dockerfile")


def validate_dockerfile(path: str) -> bool:
    """
    Returns True if the first instruction of the file at ``path`` is ``FROM``. Parser directives, comments, blank
    lines and ``ARG`` instructions may precede it.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {path} as a Dockerfile: {e}")
        return False

    continued = False
    for line in lines:
        stripped = line.strip()
        if continued:
            continued = stripped.endswith("\\")
            continue
        if not stripped or stripped.startswith("#") or _DIRECTIVE.match(stripped):
            continue
        m = _INSTRUCTION.match(stripped)
        if m is None:
            return False
        instruction = m.group(1).upper()
        if instruction == "FROM":
            return True
        if instruction != "ARG":
            return False
        continued = stripped.endswith("\\")
    return False
