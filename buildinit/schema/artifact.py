import typing
from dataclasses import dataclass, field

from mashumaro import field_options
from mashumaro.config import BaseConfig
from mashumaro.mixins.yaml import DataClassYAMLMixin

API_VERSION = "buildinit/v1"
KIND = "Config"


class _OmitNoneConfig(BaseConfig):
    omit_none = True
    serialize_by_alias = True


@dataclass
class DockerArtifact(DataClassYAMLMixin):
    """Builds the image with ``docker build`` from a Dockerfile relative to the workspace."""

    dockerfile: str = "Dockerfile"

    class Config(_OmitNoneConfig):
        pass


@dataclass
class BuildpackArtifact(DataClassYAMLMixin):
    builder: str = ""

    class Config(_OmitNoneConfig):
        pass


@dataclass
class JibArtifact(DataClassYAMLMixin):
    """Builds the image with the Jib Maven or Gradle plugin. ``type`` is ``maven`` or ``gradle``."""

    project: typing.Optional[str] = None
    type: typing.Optional[str] = None

    class Config(_OmitNoneConfig):
        pass


@dataclass
class KoArtifact(DataClassYAMLMixin):
    main: typing.Optional[str] = None

    class Config(_OmitNoneConfig):
        pass


@dataclass
class Artifact(DataClassYAMLMixin):
    """
    Describes how to build one image.

    ``workspace`` is left unset when the sources live at the project root; the builder specific field (at most one
    of ``docker``, ``buildpacks``, ``jib`` or ``ko``) is filled in by the builder the image was paired with.
    """

    image_name: str = field(metadata=field_options(alias="image"))
    workspace: typing.Optional[str] = field(default=None, metadata=field_options(alias="context"))
    docker: typing.Optional[DockerArtifact] = None
    buildpacks: typing.Optional[BuildpackArtifact] = None
    jib: typing.Optional[JibArtifact] = None
    ko: typing.Optional[KoArtifact] = None

    class Config(_OmitNoneConfig):
        pass


@dataclass
class BuildConfig(DataClassYAMLMixin):
    artifacts: typing.List[Artifact] = field(default_factory=list)

    class Config(_OmitNoneConfig):
        pass


@dataclass
class ManifestsConfig(DataClassYAMLMixin):
    raw_yaml: typing.List[str] = field(default_factory=list, metadata=field_options(alias="rawYaml"))

    class Config(_OmitNoneConfig):
        pass


@dataclass
class Metadata(DataClassYAMLMixin):
    name: typing.Optional[str] = None

    class Config(_OmitNoneConfig):
        pass


@dataclass
class ProjectConfig(DataClassYAMLMixin):
    """The document written by ``buildinit init``."""

    api_version: str = field(default=API_VERSION, metadata=field_options(alias="apiVersion"))
    kind: str = KIND
    metadata: Metadata = field(default_factory=Metadata)
    build: BuildConfig = field(default_factory=BuildConfig)
    manifests: typing.Optional[ManifestsConfig] = None

    class Config(_OmitNoneConfig):
        pass
