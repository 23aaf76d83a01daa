from .buildpacks import BuildpacksBuilder
from .docker import DockerBuilder
from .jib import JibBuilder
from .ko import KoBuilder

__all__ = ["BuildpacksBuilder", "DockerBuilder", "JibBuilder", "KoBuilder"]
