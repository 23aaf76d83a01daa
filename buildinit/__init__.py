"""
=====================
buildinit
=====================

buildinit looks at a project, finds the build files it contains (Dockerfiles, Jib, buildpacks and ko projects) and
the images its Kubernetes manifests deploy, pairs them up and writes a build config.

.. code-block:: python

    from buildinit import BuildInitializer, DockerBuilder

    initializer = BuildInitializer([DockerBuilder("web/Dockerfile")], ["gcr.io/project/web:v1"])
    initializer.resolve()
    initializer.artifacts()
"""

from buildinit.loggers import logger  # noqa: I001
from buildinit.build import (
    BuilderImagePair,
    InitBuilder,
    SortedSet,
    artifacts,
    match_builders_to_images,
    strip_tags,
)
from buildinit.build.builders import BuildpacksBuilder, DockerBuilder, JibBuilder, KoBuilder
from buildinit.configuration import InitConfig
from buildinit.docker import ImageReference, parse_reference
from buildinit.initializer import BuildInitializer
from buildinit.schema import Artifact

__version__ = "0.0.0+develop"