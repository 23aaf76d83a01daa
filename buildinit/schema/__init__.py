"""
Data model of the config document ``buildinit init`` writes.
"""

from .artifact import (
    API_VERSION,
    KIND,
    Artifact,
    BuildConfig,
    BuildpackArtifact,
    DockerArtifact,
    JibArtifact,
    KoArtifact,
    ManifestsConfig,
    Metadata,
    ProjectConfig,
)
