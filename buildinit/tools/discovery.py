import os
import typing
from dataclasses import dataclass, field

from buildinit.build.builder import InitBuilder
from buildinit.build.builders import BuildpacksBuilder, DockerBuilder, JibBuilder, KoBuilder
from buildinit.build.builders.buildpacks import is_buildpacks_project_file
from buildinit.build.builders.docker import is_dockerfile_name, validate_dockerfile
from buildinit.build.builders.ko import GO_MOD
from buildinit.configuration import InitConfig
from buildinit.loggers import logger
from buildinit.tools.ignore import BuildInitIgnore, IgnoreGroup, StandardIgnore
from buildinit.tools.jib import GRADLE_BUILD_FILES, read_gradle_project, read_maven_project
from buildinit.tools.manifests import read_kubernetes_manifest


@dataclass
class DiscoveryResult:
    builders: typing.List[InitBuilder] = field(default_factory=list)
    manifests: typing.List[str] = field(default_factory=list)
    # Images referenced by the manifests, in walk order
    images: typing.List[str] = field(default_factory=list)


def _detect_jib(root: str, rel_path: str) -> typing.Optional[JibBuilder]:
    filename = os.path.basename(rel_path)
    abs_path = os.path.join(root, rel_path)
    if filename == "pom.xml":
        settings = read_maven_project(abs_path)
    elif filename in GRADLE_BUILD_FILES:
        settings = read_gradle_project(abs_path)
    else:
        return None
    if settings is None:
        return None
    return JibBuilder(file=rel_path, project=settings.project, image=settings.image)


def _builders_in_dir(
    root: str, rel_dir: str, files: typing.List[str], cfg: InitConfig
) -> typing.List[InitBuilder]:
    builders: typing.List[InitBuilder] = []
    for filename in files:
        rel_path = os.path.normpath(os.path.join(rel_dir, filename))
        if is_dockerfile_name(filename) and validate_dockerfile(os.path.join(root, rel_path)):
            builders.append(DockerBuilder(file=rel_path))
            continue
        jib = _detect_jib(root, rel_path)
        if jib is not None:
            builders.append(jib)

    if cfg.enable_ko and GO_MOD in files:
        builders.append(KoBuilder(file=os.path.normpath(os.path.join(rel_dir, GO_MOD))))

    # Buildpacks are only offered where nothing more specific was found.
    if cfg.enable_buildpacks and not builders:
        for filename in files:
            if is_buildpacks_project_file(filename):
                rel_path = os.path.normpath(os.path.join(rel_dir, filename))
                builders.append(BuildpacksBuilder(file=rel_path, builder=cfg.buildpacks_builder))
                break
    return builders


def walk(root: str, cfg: typing.Optional[InitConfig] = None, exclude: typing.Iterable[str] = ()) -> DiscoveryResult:
    """
    Walks the project at ``root`` in sorted order and returns the builders, the Kubernetes manifests and the images
    those manifests reference. All returned paths are relative to ``root``.

    :param root: project root
    :param cfg: which kinds of builders to look for
    :param exclude: relative paths to leave out, e.g. the config file being generated
    """
    cfg = cfg or InitConfig()
    excluded = {os.path.normpath(p) for p in exclude}
    ignore = IgnoreGroup(root, [StandardIgnore, BuildInitIgnore], extra_patterns=cfg.skip_dirs)
    result = DiscoveryResult()

    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, root)
        dirnames[:] = sorted(d for d in dirnames if not ignore.is_ignored(os.path.normpath(os.path.join(rel_dir, d))))
        files = sorted(
            f
            for f in filenames
            if os.path.normpath(os.path.join(rel_dir, f)) not in excluded
            and not ignore.is_ignored(os.path.normpath(os.path.join(rel_dir, f)))
        )

        result.builders.extend(_builders_in_dir(root, rel_dir, files, cfg))
        for filename in files:
            rel_path = os.path.normpath(os.path.join(rel_dir, filename))
            images = read_kubernetes_manifest(os.path.join(root, rel_path))
            if images is not None:
                result.manifests.append(rel_path)
                result.images.extend(images)

    logger.info(f"Discovered {len(result.builders)} builders and {len(result.manifests)} manifests in {root}")
    return result
