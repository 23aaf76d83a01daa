import os

import pytest

from buildinit.build.builders import BuildpacksBuilder, DockerBuilder, JibBuilder, KoBuilder
from buildinit.configuration import InitConfig
from buildinit.tools import discovery
from buildinit.tools.ignore import BuildInitIgnore, IgnoreGroup, StandardIgnore

POD = "apiVersion: v1\nkind: Pod\nmetadata:\n  name: {name}\nspec:\n  containers:\n  - name: {name}\n    image: {name}\n"


def _write(root, rel_path, content=""):
    path = os.path.join(str(root), rel_path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        f.write(content)


@pytest.fixture
def project(tmp_path):
    _write(tmp_path, "Dockerfile", "FROM busybox\n")
    _write(tmp_path, "web/Dockerfile", "FROM nginx\n")
    _write(tmp_path, "web/Dockerfile.broken", "RUN echo\n")
    _write(tmp_path, "web/package.json", "{}")
    _write(tmp_path, "api/package.json", "{}")
    _write(tmp_path, "cmd/go.mod", "module example.com/cmd\n")
    _write(
        tmp_path,
        "java/build.gradle",
        "plugins {\n  id 'com.google.cloud.tools.jib'\n}\njib.to.image = 'java'\n",
    )
    _write(tmp_path, "k8s/web.yaml", POD.format(name="web"))
    _write(tmp_path, "k8s/values.yaml", "replicas: 1\n")
    _write(tmp_path, "node_modules/dep/Dockerfile", "FROM node\n")
    _write(tmp_path, ".git/Dockerfile", "FROM scratch\n")
    return tmp_path


def test_walk_defaults(project):
    result = discovery.walk(str(project))

    assert result.builders == [
        DockerBuilder("Dockerfile"),
        JibBuilder("java/build.gradle", image="java"),
        DockerBuilder("web/Dockerfile"),
    ]
    assert result.manifests == ["k8s/web.yaml"]


def test_walk_optional_builders(project):
    cfg = InitConfig(enable_buildpacks=True, enable_ko=True, buildpacks_builder="custom")

    result = discovery.walk(str(project), cfg)

    assert result.builders == [
        DockerBuilder("Dockerfile"),
        BuildpacksBuilder("api/package.json", builder="custom"),
        KoBuilder("cmd/go.mod"),
        JibBuilder("java/build.gradle", image="java"),
        DockerBuilder("web/Dockerfile"),
    ]


def test_walk_skip_dirs_and_exclude(project):
    cfg = InitConfig(skip_dirs=["web", "java"])

    result = discovery.walk(str(project), cfg, exclude=["k8s/web.yaml"])

    assert result.builders == [DockerBuilder("Dockerfile")]
    assert result.manifests == []


def test_walk_buildinitignore(project):
    _write(project, ".buildinitignore", "# generated\nweb\nDockerfile\n")

    result = discovery.walk(str(project))

    assert result.builders == [JibBuilder("java/build.gradle", image="java")]


def test_standard_ignore(tmp_path):
    ignore = StandardIgnore(str(tmp_path), ["build"])
    assert not ignore.is_ignored(".")
    assert ignore.is_ignored(".git")
    assert ignore.is_ignored("a/node_modules")
    assert ignore.is_ignored("vendor")
    assert ignore.is_ignored("a/b/build")
    assert ignore.is_ignored(os.path.join(str(tmp_path), "a", ".hidden"))
    assert not ignore.is_ignored("src/app")


def test_ignore_group(tmp_path):
    _write(tmp_path, ".buildinitignore", "tmp/**\n")

    ignore = IgnoreGroup(str(tmp_path), [StandardIgnore, BuildInitIgnore])

    assert ignore.is_ignored("tmp/Dockerfile")
    assert ignore.is_ignored("vendor")
    assert not ignore.is_ignored("src/Dockerfile")


def test_walk_skips_generated_configs(project):
    _write(
        project,
        "old/build.yaml",
        "apiVersion: buildinit/v1\nkind: Config\nbuild:\n  artifacts:\n  - image: stale\n",
    )

    result = discovery.walk(str(project))

    assert result.manifests == ["k8s/web.yaml"]
    assert result.images == ["web"]
