import pytest

from buildinit.build.builders import DockerBuilder, JibBuilder
from buildinit.exceptions.user import BuildInitValueException, UnresolvedBuilderImagesError
from buildinit.initializer import BuildInitializer, parse_cli_artifact


def _initializer(builders, images, **kwargs):
    kwargs.setdefault("warn", lambda _: None)
    kwargs.setdefault("out", lambda _: None)
    return BuildInitializer(builders, images, **kwargs)


def test_parse_cli_artifact():
    assert parse_cli_artifact("web/Dockerfile=gcr.io/project/web") == ("web/Dockerfile", "gcr.io/project/web")
    assert parse_cli_artifact("a=b=c") == ("a=b", "c")


@pytest.mark.parametrize("value", ["web/Dockerfile", "=image", "web/Dockerfile="])
def test_parse_cli_artifact_invalid(value):
    with pytest.raises(BuildInitValueException) as e:
        parse_cli_artifact(value)
    assert "<path>=<image>" in str(e.value)


def test_resolve_configured_images():
    jib = JibBuilder("java/pom.xml", image="gcr.io/project/java")
    docker = DockerBuilder("web/Dockerfile")
    init = _initializer([docker, jib], ["gcr.io/project/java:v1", "web"])

    pairs = init.resolve()

    assert [(p.image_name, p.builder) for p in pairs] == [("gcr.io/project/java", jib), ("web", docker)]
    assert init.unresolved_images == []
    assert init.remaining_builders == []


def test_resolve_single_leftover_pairs():
    docker = DockerBuilder("Dockerfile")
    init = _initializer([docker], ["app:v1"])

    [pair] = init.resolve()

    assert pair.image_name == "app"
    assert pair.builder == docker


def test_resolve_ambiguous_raises():
    init = _initializer([DockerBuilder("a/Dockerfile"), DockerBuilder("b/Dockerfile")], ["b", "a"])

    with pytest.raises(UnresolvedBuilderImagesError) as e:
        init.resolve()

    assert e.value.images == ["a", "b"]
    assert e.value.builders == ["Docker (a/Dockerfile)", "Docker (b/Dockerfile)"]


def test_resolve_ambiguous_forced(warnings_sink):
    init = _initializer(
        [DockerBuilder("a/Dockerfile"), DockerBuilder("b/Dockerfile")],
        ["a", "b"],
        force=True,
        warn=warnings_sink.append,
    )

    assert init.resolve() == []
    assert init.unresolved_images == ["a", "b"]
    assert len(init.remaining_builders) == 2
    assert warnings_sink == [
        "Leaving images [a, b] without a builder",
        "Leaving builders [Docker (a/Dockerfile), Docker (b/Dockerfile)] unused",
    ]


def test_resolve_leftovers_on_one_side_only():
    init = _initializer([], ["a", "b"])
    assert init.resolve() == []
    assert init.unresolved_images == ["a", "b"]

    builder = DockerBuilder("Dockerfile")
    init = _initializer([builder], [])
    assert init.resolve() == []
    assert init.remaining_builders == [builder]


def test_resolve_cli_artifacts():
    a = DockerBuilder("a/Dockerfile")
    b = DockerBuilder("b/Dockerfile")
    init = _initializer([a, b], ["a:v1", "b:v1"], cli_artifacts=[("./a/Dockerfile", "a:v2")])

    pairs = init.resolve()

    assert [(p.image_name, p.builder) for p in pairs] == [("a", a), ("b", b)]


def test_resolve_cli_artifact_unknown_path():
    init = _initializer([DockerBuilder("a/Dockerfile")], ["a"], cli_artifacts=[("c/Dockerfile", "a")])

    with pytest.raises(BuildInitValueException) as e:
        init.resolve()
    assert "c/Dockerfile" in str(e.value)


def test_resolve_cli_artifact_digest():
    init = _initializer(
        [DockerBuilder("a/Dockerfile")], [], cli_artifacts=[("a/Dockerfile", "a@sha256:" + "f" * 64)]
    )

    with pytest.raises(BuildInitValueException):
        init.resolve()


def test_resolve_is_repeatable():
    docker = DockerBuilder("Dockerfile")
    init = _initializer([docker], ["app"])
    assert init.resolve() == init.resolve()
    assert len(init.pairs) == 1


def test_analyze(warnings_sink):
    jib = JibBuilder("pom.xml", image="java")
    docker = DockerBuilder("web/Dockerfile")
    init = _initializer([jib, docker], ["web:v1", "java", "web:v2", "{{.IMAGE}}"], warn=warnings_sink.append)

    assert init.analyze() == {
        "builders": [
            {"name": "Jib Maven Plugin", "path": "pom.xml", "image": "java"},
            {"name": "Docker", "path": "web/Dockerfile", "image": None},
        ],
        "images": ["web", "java"],
    }
    assert len(warnings_sink) == 1


def test_generate_config():
    out = []
    init = _initializer(
        [DockerBuilder("web/Dockerfile"), JibBuilder("pom.xml", image="java")],
        ["java:v1", "web"],
        out=out.append,
    )
    init.resolve()

    config = init.generate_config(manifests=["k8s/deployment.yaml"], name="demo")

    assert config.to_dict() == {
        "apiVersion": "buildinit/v1",
        "kind": "Config",
        "metadata": {"name": "demo"},
        "build": {
            "artifacts": [
                {"image": "java", "jib": {"type": "maven"}},
                {"image": "web", "context": "web", "docker": {"dockerfile": "Dockerfile"}},
            ]
        },
        "manifests": {"rawYaml": ["k8s/deployment.yaml"]},
    }
    assert out == ["using non standard workspace: web"]


def test_generate_config_without_manifests():
    init = _initializer([], [])
    init.resolve()
    assert init.generate_config().to_dict() == {
        "apiVersion": "buildinit/v1",
        "kind": "Config",
        "metadata": {},
        "build": {"artifacts": []},
    }
