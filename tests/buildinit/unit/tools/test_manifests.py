import textwrap

from buildinit.tools.manifests import images_in_documents, load_kubernetes_documents, read_kubernetes_manifest

DEPLOYMENT = textwrap.dedent(
    """\
    apiVersion: apps/v1
    kind: Deployment
    metadata:
      name: web
    spec:
      template:
        spec:
          initContainers:
          - name: migrate
            image: gcr.io/project/migrate:v1
          containers:
          - name: web
            image: gcr.io/project/web:v2
          - name: sidecar
            image: gcr.io/project/web:v2
    ---
    apiVersion: v1
    kind: Pod
    metadata:
      name: db
    spec:
      containers:
      - name: db
        image: postgres
    """
)


def test_parse_images(tmp_path):
    p = tmp_path / "k8s.yaml"
    p.write_text(DEPLOYMENT)
    assert read_kubernetes_manifest(str(p)) == [
        "gcr.io/project/migrate:v1",
        "gcr.io/project/web:v2",
        "gcr.io/project/web:v2",
        "postgres",
    ]


def test_non_kubernetes_documents_are_dropped(tmp_path):
    p = tmp_path / "values.yaml"
    p.write_text("image: nginx\nreplicas: 2\n---\n- a\n- b\n---\n")
    assert load_kubernetes_documents(str(p)) == []
    assert read_kubernetes_manifest(str(p)) is None


def test_invalid_yaml(tmp_path):
    p = tmp_path / "broken.yaml"
    p.write_text("apiVersion: v1\nkind: [Pod\n")
    assert load_kubernetes_documents(str(p)) == []
    assert read_kubernetes_manifest(str(p)) is None


def test_read_kubernetes_manifest(tmp_path):
    p = tmp_path / "pod.yml"
    p.write_text(DEPLOYMENT)
    assert read_kubernetes_manifest(str(p)) == images_in_documents(load_kubernetes_documents(str(p)))

    txt = tmp_path / "pod.txt"
    txt.write_text(DEPLOYMENT)
    assert read_kubernetes_manifest(str(txt)) is None
    assert read_kubernetes_manifest(str(tmp_path / "missing.yaml")) is None


def test_buildinit_configs_are_not_manifests(tmp_path):
    p = tmp_path / "build.yaml"
    p.write_text(
        "apiVersion: buildinit/v1\nkind: Config\nbuild:\n  artifacts:\n  - image: gcr.io/project/web\n"
    )
    assert load_kubernetes_documents(str(p)) == []
    assert read_kubernetes_manifest(str(p)) is None

    mixed = tmp_path / "mixed.yaml"
    mixed.write_text(p.read_text() + "---\n" + DEPLOYMENT)
    assert read_kubernetes_manifest(str(mixed))[0] == "gcr.io/project/migrate:v1"
